import random
from itertools import combinations

from bracketry.pairing.round_robin import (
    build_championship,
    build_group_stage,
    group_name,
    split_evenly,
)


def _pairs(matches):
    return [frozenset(m.participant_ids) for m in matches]


def test_group_names():
    assert group_name(0) == "Group A"
    assert group_name(3) == "Group D"
    assert group_name(26) == "Group 27"


def test_split_evenly_front_loads_remainder():
    assert split_evenly(list(range(7)), 3) == [[0, 1, 2], [3, 4], [5, 6]]
    assert split_evenly(list(range(4)), 2) == [[0, 1], [2, 3]]


def test_group_stage_pairs_everyone_within_each_group(make_players):
    players = make_players(8)
    matches, groups = build_group_stage(players, 2, random.Random(3))

    assert [g.name for g in groups] == ["Group A", "Group B"]
    assert sorted(pid for g in groups for pid in g.participant_ids) == sorted(
        p.id for p in players
    )
    assert len(matches) == 12
    assert {m.round for m in matches} == {1}

    for group in groups:
        own = [m for m in matches if m.group_id == group.id]
        assert len(own) == 6
        expected = {frozenset(pair) for pair in combinations(group.participant_ids, 2)}
        assert set(_pairs(own)) == expected
        assert [s.participant_id for s in group.standings] == group.participant_ids
        assert all(s.points == 0 for s in group.standings)


def test_group_count_is_reduced_for_small_fields(make_players):
    matches, groups = build_group_stage(make_players(5), 4, random.Random(1))
    assert len(groups) == 2
    assert sorted(len(g.participant_ids) for g in groups) == [2, 3]
    assert len(matches) == 3 + 1


def test_group_draw_is_reproducible(make_players):
    players = make_players(12)
    _, first = build_group_stage(players, 3, random.Random(9))
    _, second = build_group_stage(players, 3, random.Random(9))
    assert [g.participant_ids for g in first] == [g.participant_ids for g in second]


def test_championship_plays_every_pair_once(make_players):
    matches, groups = build_championship(make_players(5))

    assert len(matches) == 10
    assert {m.round for m in matches} == {1}
    assert len(set(_pairs(matches))) == 10
    assert len(groups) == 1
    assert groups[0].participant_ids == [f"p{i}" for i in range(1, 6)]
    assert all(m.group_id is None for m in matches)


def test_home_and_away_mirrors_the_first_legs(make_players):
    matches, _ = build_championship(make_players(4), home_and_away=True)
    first_legs = {m.position: m for m in matches if m.round == 1}
    return_legs = {m.position: m for m in matches if m.round == 2}

    assert len(first_legs) == len(return_legs) == 6
    for position, leg in first_legs.items():
        mirror = return_legs[position]
        assert mirror.participant1_id == leg.participant2_id
        assert mirror.participant2_id == leg.participant1_id
