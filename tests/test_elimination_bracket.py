import math

import pytest

from bracketry.constants import (
    BRACKET_WINNERS,
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_SINGLE_ELIMINATION,
    MATCH_COMPLETED,
    MATCH_PENDING,
    SEEDING_MANUAL,
)
from bracketry.exceptions import (
    InvalidConfigurationException,
    InvalidParticipantsException,
)
from bracketry.models.participant import Participant
from bracketry.models.tournament.tournament_config import TournamentConfig
from bracketry.pairing import build_bracket
from bracketry.pairing.elimination import (
    build_single_elimination,
    downstream_key,
    feed_slot,
    upstream_key,
)
from bracketry.pairing.seeding import next_power_of_two


def _by_key(matches):
    return {(m.round, m.position): m for m in matches}


def _pair(match):
    return match.participant1_id, match.participant2_id


def test_eight_player_bracket_pairs_seeds_by_seed_order(make_players):
    matches = build_single_elimination(make_players(8), SEEDING_MANUAL)
    index = _by_key(matches)

    assert len(matches) == 7
    assert [_pair(index[(1, p)]) for p in range(4)] == [
        ("p1", "p8"),
        ("p4", "p5"),
        ("p2", "p7"),
        ("p3", "p6"),
    ]
    assert all(index[(2, p)].participant_ids == [] for p in range(2))
    assert index[(3, 0)].status == MATCH_PENDING


def test_five_players_get_three_byes_advanced_to_round_two(make_players):
    matches = build_single_elimination(make_players(5), SEEDING_MANUAL)
    index = _by_key(matches)

    assert len(matches) == 7
    byes = [m for m in matches if m.is_bye]
    assert sorted(m.position for m in byes) == [0, 2, 3]
    for bye in byes:
        assert bye.status == MATCH_COMPLETED
        assert bye.winner_id == bye.participant_ids[0]
        assert bye.score is None

    assert _pair(index[(1, 1)]) == ("p4", "p5")
    assert _pair(index[(2, 0)]) == ("p1", None)
    assert _pair(index[(2, 1)]) == ("p2", "p3")


def test_two_players_play_a_single_final(make_players):
    matches = build_single_elimination(make_players(2), SEEDING_MANUAL)
    assert len(matches) == 1
    assert _pair(matches[0]) == ("p1", "p2")


def test_single_participant_is_rejected(make_players):
    with pytest.raises(InvalidParticipantsException):
        build_single_elimination(make_players(1), SEEDING_MANUAL)


def test_duplicate_seeds_are_rejected():
    players = [
        Participant(id="a", name="A", seed=1),
        Participant(id="b", name="B", seed=1),
    ]
    with pytest.raises(InvalidParticipantsException):
        build_single_elimination(players, SEEDING_MANUAL)


@pytest.mark.parametrize("count", list(range(2, 34)))
def test_bracket_shape(make_players, count):
    matches = build_single_elimination(make_players(count), SEEDING_MANUAL)
    size = next_power_of_two(count)

    assert len(matches) == size - 1
    assert max(m.round for m in matches) == math.ceil(math.log2(count))

    first_round = [m for m in matches if m.round == 1]
    seen = [pid for m in first_round for pid in m.participant_ids]
    assert sorted(seen) == sorted(f"p{i}" for i in range(1, count + 1))
    assert sum(1 for m in first_round if m.is_bye) == size - count
    # no round-1 match is left without anyone
    assert all(m.participant_ids for m in first_round)


def test_final_uses_its_own_best_of(make_players):
    matches = build_single_elimination(
        make_players(4), SEEDING_MANUAL, best_of=3, best_of_final=5
    )
    assert {m.best_of for m in matches if m.round == 1} == {3}
    assert [m.best_of for m in matches if m.round == 2] == [5]


def test_topology_keys():
    assert downstream_key(1, 0) == (2, 0)
    assert downstream_key(1, 1) == (2, 0)
    assert downstream_key(1, 5) == (2, 2)
    assert feed_slot(4) == 1
    assert feed_slot(5) == 2
    assert upstream_key(2, 2, 1) == (1, 4)
    assert upstream_key(2, 2, 2) == (1, 5)


def test_double_elimination_builds_tagged_winners_bracket(make_players):
    config = TournamentConfig(seeding=SEEDING_MANUAL)
    matches, groups = build_bracket(
        make_players(6), FORMAT_DOUBLE_ELIMINATION, config
    )
    assert groups == []
    assert len(matches) == 7
    assert {m.bracket for m in matches} == {BRACKET_WINNERS}


def test_build_bracket_rejects_unknown_format_and_bad_config(make_players):
    with pytest.raises(InvalidConfigurationException):
        build_bracket(make_players(4), "ladder")
    with pytest.raises(InvalidConfigurationException):
        build_bracket(
            make_players(4), FORMAT_SINGLE_ELIMINATION, TournamentConfig(best_of=2)
        )
