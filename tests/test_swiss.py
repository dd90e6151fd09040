from bracketry.constants import MATCH_COMPLETED, SEEDING_RANKED
from bracketry.models.participant import Participant
from bracketry.models.tournament.match import Match, MatchScore
from bracketry.models.tournament.standing import Standing
from bracketry.pairing.swiss import (
    build_first_swiss_round,
    build_next_swiss_round,
    pair_swiss_standings,
    swiss_pairing_order,
)


def _pairs(matches):
    return [(m.participant1_id, m.participant2_id) for m in matches]


def _played(round_number, position, first, second, winner):
    return Match(
        round=round_number,
        position=position,
        participant1_id=first,
        participant2_id=second,
        status=MATCH_COMPLETED,
        score=MatchScore(1, 0) if winner == first else MatchScore(0, 1),
        winner_id=winner,
        loser_id=second if winner == first else first,
    )


def test_first_round_pairs_top_half_against_bottom_half(make_players):
    matches = build_first_swiss_round(make_players(6), SEEDING_RANKED)
    assert _pairs(matches) == [("p1", "p4"), ("p2", "p5"), ("p3", "p6")]
    assert [m.position for m in matches] == [0, 1, 2]


def test_first_round_odd_field_gives_middle_player_a_bye(make_players):
    matches = build_first_swiss_round(make_players(5), SEEDING_RANKED)
    assert _pairs(matches) == [("p1", "p4"), ("p2", "p5"), ("p3", None)]

    bye = matches[2]
    assert bye.is_bye
    assert bye.status == MATCH_COMPLETED
    assert bye.winner_id == "p3"


def test_first_round_puts_unseeded_players_last():
    players = [
        Participant(id="x", name="X"),
        Participant(id="b", name="B", seed=2),
        Participant(id="a", name="A", seed=1),
        Participant(id="y", name="Y"),
    ]
    matches = build_first_swiss_round(players, SEEDING_RANKED)
    assert _pairs(matches) == [("a", "x"), ("b", "y")]


def test_first_round_keeps_large_seeds_ahead_of_unseeded_players():
    players = [
        Participant(id="x", name="X"),
        Participant(id="big", name="Big", seed=1000),
        Participant(id="y", name="Y"),
        Participant(id="a", name="A", seed=1),
    ]
    matches = build_first_swiss_round(players, SEEDING_RANKED)
    assert _pairs(matches) == [("a", "x"), ("big", "y")]


def test_closest_score_pairing():
    ranked = [
        Standing(participant_id="a", points=6),
        Standing(participant_id="b", points=6),
        Standing(participant_id="c", points=3),
        Standing(participant_id="d", points=3),
    ]
    assert pair_swiss_standings(ranked) == [("a", "b"), ("c", "d")]


def test_rematches_are_avoided_when_possible():
    ranked = [
        Standing(participant_id="a", points=6, opponents=["b"]),
        Standing(participant_id="b", points=6, opponents=["a"]),
        Standing(participant_id="c", points=3),
        Standing(participant_id="d", points=3),
    ]
    assert pair_swiss_standings(ranked) == [("a", "c"), ("b", "d")]


def test_rematch_fallback_when_nobody_else_is_left():
    ranked = [
        Standing(participant_id="a", points=3, opponents=["b"]),
        Standing(participant_id="b", points=0, opponents=["a"]),
    ]
    assert pair_swiss_standings(ranked) == [("a", "b")]
    assert pair_swiss_standings(ranked, avoid_rematches=False) == [("a", "b")]


def test_odd_field_bye_goes_last():
    ranked = [
        Standing(participant_id="a", points=3),
        Standing(participant_id="b", points=3),
        Standing(participant_id="c", points=0),
    ]
    assert pair_swiss_standings(ranked) == [("a", "b"), ("c", None)]


def test_pairing_order_uses_buchholz_after_points():
    standings = [
        Standing(participant_id="a", points=3, buchholz=0),
        Standing(participant_id="b", points=3, buchholz=3),
        Standing(participant_id="c", points=6, buchholz=0),
    ]
    assert [s.participant_id for s in swiss_pairing_order(standings)] == [
        "c",
        "b",
        "a",
    ]


def test_next_round_pairs_winners_and_losers(make_players):
    played = [_played(1, 0, "p1", "p3", "p1"), _played(1, 1, "p2", "p4", "p2")]
    matches = build_next_swiss_round(make_players(4), played, 2)

    assert _pairs(matches) == [("p1", "p2"), ("p3", "p4")]
    assert {m.round for m in matches} == {2}


def test_next_round_leaves_out_players_not_listed(make_players):
    played = [_played(1, 0, "p1", "p3", "p1"), _played(1, 1, "p2", "p4", "p2")]
    active = [p for p in make_players(4) if p.id != "p4"]
    matches = build_next_swiss_round(active, played, 2)

    assert _pairs(matches) == [("p1", "p2"), ("p3", None)]
    assert matches[1].is_bye
    assert all("p4" not in m.participant_ids for m in matches)


def test_nobody_is_paired_twice_in_a_round(make_players):
    players = make_players(9)
    played = build_first_swiss_round(players, SEEDING_RANKED)
    for match in played:
        if not match.is_bye:
            match.status = MATCH_COMPLETED
            match.score = MatchScore(1, 0)
            match.winner_id = match.participant1_id

    for round_number in (2, 3):
        new = build_next_swiss_round(players, played, round_number)
        ids = [pid for m in new for pid in m.participant_ids]
        assert sorted(ids) == sorted(p.id for p in players)
        assert sum(1 for m in new if m.is_bye) == 1
        for match in new:
            if not match.is_bye:
                match.status = MATCH_COMPLETED
                match.score = MatchScore(0, 1)
                match.winner_id = match.participant2_id
        played.extend(new)
