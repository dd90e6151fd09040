from bracketry.constants import MATCH_CANCELLED, MATCH_COMPLETED, MATCH_IN_PROGRESS
from bracketry.models.tournament.format_rules import PointsScheme
from bracketry.models.tournament.match import Match, MatchScore
from bracketry.models.tournament.penalty import Penalty
from bracketry.tournament.standings_calculator import calculate_standings

FOOTBALL = PointsScheme(win=3, draw=1, loss=0)


def _result(first, second, score1, score2, position=0):
    winner = None
    if score1 != score2:
        winner = first if score1 > score2 else second
    return Match(
        round=1,
        position=position,
        participant1_id=first,
        participant2_id=second,
        status=MATCH_COMPLETED,
        score=MatchScore(score1, score2),
        winner_id=winner,
    )


def _table(ids, matches, points=FOOTBALL, penalties=()):
    return {
        s.participant_id: s
        for s in calculate_standings(ids, matches, points, penalties)
    }


def _three_way():
    return [
        _result("a", "b", 2, 1, 0),
        _result("a", "c", 1, 1, 1),
        _result("b", "c", 3, 0, 2),
    ]


def test_results_fold_into_standings():
    table = _table(["a", "b", "c"], _three_way())

    a, b, c = table["a"], table["b"], table["c"]
    assert (a.won, a.drawn, a.lost, a.points) == (1, 1, 0, 4)
    assert (b.won, b.drawn, b.lost, b.points) == (1, 0, 1, 3)
    assert (c.won, c.drawn, c.lost, c.points) == (0, 1, 1, 1)
    assert (a.scored_for, a.scored_against, a.differential) == (3, 2, 1)
    assert (b.scored_for, b.scored_against, b.differential) == (4, 2, 2)
    assert (c.scored_for, c.scored_against, c.differential) == (1, 4, -3)
    assert a.opponents == ["b", "c"]


def test_played_is_always_won_drawn_lost():
    for standing in _table(["a", "b", "c"], _three_way()).values():
        assert standing.played == standing.won + standing.drawn + standing.lost
        assert standing.played == 2


def test_buchholz_sums_opponent_points():
    table = _table(["a", "b", "c"], _three_way())
    assert table["a"].buchholz == 3 + 1
    assert table["b"].buchholz == 4 + 1
    assert table["c"].buchholz == 4 + 3


def test_recomputing_gives_the_same_table():
    matches = _three_way()
    penalties = [Penalty(participant_id="b", points=1, reason="late")]
    before = [m.to_dict() for m in matches]

    first = calculate_standings(["a", "b", "c"], matches, FOOTBALL, penalties)
    second = calculate_standings(["a", "b", "c"], matches, FOOTBALL, penalties)

    assert first == second
    assert first is not second
    assert [m.to_dict() for m in matches] == before


def test_unfinished_and_cancelled_matches_are_ignored():
    pending = Match(round=1, position=0, participant1_id="a", participant2_id="b")
    live = _result("a", "b", 2, 0, 1)
    live.status = MATCH_IN_PROGRESS
    cancelled = _result("a", "b", 2, 0, 2)
    cancelled.status = MATCH_CANCELLED

    table = _table(["a", "b"], [pending, live, cancelled])
    assert all(s.played == 0 and s.points == 0 for s in table.values())


def test_bye_is_a_win_without_opponent_or_score():
    bye = Match(
        round=1,
        position=0,
        participant1_id="a",
        status=MATCH_COMPLETED,
        winner_id="a",
    )
    a = _table(["a"], [bye])["a"]
    assert (a.won, a.points, a.played) == (1, 3, 1)
    assert a.scored_for == 0
    assert a.opponents == []
    assert a.buchholz == 0


def test_penalties_reduce_points_after_buchholz():
    penalties = [Penalty(participant_id="b", points=2, reason="late")]
    table = _table(["a", "b", "c"], _three_way(), penalties=penalties)

    assert table["b"].points == 1
    assert table["b"].won == 1
    # opponents' Buchholz still uses b's match points
    assert table["a"].buchholz == 4
    assert table["c"].buchholz == 7


def test_custom_points_scheme():
    table = _table(["a", "b", "c"], _three_way(), PointsScheme(2, 1, 0))
    assert [table[pid].points for pid in "abc"] == [3, 2, 1]


def test_output_follows_requested_order_and_ignores_outsiders():
    matches = _three_way() + [_result("a", "z", 5, 0, 3)]
    standings = calculate_standings(["c", "a"], matches, FOOTBALL)
    assert [s.participant_id for s in standings] == ["c", "a"]
    assert standings[1].points == 7
