from bracketry.constants import MATCH_COMPLETED
from bracketry.models.tournament.match import Match, MatchScore
from bracketry.models.tournament.standing import Standing
from bracketry.tournament.tiebreak_resolver import (
    head_to_head_winner,
    perfect_ties,
    rank_standings,
    sort_standings,
    tied_for_first,
)


def _row(pid, points, scored_for=0, scored_against=0):
    return Standing(
        participant_id=pid,
        points=points,
        scored_for=scored_for,
        scored_against=scored_against,
    )


def _win(winner, loser, position=0):
    return Match(
        round=1,
        position=position,
        participant1_id=loser,
        participant2_id=winner,
        status=MATCH_COMPLETED,
        score=MatchScore(0, 1),
        winner_id=winner,
        loser_id=loser,
    )


def _ids(standings):
    return [s.participant_id for s in standings]


def test_points_then_differential_then_scored_for():
    rows = [
        _row("low", 3, 5, 5),
        _row("diff", 6, 4, 1),
        _row("scored", 6, 9, 6),
        _row("top", 9),
        _row("fewer", 6, 3, 0),
    ]
    assert _ids(sort_standings(rows)) == ["top", "scored", "diff", "fewer", "low"]


def test_perfect_ties_share_a_rank():
    rows = [_row("a", 6), _row("b", 3), _row("c", 3), _row("d", 1)]
    ranked = rank_standings(rows)
    assert [(rank, s.participant_id) for rank, s in ranked] == [
        (1, "a"),
        (2, "b"),
        (2, "c"),
        (4, "d"),
    ]
    assert perfect_ties(rows) == [["b", "c"]]


def test_unresolved_ties_keep_input_order():
    rows = [_row("b", 3), _row("a", 3)]
    assert _ids(sort_standings(rows)) == ["b", "a"]


def test_head_to_head_breaks_a_two_way_tie_when_enabled():
    rows = [_row("b", 3), _row("a", 3)]
    matches = [_win("a", "b")]

    assert _ids(sort_standings(rows, matches)) == ["b", "a"]
    assert _ids(sort_standings(rows, matches, use_head_to_head=True)) == ["a", "b"]
    ranked = rank_standings(rows, matches, use_head_to_head=True)
    assert [rank for rank, _ in ranked] == [1, 2]
    assert tied_for_first(rows, matches, use_head_to_head=True) == ["a"]


def test_head_to_head_does_not_split_three_way_ties():
    rows = [_row("a", 3), _row("b", 3), _row("c", 3)]
    matches = [_win("a", "b", 0), _win("b", "c", 1), _win("c", "a", 2)]
    assert tied_for_first(rows, matches, use_head_to_head=True) == ["a", "b", "c"]


def test_head_to_head_winner_needs_every_meeting():
    assert head_to_head_winner("a", "b", [_win("a", "b")]) == "a"
    assert head_to_head_winner("a", "b", [_win("a", "b"), _win("b", "a", 1)]) is None
    assert head_to_head_winner("a", "b", []) is None


def test_tied_for_first():
    assert tied_for_first([_row("a", 3), _row("b", 1)]) == ["a"]
    assert tied_for_first([_row("a", 3), _row("b", 3)]) == ["a", "b"]
    assert tied_for_first([]) == []
