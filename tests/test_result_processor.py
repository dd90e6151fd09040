import pytest

from bracketry.constants import (
    EVENT_MATCH_COMPLETED,
    EVENT_MATCH_RESET,
    EVENT_MATCH_SCORE_UPDATED,
    EVENT_MATCH_STARTED,
    EVENT_TOURNAMENT_COMPLETED,
    EVENT_TOURNAMENT_STARTED,
    FORMAT_CHAMPIONSHIP,
    FORMAT_SINGLE_ELIMINATION,
    MATCH_COMPLETED,
    MATCH_IN_PROGRESS,
    MATCH_PENDING,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_IN_PROGRESS,
    TOURNAMENT_REGISTRATION,
)
from bracketry.exceptions import InvalidResultException, MatchNotFoundException
from bracketry.tournament.result_processor import winner_from_scores


def _submit(engine, tournament, round_number, position, score1, score2, **kwargs):
    match = tournament.match_at(round_number, position)
    result = engine.submit_result(tournament, match.id, score1, score2, **kwargs)
    assert result.ok, result.diagnostics
    return result.tournament


def _event_types(tournament):
    return [e.type for e in tournament.events]


def test_winner_moves_into_the_next_round(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    assert tournament.status == TOURNAMENT_REGISTRATION

    tournament = _submit(engine, tournament, 1, 0, 2, 0)
    match = tournament.match_at(1, 0)
    assert match.status == MATCH_COMPLETED
    assert (match.winner_id, match.loser_id) == ("p1", "p4")
    assert tournament.match_at(2, 0).participant1_id == "p1"
    assert tournament.status == TOURNAMENT_IN_PROGRESS
    assert EVENT_TOURNAMENT_STARTED in _event_types(tournament)
    assert _event_types(tournament)[-1] == EVENT_MATCH_COMPLETED

    tournament = _submit(engine, tournament, 1, 1, 0, 3)
    assert tournament.match_at(2, 0).participant2_id == "p3"


def test_engine_works_on_a_copy(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    updated = _submit(engine, tournament, 1, 0, 2, 0)

    assert updated is not tournament
    assert tournament.match_at(1, 0).status == MATCH_PENDING
    assert tournament.match_at(2, 0).participant1_id is None


def test_knockout_draw_needs_an_explicit_winner(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    match = tournament.match_at(1, 0)

    refused = engine.submit_result(tournament, match.id, 1, 1)
    assert not refused.ok
    assert refused.tournament is tournament
    assert tournament.match_at(1, 0).status == MATCH_PENDING

    adjudicated = _submit(engine, tournament, 1, 0, 1, 1, winner_id="p4")
    assert adjudicated.match_at(1, 0).winner_id == "p4"
    assert adjudicated.match_at(2, 0).participant1_id == "p4"


def test_partial_saves_keep_the_match_open(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)

    tournament = _submit(engine, tournament, 1, 0, 1, 0, partial=True)
    match = tournament.match_at(1, 0)
    assert match.status == MATCH_IN_PROGRESS
    assert (match.score.participant1_score, match.score.participant2_score) == (1, 0)
    assert match.winner_id is None
    assert tournament.match_at(2, 0).participant1_id is None
    assert _event_types(tournament)[-1] == EVENT_MATCH_STARTED

    tournament = _submit(engine, tournament, 1, 0, 1, 1, partial=True)
    assert _event_types(tournament)[-1] == EVENT_MATCH_SCORE_UPDATED

    tournament = _submit(engine, tournament, 1, 0, 2, 1)
    assert tournament.match_at(1, 0).status == MATCH_COMPLETED


def test_partial_save_on_completed_match_is_refused(engine, new_tournament):
    tournament = _submit(
        engine, new_tournament(FORMAT_SINGLE_ELIMINATION, 4), 1, 0, 2, 0
    )
    match = tournament.match_at(1, 0)
    result = engine.submit_result(tournament, match.id, 3, 0, partial=True)
    assert not result.ok
    assert result.tournament.match_at(1, 0).score.participant1_score == 2


def test_match_waiting_for_participants_is_refused(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    final = tournament.match_at(2, 0)
    result = engine.submit_result(tournament, final.id, 1, 0)
    assert not result.ok


def test_invalid_input_raises_before_anything_changes(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    match = tournament.match_at(1, 0)

    with pytest.raises(InvalidResultException):
        engine.submit_result(tournament, match.id, -1, 2)
    with pytest.raises(InvalidResultException):
        engine.submit_result(tournament, match.id, "two", 1)
    with pytest.raises(InvalidResultException):
        engine.submit_result(tournament, match.id, 2, 1, winner_id="p2")
    with pytest.raises(MatchNotFoundException):
        engine.submit_result(tournament, "match-missing", 2, 1)
    assert tournament.match_at(1, 0).status == MATCH_PENDING


def test_changing_the_winner_resets_later_matches(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    tournament = _submit(engine, tournament, 1, 0, 2, 0)
    tournament = _submit(engine, tournament, 1, 1, 2, 0)
    tournament = _submit(engine, tournament, 2, 0, 3, 1)
    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.winner_id == "p1"

    tournament = _submit(engine, tournament, 1, 0, 0, 2, reason="scorer error")

    first = tournament.match_at(1, 0)
    assert first.winner_id == "p4"
    assert len(first.score_history) == 1
    assert first.score_history[0].previous_winner_id == "p1"
    assert first.score_history[0].reason == "scorer error"

    final = tournament.match_at(2, 0)
    assert final.status == MATCH_PENDING
    assert final.score is None
    assert (final.participant1_id, final.participant2_id) == ("p4", "p2")
    assert tournament.status == TOURNAMENT_IN_PROGRESS
    assert tournament.winner_id is None
    assert EVENT_MATCH_RESET in _event_types(tournament)


def test_amending_the_score_only_keeps_later_matches(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 4)
    tournament = _submit(engine, tournament, 1, 0, 2, 0)
    tournament = _submit(engine, tournament, 1, 1, 2, 0)
    tournament = _submit(engine, tournament, 2, 0, 3, 1)

    tournament = _submit(engine, tournament, 1, 0, 3, 0)
    assert tournament.match_at(1, 0).score.participant1_score == 3
    assert len(tournament.match_at(1, 0).score_history) == 1
    assert tournament.match_at(2, 0).status == MATCH_COMPLETED
    assert tournament.status == TOURNAMENT_COMPLETED
    assert _event_types(tournament)[-1] == EVENT_MATCH_SCORE_UPDATED


def test_two_player_bracket_completes_with_the_final(engine, new_tournament):
    tournament = _submit(
        engine, new_tournament(FORMAT_SINGLE_ELIMINATION, 2), 1, 0, 0, 2
    )
    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.winner_id == "p2"
    assert tournament.completed_at is not None
    assert _event_types(tournament)[-1] == EVENT_TOURNAMENT_COMPLETED


def test_game_winners_are_derived_from_game_scores(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 2, best_of=3)
    tournament = _submit(
        engine, tournament, 1, 0, 2, 1, games=[(2, 1), (0, 2), (3, 1)]
    )
    games = tournament.match_at(1, 0).games
    assert [g.game_number for g in games] == [1, 2, 3]
    assert [g.winner_id for g in games] == ["p1", "p2", "p1"]


def test_low_score_wins(engine, new_tournament):
    tournament = new_tournament(FORMAT_SINGLE_ELIMINATION, 2, high_score_wins=False)
    tournament = _submit(engine, tournament, 1, 0, 68, 72)
    assert tournament.winner_id == "p1"


def test_winner_from_scores(new_tournament):
    match = new_tournament(FORMAT_SINGLE_ELIMINATION, 2).match_at(1, 0)
    assert winner_from_scores(match, 2, 1) == "p1"
    assert winner_from_scores(match, 2, 1, high_score_wins=False) == "p2"
    assert winner_from_scores(match, 1, 1) is None


def test_championship_draw_updates_the_table(engine, new_tournament):
    tournament = new_tournament(FORMAT_CHAMPIONSHIP, 3)
    match = tournament.matches[0]
    result = engine.submit_result(tournament, match.id, 1, 1)
    assert result.ok

    table = {s.participant_id: s for s in result.tournament.groups[0].standings}
    first, second = match.participant1_id, match.participant2_id
    assert table[first].drawn == table[second].drawn == 1
    assert table[first].points == table[second].points == 1


def test_amended_result_counts_like_a_fresh_one(engine, new_tournament):
    amended = new_tournament(FORMAT_CHAMPIONSHIP, 3)
    match = amended.matches[0]
    amended = engine.submit_result(amended, match.id, 3, 1).tournament
    result = engine.submit_result(amended, match.id, 1, 3, reason="scorer error")
    assert result.ok, result.diagnostics
    amended = result.tournament

    fresh = new_tournament(FORMAT_CHAMPIONSHIP, 3)
    fresh = engine.submit_result(fresh, fresh.matches[0].id, 1, 3).tournament

    assert amended.get_match(match.id).winner_id == match.participant2_id
    assert amended.groups[0].standings == fresh.groups[0].standings
    assert engine.standings(amended)[0][1] == engine.standings(fresh)[0][1]
