"""Match result state machine.

This module handles recording, amending and partially saving match results,
moving winners through the bracket and keeping standings in step with the
match set.
"""

# Bracketry
# Copyright (C) 2025  Bracketry developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Any, List, Optional, Sequence, Tuple, Union

from bracketry.constants import (
    EVENT_MATCH_COMPLETED,
    EVENT_MATCH_SCORE_UPDATED,
    EVENT_MATCH_STARTED,
    EVENT_TOURNAMENT_STARTED,
    MATCH_COMPLETED,
    MATCH_IN_PROGRESS,
    MATCH_PENDING,
    TOURNAMENT_CANCELLED,
    TOURNAMENT_DRAFT,
    TOURNAMENT_IN_PROGRESS,
    TOURNAMENT_REGISTRATION,
)
from bracketry.exceptions import IllegalTransitionException, InvalidResultException
from bracketry.models.tournament.format_rules import is_elimination
from bracketry.models.tournament.match import Game, Match, MatchScore, ScoreAmendment
from bracketry.tournament.standings_calculator import refresh_standings
from bracketry.tournament.topology import place, retract
from bracketry.tournament.winner_resolver import (
    TournamentWinnerResolver,
    update_completion,
)
from bracketry.utils import setup_logger, utc_now
from bracketry.utils.validation import validate_scores_strict

logger = setup_logger(__name__)

GameInput = Union[Game, Tuple[float, float]]


def winner_from_scores(
    match: Match, score1: float, score2: float, high_score_wins: bool = True
) -> Optional[str]:
    """Winner implied by the scores, None for equal scores or an empty slot."""
    if not match.is_full or score1 == score2:
        return None
    first_ahead = score1 > score2 if high_score_wins else score1 < score2
    return match.participant1_id if first_ahead else match.participant2_id


def mark_started(tournament) -> None:
    """Move a tournament that has not started yet to in progress."""
    if tournament.status not in (TOURNAMENT_DRAFT, TOURNAMENT_REGISTRATION):
        return
    tournament.status = TOURNAMENT_IN_PROGRESS
    tournament.started_at = tournament.started_at or utc_now()
    tournament.record_event(EVENT_TOURNAMENT_STARTED, f"{tournament.name} started")
    logger.info(f"Tournament {tournament.id} started")


class MatchResultProcessor:
    """Applies submitted results to a tournament.

    This class is responsible for:
    - Validating a result before anything is changed
    - Moving the match through pending, in progress and completed
    - Keeping an amendment history when a completed result is changed
    - Moving winners forward in elimination brackets, retracting a replaced
      winner first
    - Rebuilding standings and re-checking tournament completion
    """

    def __init__(self, winner_resolver: Optional[TournamentWinnerResolver] = None):
        self.winner_resolver = winner_resolver or TournamentWinnerResolver()

    def submit_result(
        self,
        tournament,
        match_id: str,
        score1: float,
        score2: float,
        winner_id: Optional[str] = None,
        games: Optional[Sequence[GameInput]] = None,
        partial: bool = False,
        reason: Optional[str] = None,
    ) -> List[str]:
        """Record, amend or partially save the result of a match.

        Args:
            tournament: Tournament to update in place
            match_id: Match the result belongs to
            score1: Score of the participant in slot 1
            score2: Score of the participant in slot 2
            winner_id: Explicit winner, used to adjudicate equal scores
            games: Sub-game scores of a best-of match
            partial: Save the score without deciding the match
            reason: Optional note stored with an amendment

        Returns:
            The tie set when the tournament finished without an automatic
            winner, otherwise an empty list

        Raises:
            MatchNotFoundException: If the match does not exist
            InvalidResultException: If a score is malformed or the winner is
                not in the match
            IllegalTransitionException: If the match cannot take this result
        """
        match = tournament.get_match(match_id)
        validate_scores_strict(score1, score2)
        if winner_id is not None and not match.has_participant(winner_id):
            raise InvalidResultException(
                f"Winner '{winner_id}' is not a participant of match {match_id}"
            )
        rules = tournament.rules
        game_list = self._build_games(match, games, rules.high_score_wins)

        self._check_transition(tournament, match, partial)

        if winner_id is None:
            winner_id = winner_from_scores(
                match, score1, score2, rules.high_score_wins
            )
        if not partial and winner_id is None and is_elimination(rules):
            raise IllegalTransitionException(
                f"Match {match_id} is a knockout match and cannot end in a draw; "
                "provide the winner explicitly"
            )

        mark_started(tournament)
        if partial:
            self._save_partial(tournament, match, score1, score2, game_list)
        else:
            self._complete(
                tournament, match, score1, score2, winner_id, game_list, reason
            )

        refresh_standings(tournament)
        tournament.touch()
        return update_completion(tournament, self.winner_resolver)

    # ========== Validation ==========

    def _check_transition(self, tournament, match: Match, partial: bool) -> None:
        if tournament.status == TOURNAMENT_CANCELLED:
            raise IllegalTransitionException(f"Tournament {tournament.id} is cancelled")
        if match.is_cancelled:
            raise IllegalTransitionException(f"Match {match.id} is cancelled")
        if not match.is_full:
            raise IllegalTransitionException(
                f"Match {match.id} is still waiting for its participants"
            )
        if partial and match.is_completed:
            raise IllegalTransitionException(
                f"Match {match.id} is already completed; submit a full result "
                "to amend it"
            )

    def _build_games(
        self,
        match: Match,
        games: Optional[Sequence[GameInput]],
        high_score_wins: bool,
    ) -> Optional[List[Game]]:
        if games is None:
            return None
        built = []
        for number, entry in enumerate(games, start=1):
            if isinstance(entry, Game):
                game = Game(
                    game_number=entry.game_number,
                    participant1_score=entry.participant1_score,
                    participant2_score=entry.participant2_score,
                    winner_id=entry.winner_id,
                    id=entry.id,
                )
            else:
                first, second = self._unpack_game(entry)
                game = Game(
                    game_number=number,
                    participant1_score=first,
                    participant2_score=second,
                )
            validate_scores_strict(game.participant1_score, game.participant2_score)
            winner = game.winner_id
            if winner is not None and not match.has_participant(winner):
                raise InvalidResultException(
                    f"Game {game.game_number} winner '{game.winner_id}' is not "
                    f"a participant of match {match.id}"
                )
            if game.winner_id is None:
                game.winner_id = winner_from_scores(
                    match,
                    game.participant1_score,
                    game.participant2_score,
                    high_score_wins,
                )
            game.completed_at = utc_now()
            built.append(game)
        return built

    @staticmethod
    def _unpack_game(entry: Any) -> Tuple[float, float]:
        try:
            first, second = entry
        except (TypeError, ValueError) as exc:
            raise InvalidResultException(
                f"Game scores must be pairs of numbers, got {entry!r}"
            ) from exc
        return first, second

    # ========== Transitions ==========

    def _save_partial(
        self,
        tournament,
        match: Match,
        score1: float,
        score2: float,
        games: Optional[List[Game]],
    ) -> None:
        was_pending = match.status == MATCH_PENDING
        match.status = MATCH_IN_PROGRESS
        match.score = MatchScore(score1, score2)
        match.winner_id = None
        match.loser_id = None
        match.completed_at = None
        match.started_at = match.started_at or utc_now()
        if games is not None:
            match.games = games

        event_type = EVENT_MATCH_STARTED if was_pending else EVENT_MATCH_SCORE_UPDATED
        tournament.record_event(
            event_type,
            f"{self._label(tournament, match)}: {score1}-{score2} (in progress)",
            {
                "match_id": match.id,
                "score": match.score.to_dict(),
                "partial": True,
            },
        )
        logger.debug(f"Partial score {score1}-{score2} saved for match {match.id}")

    def _complete(
        self,
        tournament,
        match: Match,
        score1: float,
        score2: float,
        winner_id: Optional[str],
        games: Optional[List[Game]],
        reason: Optional[str],
    ) -> None:
        now = utc_now()
        amendment = None
        previous_winner = match.winner_id
        was_completed = match.status == MATCH_COMPLETED
        if was_completed:
            amendment = ScoreAmendment(
                previous_score=match.score or MatchScore(0, 0),
                previous_winner_id=previous_winner,
                modified_at=now,
                reason=reason,
            )
            match.score_history.append(amendment)

        match.status = MATCH_COMPLETED
        match.score = MatchScore(score1, score2)
        match.winner_id = winner_id
        match.loser_id = match.opponent_of(winner_id) if winner_id else None
        match.started_at = match.started_at or now
        match.completed_at = now
        if games is not None:
            match.games = games

        if is_elimination(tournament.rules):
            if was_completed and previous_winner != winner_id:
                reset = retract(tournament, match)
                logger.info(
                    f"Winner of match {match.id} changed, "
                    f"{len(reset)} later match(es) reset"
                )
            place(tournament, match, winner_id)

        label = self._label(tournament, match)
        payload = {
            "match_id": match.id,
            "round": match.round,
            "position": match.position,
            "score": match.score.to_dict(),
            "winner_id": winner_id,
        }
        if amendment is not None:
            payload["previous_score"] = amendment.previous_score.to_dict()
            payload["previous_winner_id"] = previous_winner
            payload["reason"] = reason
            tournament.record_event(
                EVENT_MATCH_SCORE_UPDATED,
                f"{label}: result amended to {score1}-{score2}",
                payload,
            )
            logger.info(f"Match {match.id} amended to {score1}-{score2}")
        else:
            tournament.record_event(
                EVENT_MATCH_COMPLETED, f"{label}: {score1}-{score2}", payload
            )
            logger.info(f"Match {match.id} completed {score1}-{score2}")

    @staticmethod
    def _label(tournament, match: Match) -> str:
        first = tournament.participant_name(match.participant1_id)
        second = tournament.participant_name(match.participant2_id)
        return f"Round {match.round} {first} vs {second}"
