"""Participant elimination and reinstatement.

Eliminating a participant from a bracket takes one of two branches:

* repechage: the opponent the participant beat most recently takes their
  slot in their latest match, which goes back to pending
* forfeit: the current opponent wins the latest match 3-0 and moves on

A Swiss participant eliminated mid-round forfeits their pending match of the
current round the same way, without anything to propagate.

Everything the elimination touches is snapshotted with ``Match.to_dict`` so
that reinstating restores those matches exactly.
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

from typing import Dict, List, Optional

from bracketry.constants import (
    BRANCH_FORFEIT,
    BRANCH_REPECHAGE,
    BRANCH_STATUS_ONLY,
    EVENT_PARTICIPANT_ELIMINATED,
    EVENT_PARTICIPANT_REINSTATED,
    FORFEIT_LOSER_SCORE,
    FORFEIT_WINNER_SCORE,
    MATCH_COMPLETED,
)
from bracketry.exceptions import (
    IllegalTransitionException,
    UnsupportedFormatOperationException,
)
from bracketry.models.tournament.format_rules import (
    ChampionshipRules,
    SwissRules,
    is_elimination,
)
from bracketry.models.tournament.match import Match, MatchScore
from bracketry.models.tournament.participant_status import ParticipantStatus
from bracketry.tournament.standings_calculator import refresh_standings
from bracketry.tournament.topology import affected_downstream, place, retract
from bracketry.tournament.winner_resolver import (
    TournamentWinnerResolver,
    update_completion,
)
from bracketry.type_hints import Snapshot
from bracketry.utils import setup_logger, utc_now

logger = setup_logger(__name__)


class EliminationManager:
    """Moves participants between active and eliminated.

    Elimination formats rewrite the bracket (repechage or forfeit). Swiss
    forfeits the participant's unfinished match of the current round, if
    any, and stops pairing them from the next round on. Group stage only
    records the status. Championship has no elimination.
    """

    def __init__(self, winner_resolver: Optional[TournamentWinnerResolver] = None):
        self.winner_resolver = winner_resolver or TournamentWinnerResolver()

    # ========== Eliminate ==========

    def eliminate(
        self,
        tournament,
        participant_id: str,
        reason: str = "",
        use_repechage: bool = True,
    ) -> List[str]:
        """Eliminate ``participant_id``.

        Args:
            tournament: Tournament to update in place
            participant_id: Participant to eliminate
            reason: Free-text reason kept on the status
            use_repechage: Promote the last beaten opponent when possible

        Returns:
            The tie set if the tournament completed without an automatic
            winner, otherwise an empty list

        Raises:
            ParticipantNotFoundException: If the participant does not exist
            UnsupportedFormatOperationException: For championship tournaments
            IllegalTransitionException: If the participant is already
                eliminated
        """
        participant = tournament.get_participant(participant_id)
        rules = tournament.rules
        if isinstance(rules, ChampionshipRules):
            raise UnsupportedFormatOperationException(
                "Participants cannot be eliminated from a championship"
            )
        if tournament.is_eliminated(participant_id):
            raise IllegalTransitionException(
                f"{participant.name} is already eliminated"
            )

        status = tournament.status_for(participant_id)
        if status is None:
            status = ParticipantStatus(participant_id=participant_id)
            tournament.participant_statuses.append(status)
        status.clear()
        status.is_eliminated = True
        status.eliminated_at = utc_now()
        status.elimination_reason = reason
        status.branch = BRANCH_STATUS_ONLY

        forfeit_match = None
        if is_elimination(rules):
            forfeit_match = self._latest_match(tournament, participant_id)
        if forfeit_match is not None:
            self._rewrite_bracket(
                tournament, status, forfeit_match, participant_id, use_repechage
            )
        elif isinstance(rules, SwissRules):
            self._forfeit_swiss_match(tournament, status, participant_id)

        promoted = status.promoted_opponent_id
        description = f"{participant.name} eliminated ({status.branch})"
        if promoted:
            description += f", {tournament.participant_name(promoted)} promoted"
        tournament.record_event(
            EVENT_PARTICIPANT_ELIMINATED,
            description,
            {
                "participant_id": participant_id,
                "reason": reason,
                "branch": status.branch,
                "forfeit_match_id": status.forfeit_match_id,
                "promoted_opponent_id": promoted,
            },
        )
        logger.info(
            f"Eliminated {participant_id} in tournament {tournament.id} "
            f"via {status.branch}"
        )

        refresh_standings(tournament)
        tournament.touch()
        return update_completion(tournament, self.winner_resolver)

    def _latest_match(self, tournament, participant_id: str) -> Optional[Match]:
        """The participant's match in the highest round, whatever its status."""
        own = [m for m in tournament.matches_of(participant_id) if m.group_id is None]
        if not own:
            return None
        return max(own, key=lambda m: m.round)

    def _last_beaten_opponent(
        self, tournament, participant_id: str, exclude: Match
    ) -> Optional[str]:
        """Opponent of the participant's latest completed win over a real
        opponent, byes excluded."""
        wins = [
            m
            for m in tournament.matches_of(participant_id)
            if m.is_completed
            and m.is_full
            and m.winner_id == participant_id
            and m.id != exclude.id
        ]
        if not wins:
            return None
        return max(wins, key=lambda m: m.round).opponent_of(participant_id)

    def _rewrite_bracket(
        self,
        tournament,
        status: ParticipantStatus,
        match: Match,
        participant_id: str,
        use_repechage: bool,
    ) -> None:
        before = match.to_dict()
        downstream_before: Dict[str, Snapshot] = {
            m.id: m.to_dict() for m in affected_downstream(tournament, match)
        }
        status.forfeit_match_id = match.id

        promoted = None
        if use_repechage:
            promoted = self._last_beaten_opponent(tournament, participant_id, match)

        if promoted is not None:
            if match.is_completed:
                retract(tournament, match)
            match.set_occupant(match.slot_of(participant_id), promoted)
            match.reset()
            status.branch = BRANCH_REPECHAGE
            status.promoted_opponent_id = promoted
            logger.debug(f"Repechage: {promoted} takes the slot in match {match.id}")
        else:
            opponent = match.opponent_of(participant_id)
            if match.is_unresolved and opponent is not None:
                self._force_forfeit(tournament, match, participant_id, opponent)
                status.branch = BRANCH_FORFEIT
                logger.debug(f"Forfeit: {opponent} wins match {match.id}")

        if match.to_dict() != before:
            status.original_match_state = before
        changed = []
        for downstream in affected_downstream(tournament, match):
            snapshot = downstream_before[downstream.id]
            if downstream.to_dict() != snapshot:
                changed.append(snapshot)
        status.downstream_match_states = changed

    def _forfeit_swiss_match(
        self, tournament, status: ParticipantStatus, participant_id: str
    ) -> None:
        """Award the participant's unfinished current-round match to the
        opponent, so the round can still be closed."""
        current = tournament.rounds_played
        pending = [
            m
            for m in tournament.matches_in_round(current)
            if m.has_participant(participant_id) and m.is_unresolved and m.is_full
        ]
        if not pending:
            return
        match = pending[0]
        status.original_match_state = match.to_dict()
        status.forfeit_match_id = match.id
        status.branch = BRANCH_FORFEIT
        opponent = match.opponent_of(participant_id)
        self._record_forfeit(match, participant_id, opponent)
        logger.debug(f"Swiss forfeit: {opponent} wins match {match.id}")

    def _force_forfeit(
        self, tournament, match: Match, participant_id: str, opponent_id: str
    ) -> None:
        self._record_forfeit(match, participant_id, opponent_id)
        place(tournament, match, opponent_id)

    @staticmethod
    def _record_forfeit(match: Match, participant_id: str, opponent_id: str) -> None:
        now = utc_now()
        if match.slot_of(participant_id) == 1:
            match.score = MatchScore(FORFEIT_LOSER_SCORE, FORFEIT_WINNER_SCORE)
        else:
            match.score = MatchScore(FORFEIT_WINNER_SCORE, FORFEIT_LOSER_SCORE)
        match.status = MATCH_COMPLETED
        match.winner_id = opponent_id
        match.loser_id = participant_id
        match.started_at = match.started_at or now
        match.completed_at = now

    # ========== Reinstate ==========

    def reinstate(self, tournament, participant_id: str) -> List[str]:
        """Undo the elimination of ``participant_id``.

        Whatever the forfeit match propagated since the elimination is
        retracted, then the forfeit match and every downstream match the
        elimination modified are restored from their snapshots.
        A Swiss forfeit stands once a later round has been paired on it.

        Raises:
            ParticipantNotFoundException: If the participant does not exist
            IllegalTransitionException: If the participant is not eliminated
        """
        participant = tournament.get_participant(participant_id)
        status = tournament.status_for(participant_id)
        if status is None or not status.is_eliminated:
            raise IllegalTransitionException(f"{participant.name} is not eliminated")

        branch = status.branch
        restored = self._restore_matches(tournament, status)
        status.clear()

        tournament.record_event(
            EVENT_PARTICIPANT_REINSTATED,
            f"{participant.name} reinstated",
            {
                "participant_id": participant_id,
                "branch": branch,
                "restored_match_ids": restored,
            },
        )
        logger.info(
            f"Reinstated {participant_id} in tournament {tournament.id}, "
            f"{len(restored)} match(es) restored"
        )

        refresh_standings(tournament)
        tournament.touch()
        return update_completion(tournament, self.winner_resolver)

    def _restore_matches(self, tournament, status: ParticipantStatus) -> List[str]:
        snapshots = list(status.downstream_match_states)
        if status.original_match_state is not None:
            snapshots.insert(0, status.original_match_state)
        if not snapshots or status.forfeit_match_id is None:
            return []

        forfeit_match = tournament.get_match(status.forfeit_match_id)
        if not is_elimination(tournament.rules):
            if forfeit_match.round < tournament.rounds_played:
                # Later rounds were paired on this result; it stands
                logger.info(
                    f"Keeping forfeit of match {forfeit_match.id}, "
                    f"round {tournament.rounds_played} is already paired"
                )
                return []
        elif forfeit_match.is_completed:
            retract(tournament, forfeit_match)

        by_id = {m.id: index for index, m in enumerate(tournament.matches)}
        restored = []
        for snapshot in snapshots:
            index = by_id.get(snapshot["id"])
            if index is None:
                logger.warning(f"Snapshot of unknown match {snapshot['id']} skipped")
                continue
            tournament.matches[index] = Match.from_dict(snapshot)
            restored.append(snapshot["id"])
        return restored
