"""Public entry point of the tournament progression engine.

Every mutating operation of :class:`TournamentEngine` runs against a deep copy
of the tournament it is given and returns an :class:`EngineResult`:

* on success, the result carries the updated copy
* an illegal transition (wrong state for the request) leaves the original
  tournament untouched and reports why in ``diagnostics``
* invalid input raises an :class:`~bracketry.exceptions.InvalidInputException`
  before anything is changed

Once a transition is committed the new state is handed to the optional sync
collaborator, which writes it in the background.
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

import copy
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from bracketry.constants import (
    EVENT_BRACKET_GENERATED,
    EVENT_PARTICIPANT_ADDED,
    EVENT_PARTICIPANT_REMOVED,
    EVENT_PENALTY_ADDED,
    EVENT_PENALTY_REMOVED,
    EVENT_SEEDS_SWAPPED,
    EVENT_SWISS_ROUND_GENERATED,
    EVENT_TOURNAMENT_CREATED,
    EVENT_TOURNAMENT_STARTED,
    EVENT_WINNER_SELECTED,
    TOURNAMENT_CANCELLED,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_DRAFT,
    TOURNAMENT_IN_PROGRESS,
    TOURNAMENT_REGISTRATION,
)
from bracketry.exceptions import (
    IllegalTransitionException,
    InvalidConfigurationException,
    InvalidParticipantsException,
    InvalidResultException,
    PenaltyNotFoundException,
    RoundIncompleteException,
    UnsupportedFormatOperationException,
)
from bracketry.models.participant import Participant
from bracketry.models.tournament.format_rules import (
    GroupStageRules,
    SwissRules,
    is_elimination,
)
from bracketry.models.tournament.penalty import Penalty
from bracketry.models.tournament.standing import Group, Standing
from bracketry.models.tournament.tournament import Tournament
from bracketry.models.tournament.tournament_config import TournamentConfig
from bracketry.pairing import build_bracket, build_next_swiss_round
from bracketry.tournament.elimination_manager import EliminationManager
from bracketry.tournament.result_processor import GameInput, MatchResultProcessor
from bracketry.tournament.standings_calculator import (
    calculate_group_standings,
    calculate_standings,
    refresh_standings,
)
from bracketry.tournament.tiebreak_resolver import rank_standings
from bracketry.tournament.winner_resolver import (
    TournamentWinnerResolver,
    update_completion,
)
from bracketry.utils import setup_logger, utc_now
from bracketry.utils.validation import (
    validate_config_strict,
    validate_format,
    validate_participant_name,
    validate_participants_strict,
)

logger = setup_logger(__name__)

RankedStandings = List[Tuple[int, Standing]]


@dataclass
class EngineResult:
    """Outcome of one engine operation.

    Attributes
    ----------
    tournament : Tournament
        The updated tournament, or the unchanged input when the operation
        was refused.
    diagnostics : list of str
        Why the operation was refused; empty on success.
    warnings : list of str
        Non-fatal problems, such as background sync failures.
    tied_participant_ids : list of str
        Tie set the champion must be selected from, when the tournament
        finished without an automatic winner.
    """

    tournament: Tournament
    diagnostics: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    tied_participant_ids: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class TournamentEngine:
    """Facade over bracket generation, results, eliminations and winners.

    The engine holds no tournament state. Each call takes the tournament to
    operate on and returns the new state.

    Args:
        sync: Optional collaborator with ``schedule(tournament)`` and
            ``pending_warnings()``, called after every committed transition
        rng: Random source for random seeding and group draws
    """

    def __init__(self, sync: Any = None, rng: Optional[random.Random] = None):
        self.sync = sync
        self.rng = rng or random.Random()
        self.winner_resolver = TournamentWinnerResolver()
        self.result_processor = MatchResultProcessor(self.winner_resolver)
        self.elimination_manager = EliminationManager(self.winner_resolver)

    # ========== Transaction handling ==========

    def _run(
        self,
        tournament: Tournament,
        action: str,
        operation: Callable[[Tournament], Optional[List[str]]],
    ) -> EngineResult:
        working = copy.deepcopy(tournament)
        try:
            ties = operation(working) or []
        except IllegalTransitionException as exc:
            logger.warning(f"{action} refused for tournament {tournament.id}: {exc}")
            return EngineResult(tournament=tournament, diagnostics=[str(exc)])
        return self._commit(working, ties)

    def _commit(self, tournament: Tournament, ties: Sequence[str] = ()) -> EngineResult:
        warnings: List[str] = []
        if self.sync is not None:
            self.sync.schedule(tournament)
            warnings = list(self.sync.pending_warnings())
        return EngineResult(
            tournament=tournament,
            warnings=warnings,
            tied_participant_ids=list(ties),
        )

    @staticmethod
    def _require_status(tournament: Tournament, allowed: Iterable[str], action: str):
        allowed = tuple(allowed)
        if tournament.status not in allowed:
            raise IllegalTransitionException(
                f"Cannot {action} while the tournament is {tournament.status} "
                f"(allowed: {', '.join(allowed)})"
            )

    # ========== Setup ==========

    def create_tournament(
        self,
        name: str,
        tournament_format: str,
        config: Optional[TournamentConfig] = None,
        participants: Iterable[Participant] = (),
        description: Optional[str] = None,
        game: Optional[str] = None,
        category: Optional[str] = None,
    ) -> EngineResult:
        """Create a draft tournament.

        Raises:
            InvalidConfigurationException: For an unknown format, a blank
                name or malformed settings
            InvalidParticipantsException: For duplicate ids or seeds
        """
        if not name or not name.strip():
            raise InvalidConfigurationException("Tournament name is required")
        format_check = validate_format(tournament_format)
        if not format_check:
            raise InvalidConfigurationException(format_check.error_message)
        config = config or TournamentConfig()
        validate_config_strict(config)
        participants = list(participants)
        validate_participants_strict(participants, minimum=0)

        tournament = Tournament(
            name=name.strip(),
            format=tournament_format,
            config=config,
            description=description,
            participants=participants,
            game=game,
            category=category,
        )
        tournament.record_event(
            EVENT_TOURNAMENT_CREATED,
            f"Tournament {tournament.name} created",
            {"format": tournament_format, "config": config.to_dict()},
        )
        logger.info(f"Created {tournament_format} tournament {tournament.id}")
        return self._commit(tournament)

    def add_participant(
        self,
        tournament: Tournament,
        name: str,
        seed: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> EngineResult:
        """Register a participant while the tournament is a draft.

        Raises:
            InvalidParticipantsException: For a blank name or a seed already
                taken
        """
        name_check = validate_participant_name(name)
        if not name_check:
            raise InvalidParticipantsException(name_check.error_message)
        participant = Participant.create(name_check.sanitized_value, seed, metadata)
        validate_participants_strict(
            list(tournament.participants) + [participant], minimum=0
        )

        def operation(working: Tournament) -> None:
            self._require_status(working, [TOURNAMENT_DRAFT], "add participants")
            working.participants.append(participant)
            working.record_event(
                EVENT_PARTICIPANT_ADDED,
                f"{participant.name} joined",
                {"participant_id": participant.id, "seed": seed},
            )
            working.touch()
            logger.info(f"Added {participant.id} to tournament {working.id}")

        return self._run(tournament, "add_participant", operation)

    def remove_participant(
        self, tournament: Tournament, participant_id: str
    ) -> EngineResult:
        """Withdraw a participant before the bracket is generated.

        Raises:
            ParticipantNotFoundException: If the participant does not exist
        """
        participant = tournament.get_participant(participant_id)

        def operation(working: Tournament) -> None:
            self._require_status(working, [TOURNAMENT_DRAFT], "remove participants")
            working.participants = [
                p for p in working.participants if p.id != participant_id
            ]
            working.participant_statuses = [
                s for s in working.participant_statuses
                if s.participant_id != participant_id
            ]
            working.penalties = [
                p for p in working.penalties if p.participant_id != participant_id
            ]
            working.record_event(
                EVENT_PARTICIPANT_REMOVED,
                f"{participant.name} withdrew",
                {"participant_id": participant_id},
            )
            working.touch()

        return self._run(tournament, "remove_participant", operation)

    def swap_seeds(
        self, tournament: Tournament, first_id: str, second_id: str
    ) -> EngineResult:
        """Exchange the seeds of two participants in one step.

        Raises:
            ParticipantNotFoundException: If either participant does not exist
        """
        first = tournament.get_participant(first_id)
        second = tournament.get_participant(second_id)

        def operation(working: Tournament) -> None:
            self._require_status(working, [TOURNAMENT_DRAFT], "swap seeds")
            a = working.get_participant(first_id)
            b = working.get_participant(second_id)
            a.seed, b.seed = b.seed, a.seed
            working.record_event(
                EVENT_SEEDS_SWAPPED,
                f"Seeds of {first.name} and {second.name} swapped",
                {
                    "participant_ids": [first_id, second_id],
                    "seeds": [a.seed, b.seed],
                },
            )
            working.touch()

        return self._run(tournament, "swap_seeds", operation)

    # ========== Generation ==========

    def generate_bracket(
        self, tournament: Tournament, rng: Optional[random.Random] = None
    ) -> EngineResult:
        """Build the initial matches and groups.

        Allowed in draft, and again in registration as long as no result was
        entered; the tournament moves to registration.

        Raises:
            InvalidParticipantsException: For fewer than two participants
        """
        validate_participants_strict(tournament.participants)

        def operation(working: Tournament) -> List[str]:
            self._require_status(
                working,
                [TOURNAMENT_DRAFT, TOURNAMENT_REGISTRATION],
                "generate the bracket",
            )
            matches, groups = build_bracket(
                working.participants, working.format, working.config, rng or self.rng
            )
            working.matches = matches
            working.groups = groups
            working.status = TOURNAMENT_REGISTRATION
            refresh_standings(working)
            working.record_event(
                EVENT_BRACKET_GENERATED,
                f"{len(matches)} matches generated",
                {
                    "match_count": len(matches),
                    "group_count": len(groups),
                    "rounds": working.rounds_played,
                },
            )
            working.touch()
            logger.info(
                f"Generated {len(matches)} matches for tournament {working.id}"
            )
            return update_completion(working, self.winner_resolver)

        return self._run(tournament, "generate_bracket", operation)

    def start_tournament(self, tournament: Tournament) -> EngineResult:
        """Open play once the bracket exists."""

        def operation(working: Tournament) -> None:
            self._require_status(working, [TOURNAMENT_REGISTRATION], "start")
            working.status = TOURNAMENT_IN_PROGRESS
            working.started_at = working.started_at or utc_now()
            working.record_event(EVENT_TOURNAMENT_STARTED, f"{working.name} started")
            working.touch()
            logger.info(f"Tournament {working.id} started")

        return self._run(tournament, "start_tournament", operation)

    def generate_next_swiss_round(self, tournament: Tournament) -> EngineResult:
        """Pair the next Swiss round from the live standings.

        Refused while the current round has unfinished matches, and a no-op
        with a diagnostic once every configured round exists. Eliminated
        participants are not paired.
        """

        def operation(working: Tournament) -> List[str]:
            rules = working.rules
            if not isinstance(rules, SwissRules):
                raise UnsupportedFormatOperationException(
                    f"Rounds are only generated on demand in Swiss tournaments, "
                    f"not {working.format}"
                )
            self._require_status(
                working,
                [TOURNAMENT_REGISTRATION, TOURNAMENT_IN_PROGRESS],
                "generate a Swiss round",
            )
            current = working.rounds_played
            if current == 0:
                raise IllegalTransitionException("Generate the bracket first")
            unfinished = [
                m for m in working.matches_in_round(current) if m.is_unresolved
            ]
            if unfinished:
                raise RoundIncompleteException(
                    f"Round {current} still has {len(unfinished)} unfinished match(es)"
                )
            total = rules.total_rounds(len(working.participants))
            if current >= total:
                raise IllegalTransitionException(
                    f"All {total} Swiss rounds have already been generated"
                )

            round_number = current + 1
            matches = build_next_swiss_round(
                working.active_participants(),
                working.matches,
                round_number,
                rules.avoid_rematches,
                working.config,
                working.penalties,
            )
            working.matches.extend(matches)
            refresh_standings(working)
            working.record_event(
                EVENT_SWISS_ROUND_GENERATED,
                f"Round {round_number} paired",
                {"round": round_number, "match_ids": [m.id for m in matches]},
            )
            working.touch()
            logger.info(f"Generated Swiss round {round_number} for {working.id}")
            return update_completion(working, self.winner_resolver)

        return self._run(tournament, "generate_next_swiss_round", operation)

    # ========== Results ==========

    def submit_result(
        self,
        tournament: Tournament,
        match_id: str,
        score1: float,
        score2: float,
        winner_id: Optional[str] = None,
        games: Optional[Sequence[GameInput]] = None,
        partial: bool = False,
        reason: Optional[str] = None,
    ) -> EngineResult:
        """Record, amend or partially save a match result.

        See :meth:`MatchResultProcessor.submit_result`.
        """
        return self._run(
            tournament,
            "submit_result",
            lambda working: self.result_processor.submit_result(
                working, match_id, score1, score2, winner_id, games, partial, reason
            ),
        )

    def eliminate_participant(
        self,
        tournament: Tournament,
        participant_id: str,
        reason: str = "",
        use_repechage: bool = True,
    ) -> EngineResult:
        """Eliminate a participant; see :class:`EliminationManager`."""
        return self._run(
            tournament,
            "eliminate_participant",
            lambda working: self.elimination_manager.eliminate(
                working, participant_id, reason, use_repechage
            ),
        )

    def reinstate_participant(
        self, tournament: Tournament, participant_id: str
    ) -> EngineResult:
        """Exact inverse of the participant's elimination."""
        return self._run(
            tournament,
            "reinstate_participant",
            lambda working: self.elimination_manager.reinstate(working, participant_id),
        )

    # ========== Penalties ==========

    def add_penalty(
        self, tournament: Tournament, participant_id: str, points: float, reason: str
    ) -> EngineResult:
        """Deduct ``points`` from a participant's standings.

        Raises:
            ParticipantNotFoundException: If the participant does not exist
            InvalidResultException: If ``points`` is not a number
        """
        participant = tournament.get_participant(participant_id)
        if isinstance(points, bool) or not isinstance(points, (int, float)):
            raise InvalidResultException(
                f"Penalty points must be a number, got {points!r}"
            )

        def operation(working: Tournament) -> List[str]:
            if working.status == TOURNAMENT_CANCELLED:
                raise IllegalTransitionException("The tournament is cancelled")
            penalty = Penalty(
                participant_id=participant_id, points=points, reason=reason
            )
            working.penalties.append(penalty)
            working.record_event(
                EVENT_PENALTY_ADDED,
                f"{participant.name} penalized {points} point(s): {reason}",
                {
                    "penalty_id": penalty.id,
                    "participant_id": participant_id,
                    "points": points,
                    "reason": reason,
                },
            )
            refresh_standings(working)
            working.touch()
            return update_completion(working, self.winner_resolver)

        return self._run(tournament, "add_penalty", operation)

    def remove_penalty(self, tournament: Tournament, penalty_id: str) -> EngineResult:
        """Cancel a penalty.

        Raises:
            PenaltyNotFoundException: If no such penalty exists
        """
        if not any(p.id == penalty_id for p in tournament.penalties):
            raise PenaltyNotFoundException(f"Penalty '{penalty_id}' does not exist")

        def operation(working: Tournament) -> List[str]:
            if working.status == TOURNAMENT_CANCELLED:
                raise IllegalTransitionException("The tournament is cancelled")
            penalty = next(p for p in working.penalties if p.id == penalty_id)
            working.penalties.remove(penalty)
            working.record_event(
                EVENT_PENALTY_REMOVED,
                f"Penalty of {penalty.points} point(s) removed",
                {"penalty_id": penalty_id, "participant_id": penalty.participant_id},
            )
            refresh_standings(working)
            working.touch()
            return update_completion(working, self.winner_resolver)

        return self._run(tournament, "remove_penalty", operation)

    # ========== Winner ==========

    def resolve_winner(self, tournament: Tournament) -> Optional[str]:
        """Champion implied by the current state, without changing it."""
        return self.winner_resolver.resolve_winner(tournament)

    def tie_set(self, tournament: Tournament) -> List[str]:
        """Participants a human must choose the champion from."""
        return self.winner_resolver.tie_set(tournament)

    def select_winner(
        self, tournament: Tournament, participant_id: str
    ) -> EngineResult:
        """Settle an unresolved tie by naming the champion.

        Raises:
            ParticipantNotFoundException: If the participant does not exist
            InvalidResultException: If the participant is not in the tie set
        """
        participant = tournament.get_participant(participant_id)
        ties = self.winner_resolver.tie_set(tournament)
        if ties and participant_id not in ties:
            raise InvalidResultException(
                f"{participant.name} is not among the tied participants"
            )

        def operation(working: Tournament) -> None:
            self._require_status(working, [TOURNAMENT_COMPLETED], "select a winner")
            if not ties and self.winner_resolver.resolve_winner(working) is not None:
                raise IllegalTransitionException(
                    "The champion was decided on results and cannot be overridden"
                )
            working.winner_id = participant_id
            working.record_event(
                EVENT_WINNER_SELECTED,
                f"{participant.name} selected as winner",
                {"participant_id": participant_id, "tied_participant_ids": ties},
            )
            working.touch()
            logger.info(f"Winner {participant_id} selected for {working.id}")

        return self._run(tournament, "select_winner", operation)

    # ========== Standings ==========

    def standings(self, tournament: Tournament) -> List[Tuple[Group, RankedStandings]]:
        """Ranked standings of every group, recomputed from the matches.

        Elimination formats have no standings and return an empty list.
        """
        rules = tournament.rules
        if is_elimination(rules):
            return []
        tables = []
        for group in tournament.groups:
            if isinstance(rules, GroupStageRules):
                own = [m for m in tournament.matches if m.group_id == group.id]
                table = calculate_group_standings(
                    group, own, rules.points, tournament.penalties
                )
            else:
                own = tournament.matches
                table = calculate_standings(
                    group.participant_ids, own, rules.points, tournament.penalties
                )
            tables.append((group, rank_standings(table, own, rules.use_head_to_head)))
        return tables


__all__ = ["EngineResult", "TournamentEngine"]
