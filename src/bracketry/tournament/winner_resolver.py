"""Champion resolution and the tournament completion check."""

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

from typing import List, Optional

from bracketry.constants import (
    EVENT_TOURNAMENT_COMPLETED,
    MATCH_CANCELLED,
    MATCH_COMPLETED,
    TOURNAMENT_CANCELLED,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_IN_PROGRESS,
)
from bracketry.models.tournament.format_rules import (
    ChampionshipRules,
    GroupStageRules,
    SwissRules,
    is_elimination,
)
from bracketry.tournament.standings_calculator import (
    calculate_group_standings,
    calculate_standings,
)
from bracketry.tournament.tiebreak_resolver import (
    sort_standings,
    tiebreak_key,
    tied_for_first,
)
from bracketry.type_hints import TieSet
from bracketry.utils import setup_logger, utc_now

logger = setup_logger(__name__)


class TournamentWinnerResolver:
    """Determines the champion of a tournament from its current state.

    Results are always recomputed from the match set rather than read from
    the cached group standings.
    """

    def resolve_winner(self, tournament) -> Optional[str]:
        """Return the champion's id, or None when there is none yet.

        Single/double elimination: winner of the match in the final round.
        Groups: the best group winner by (points, differential), the earlier
        group winning a draw between group winners.
        Championship/Swiss: top of the tie-break order, unless two or more
        participants share the top rank.
        """
        rules = tournament.rules
        if is_elimination(rules):
            return self._final_winner(tournament)
        if isinstance(rules, GroupStageRules):
            return self._best_group_winner(tournament)
        top = self.tie_set(tournament, include_decided=True)
        return top[0] if len(top) == 1 else None

    def tie_set(self, tournament, include_decided: bool = False) -> TieSet:
        """Participants sharing first place in a standings-based format.

        Returns:
            The ids a human must choose from, or an empty list when the top
            is decided (unless ``include_decided``, which then returns the
            single leader) or the format has no standings.
        """
        rules = tournament.rules
        if not isinstance(rules, (ChampionshipRules, SwissRules)):
            return []
        participant_ids = tournament.participant_ids
        if not participant_ids:
            return []
        table = calculate_standings(
            participant_ids, tournament.matches, rules.points, tournament.penalties
        )
        top = tied_for_first(table, tournament.matches, rules.use_head_to_head)
        if len(top) < 2 and not include_decided:
            return []
        return top

    def _final_winner(self, tournament) -> Optional[str]:
        bracket = [m for m in tournament.matches if m.group_id is None]
        if not bracket:
            return None
        final_round = max(m.round for m in bracket)
        finals = [m for m in bracket if m.round == final_round]
        return finals[0].winner_id

    def _best_group_winner(self, tournament) -> Optional[str]:
        rules = tournament.rules
        best = None
        for group in tournament.groups:
            if not group.participant_ids:
                continue
            table = calculate_group_standings(
                group, tournament.matches, rules.points, tournament.penalties
            )
            own = [m for m in tournament.matches if m.group_id == group.id]
            leader = sort_standings(table, own, rules.use_head_to_head)[0]
            if best is None or tiebreak_key(leader)[:2] > tiebreak_key(best)[:2]:
                best = leader
        return best.participant_id if best else None


def is_tournament_complete(tournament) -> bool:
    """Every match settled; Swiss also needs its last round generated."""
    if not tournament.matches:
        return False
    settled = (MATCH_COMPLETED, MATCH_CANCELLED)
    if any(m.status not in settled for m in tournament.matches):
        return False
    rules = tournament.rules
    if isinstance(rules, SwissRules):
        needed = rules.total_rounds(len(tournament.participants))
        return tournament.rounds_played >= needed
    return True


def update_completion(
    tournament, resolver: Optional[TournamentWinnerResolver] = None
) -> List[str]:
    """Re-evaluate completion after a transition.

    Completes the tournament and resolves its champion once every match is
    settled. A tournament that stops being complete (for example after an
    amendment reset a later match) goes back to in progress.

    Returns:
        The tie set when the champion could not be decided automatically
    """
    if tournament.status == TOURNAMENT_CANCELLED:
        return []
    resolver = resolver or TournamentWinnerResolver()

    if not is_tournament_complete(tournament):
        if tournament.status == TOURNAMENT_COMPLETED:
            logger.info(f"Tournament {tournament.id} is no longer complete")
            tournament.status = TOURNAMENT_IN_PROGRESS
            tournament.completed_at = None
            tournament.winner_id = None
        return []

    winner_id = resolver.resolve_winner(tournament)
    ties = resolver.tie_set(tournament) if winner_id is None else []
    if winner_id is None and tournament.winner_id in ties:
        # A manual selection among the same tie set still stands
        winner_id, ties = tournament.winner_id, []

    newly_completed = tournament.status != TOURNAMENT_COMPLETED
    changed = newly_completed or winner_id != tournament.winner_id
    tournament.status = TOURNAMENT_COMPLETED
    tournament.completed_at = tournament.completed_at or utc_now()
    tournament.winner_id = winner_id

    if changed:
        if winner_id is not None:
            name = tournament.participant_name(winner_id)
            description = f"Tournament completed, won by {name}"
        else:
            description = "Tournament completed without an automatic winner"
        tournament.record_event(
            EVENT_TOURNAMENT_COMPLETED,
            description,
            {"winner_id": winner_id, "tied_participant_ids": list(ties)},
        )
        logger.info(f"Tournament {tournament.id} completed, winner: {winner_id}")
    if ties:
        logger.warning(
            f"Tournament {tournament.id} ends in a tie between {', '.join(ties)}; "
            "a winner must be selected manually"
        )
    return ties
