"""Standings computed as a pure fold over a match set.

Nothing here accumulates across calls: every table is rebuilt from the
completed matches it is given, so amending a result can never count the old
outcome twice.
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

from typing import Dict, Iterable, List, Sequence

from bracketry.models.tournament.format_rules import (
    ChampionshipRules,
    GroupStageRules,
    PointsScheme,
    SwissRules,
)
from bracketry.models.tournament.match import Match
from bracketry.models.tournament.penalty import Penalty
from bracketry.models.tournament.standing import Group, Standing
from bracketry.tournament.tiebreak_resolver import sort_standings
from bracketry.utils import setup_logger

logger = setup_logger(__name__)


def _apply_match(
    table: Dict[str, Standing], match: Match, points: PointsScheme
) -> None:
    first = table.get(match.participant1_id) if match.participant1_id else None
    second = table.get(match.participant2_id) if match.participant2_id else None

    if not match.is_full:
        # Bye: a win without an opponent or a score
        lone = first or second
        if lone is not None and match.winner_id == lone.participant_id:
            lone.won += 1
            lone.points += points.win
        return

    score1 = match.score.participant1_score if match.score else 0
    score2 = match.score.participant2_score if match.score else 0
    sides = (
        (first, score1, score2, match.participant2_id),
        (second, score2, score1, match.participant1_id),
    )

    for standing, scored, conceded, opponent_id in sides:
        if standing is None:
            continue
        standing.scored_for += scored
        standing.scored_against += conceded
        if opponent_id not in standing.opponents:
            standing.opponents.append(opponent_id)
        if match.winner_id is None:
            standing.drawn += 1
            standing.points += points.draw
        elif match.winner_id == standing.participant_id:
            standing.won += 1
            standing.points += points.win
        else:
            standing.lost += 1
            standing.points += points.loss


def calculate_standings(
    participant_ids: Sequence[str],
    matches: Iterable[Match],
    points: PointsScheme,
    penalties: Iterable[Penalty] = (),
) -> List[Standing]:
    """Fold completed matches into one standing per participant.

    Pending, in-progress and cancelled matches contribute nothing. A bye
    counts as a win worth ``points.win`` with no opponent recorded. Buchholz
    is the sum of the opponents' points before penalties; penalties are then
    subtracted from points only.

    Args:
        participant_ids: Participants to report, in output order
        matches: Any match collection; participants outside
            ``participant_ids`` are ignored
        points: Win/draw/loss values
        penalties: Point deductions

    Returns:
        Standings in the order of ``participant_ids``
    """
    table: Dict[str, Standing] = {
        pid: Standing(participant_id=pid) for pid in participant_ids
    }
    for match in matches:
        if match.is_completed:
            _apply_match(table, match, points)

    match_points = {pid: standing.points for pid, standing in table.items()}
    for standing in table.values():
        standing.buchholz = sum(
            match_points.get(opp, 0) for opp in standing.opponents
        )

    for penalty in penalties:
        standing = table.get(penalty.participant_id)
        if standing is not None:
            standing.points -= penalty.points

    return [table[pid] for pid in participant_ids]


def calculate_group_standings(
    group: Group,
    matches: Iterable[Match],
    points: PointsScheme,
    penalties: Iterable[Penalty] = (),
) -> List[Standing]:
    """Standings of ``group`` from the matches tagged with its id."""
    own = [m for m in matches if m.group_id == group.id]
    return calculate_standings(group.participant_ids, own, points, penalties)


def refresh_standings(tournament) -> None:
    """Rebuild the cached standings of every group from the current matches.

    Groups are stored in tie-break order. Elimination formats have no
    standings and are left untouched.
    """
    rules = tournament.rules
    if isinstance(rules, GroupStageRules):
        for group in tournament.groups:
            table = calculate_group_standings(
                group, tournament.matches, rules.points, tournament.penalties
            )
            own = [m for m in tournament.matches if m.group_id == group.id]
            group.standings = sort_standings(table, own, rules.use_head_to_head)
    elif isinstance(rules, (ChampionshipRules, SwissRules)):
        for group in tournament.groups:
            table = calculate_standings(
                group.participant_ids,
                tournament.matches,
                rules.points,
                tournament.penalties,
            )
            group.standings = sort_standings(
                table, tournament.matches, rules.use_head_to_head
            )
    else:
        return
    logger.debug(f"Refreshed standings of {len(tournament.groups)} group(s)")
