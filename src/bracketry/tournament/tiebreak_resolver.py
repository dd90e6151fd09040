"""Tie-break ordering of standings.

Standings are ordered, descending, by:

1. points
2. differential (scored for minus scored against)
3. scored for
4. head-to-head, only between exactly two perfectly tied participants and
   only when enabled

Participants still tied after these steps share a rank (standard competition
ranking, 1, 2, 2, 4) and must be separated by a human.
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

from typing import Iterable, List, Optional, Sequence, Tuple

from bracketry.models.tournament.match import Match
from bracketry.models.tournament.standing import Standing
from bracketry.type_hints import TieSet
from bracketry.utils import setup_logger

logger = setup_logger(__name__)


def tiebreak_key(standing: Standing) -> Tuple[float, float, float]:
    return (standing.points, standing.differential, standing.scored_for)


def is_perfect_tie(first: Standing, second: Standing) -> bool:
    """Identical points, differential and scored-for."""
    return tiebreak_key(first) == tiebreak_key(second)


def head_to_head_winner(
    first_id: str, second_id: str, matches: Iterable[Match]
) -> Optional[str]:
    """Participant who won every completed meeting between the two.

    Returns:
        The winner's id, or None when they never met or split the meetings
        (draws included).
    """
    winners = [
        m.winner_id
        for m in matches
        if m.is_completed
        and m.has_participant(first_id)
        and m.has_participant(second_id)
    ]
    if not winners:
        return None
    for candidate in (first_id, second_id):
        if all(winner == candidate for winner in winners):
            return candidate
    return None


def _tie_blocks(
    ordered: Sequence[Standing], matches: Sequence[Match], use_head_to_head: bool
) -> List[List[Standing]]:
    """Split sorted standings into blocks of participants sharing a rank."""
    blocks: List[List[Standing]] = []
    for standing in ordered:
        if blocks and is_perfect_tie(blocks[-1][0], standing):
            blocks[-1].append(standing)
        else:
            blocks.append([standing])

    if not use_head_to_head:
        return blocks

    resolved: List[List[Standing]] = []
    for block in blocks:
        if len(block) != 2:
            resolved.append(block)
            continue
        first, second = block
        winner = head_to_head_winner(
            first.participant_id, second.participant_id, matches
        )
        if winner is None:
            resolved.append(block)
        elif winner == first.participant_id:
            resolved.extend([[first], [second]])
        else:
            logger.debug(
                f"Head-to-head puts {second.participant_id} "
                f"above {first.participant_id}"
            )
            resolved.extend([[second], [first]])
    return resolved


def sort_standings(
    standings: Iterable[Standing],
    matches: Sequence[Match] = (),
    use_head_to_head: bool = False,
) -> List[Standing]:
    """Return standings in tie-break order.

    The sort is stable, so unresolved ties keep their input order.
    """
    ordered = sorted(standings, key=tiebreak_key, reverse=True)
    return [
        standing
        for block in _tie_blocks(ordered, matches, use_head_to_head)
        for standing in block
    ]


def rank_standings(
    standings: Iterable[Standing],
    matches: Sequence[Match] = (),
    use_head_to_head: bool = False,
) -> List[Tuple[int, Standing]]:
    """Pair every standing with its rank; unresolved ties share a rank."""
    ordered = sorted(standings, key=tiebreak_key, reverse=True)
    ranked: List[Tuple[int, Standing]] = []
    for block in _tie_blocks(ordered, matches, use_head_to_head):
        rank = len(ranked) + 1
        ranked.extend((rank, standing) for standing in block)
    return ranked


def perfect_ties(
    standings: Iterable[Standing],
    matches: Sequence[Match] = (),
    use_head_to_head: bool = False,
) -> List[TieSet]:
    """Every group of two or more participants left sharing a rank."""
    ordered = sorted(standings, key=tiebreak_key, reverse=True)
    return [
        [s.participant_id for s in block]
        for block in _tie_blocks(ordered, matches, use_head_to_head)
        if len(block) > 1
    ]


def tied_for_first(
    standings: Iterable[Standing],
    matches: Sequence[Match] = (),
    use_head_to_head: bool = False,
) -> TieSet:
    """Participants sharing rank 1.

    A single id means the top is decided; two or more ids form the tie set a
    human has to choose from. Empty standings give an empty list.
    """
    ordered = sorted(standings, key=tiebreak_key, reverse=True)
    blocks = _tie_blocks(ordered, matches, use_head_to_head)
    if not blocks:
        return []
    return [s.participant_id for s in blocks[0]]
