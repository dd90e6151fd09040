"""Bracket topology helpers.

Winners move forward by value: the downstream match and slot are computed
from (round, position) every time, so rewriting a slot never has to keep
pointers in sync.
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

from typing import List, Optional

from bracketry.constants import EVENT_MATCH_RESET, MATCH_PENDING
from bracketry.models.tournament.match import Match
from bracketry.pairing.elimination import downstream_key, feed_slot
from bracketry.utils import setup_logger

logger = setup_logger(__name__)


def downstream_of(tournament, match: Match) -> Optional[Match]:
    """Match fed by ``match``'s winner, or None for the final."""
    if match.group_id is not None:
        return None
    return tournament.match_at(*downstream_key(match.round, match.position))


def place(tournament, match: Match, participant_id: Optional[str]) -> Optional[Match]:
    """Put ``participant_id`` in the downstream slot fed by ``match``.

    Returns:
        The downstream match, or None when ``match`` is the final
    """
    target = downstream_of(tournament, match)
    if target is not None:
        target.set_occupant(feed_slot(match.position), participant_id)
        logger.debug(
            f"Placed {participant_id} into round {target.round} "
            f"position {target.position} slot {feed_slot(match.position)}"
        )
    return target


def retract(tournament, match: Match) -> List[Match]:
    """Undo what ``match`` propagated downstream.

    The slot fed by ``match`` is cleared. A downstream match that had already
    started or finished is reset to pending, and its own propagation is
    retracted in turn.

    Returns:
        Every downstream match that was reset, nearest first
    """
    target = downstream_of(tournament, match)
    if target is None:
        return []
    target.set_occupant(feed_slot(match.position), None)
    if target.status == MATCH_PENDING and target.score is None:
        return []

    reset = [target]
    reset.extend(retract(tournament, target))
    target.reset()
    tournament.record_event(
        EVENT_MATCH_RESET,
        f"Round {target.round} match {target.position + 1} reset",
        {"match_id": target.id, "round": target.round, "position": target.position},
    )
    logger.info(f"Reset match {target.id} after upstream result changed")
    return reset


def affected_downstream(tournament, match: Match) -> List[Match]:
    """Every match reachable downstream of ``match``, nearest first."""
    chain = []
    target = downstream_of(tournament, match)
    while target is not None:
        chain.append(target)
        target = downstream_of(tournament, target)
    return chain
