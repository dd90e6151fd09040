"""Single-elimination bracket builder.

Matches are kept in a flat list. The bracket edges are never stored: the
match at (round r, position p) feeds the match at (r + 1, p // 2), into slot
1 when ``p`` is even and slot 2 when it is odd.
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

import random
from typing import Dict, List, Optional, Sequence

from bracketry.constants import MATCH_COMPLETED
from bracketry.models.participant import Participant
from bracketry.models.tournament.match import Match
from bracketry.pairing.seeding import order_participants, place_in_slots, rounds_for
from bracketry.type_hints import MatchKey, Slot
from bracketry.utils import setup_logger, utc_now
from bracketry.utils.validation import validate_participants_strict

logger = setup_logger(__name__)


def downstream_key(round_number: int, position: int) -> MatchKey:
    """(round, position) of the match fed by the winner of this one."""
    return round_number + 1, position // 2


def feed_slot(position: int) -> Slot:
    """Slot of the downstream match fed from ``position``."""
    return 1 if position % 2 == 0 else 2


def upstream_key(round_number: int, position: int, slot: Slot) -> MatchKey:
    """(round, position) of the match that feeds ``slot`` of this one."""
    return round_number - 1, position * 2 + (slot - 1)


def build_single_elimination(
    participants: Sequence[Participant],
    seeding: str,
    rng: Optional[random.Random] = None,
    best_of: int = 1,
    best_of_final: Optional[int] = None,
    bracket: Optional[str] = None,
) -> List[Match]:
    """Build the complete match tree of a single-elimination bracket.

    Args:
        participants: Entrants, at least two
        seeding: "random", "manual" or "ranked"
        rng: Random source for random seeding
        best_of: Games per match
        best_of_final: Games in the final, defaults to ``best_of``
        bracket: Bracket tag written on every match

    Returns:
        ``nextPowerOfTwo(N) - 1`` matches over ``ceil(log2 N)`` rounds. Round-1
        matches holding a single participant are completed byes whose winner
        already sits in round 2.

    Raises:
        InvalidParticipantsException: For fewer than two participants or
            duplicate ids/seeds
    """
    validate_participants_strict(participants)

    total_rounds = rounds_for(len(participants))
    slot_count = 2**total_rounds
    ordered = order_participants(participants, seeding, rng)
    slots = place_in_slots(ordered, slot_count)

    def games_in(round_number: int) -> int:
        if round_number == total_rounds and best_of_final:
            return best_of_final
        return best_of

    matches: List[Match] = []
    for position in range(slot_count // 2):
        first, second = slots[2 * position], slots[2 * position + 1]
        match = Match(
            round=1,
            position=position,
            participant1_id=first.id if first else None,
            participant2_id=second.id if second else None,
            best_of=games_in(1),
            bracket=bracket,
        )
        if len(match.participant_ids) == 1:
            match.status = MATCH_COMPLETED
            match.winner_id = match.participant_ids[0]
            match.completed_at = utc_now()
        matches.append(match)

    for round_number in range(2, total_rounds + 1):
        for position in range(2 ** (total_rounds - round_number)):
            matches.append(
                Match(
                    round=round_number,
                    position=position,
                    best_of=games_in(round_number),
                    bracket=bracket,
                )
            )

    index: Dict[MatchKey, Match] = {(m.round, m.position): m for m in matches}
    byes = 0
    for match in matches:
        if match.round == 1 and match.is_bye:
            byes += 1
            target = index.get(downstream_key(match.round, match.position))
            if target is not None:
                target.set_occupant(feed_slot(match.position), match.winner_id)

    logger.debug(
        f"Built {len(matches)} matches over {total_rounds} rounds "
        f"({slot_count} slots, {byes} byes)"
    )
    return matches
