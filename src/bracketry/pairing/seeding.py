"""Standard bracket seed placement.

For a bracket of ``n`` slots, :func:`compute_seed_order` returns the seed that
occupies each slot so that seed 1 meets seed ``n`` in the first round, seed 2
meets seed ``n - 1`` and the two top seeds can only meet in the final.
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

import math
import random
from typing import List, Optional, Sequence

from bracketry.constants import SEEDING_RANDOM
from bracketry.exceptions import InvalidInputException
from bracketry.models.participant import Participant


def is_power_of_two(n: int) -> bool:
    return n >= 1 and n & (n - 1) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two greater than or equal to ``n`` (1 for n <= 1)."""
    power = 1
    while power < n:
        power *= 2
    return power


def rounds_for(participant_count: int) -> int:
    """Number of elimination rounds needed for ``participant_count`` entrants."""
    if participant_count < 2:
        return 0
    return math.ceil(math.log2(participant_count))


def compute_seed_order(slot_count: int) -> List[int]:
    """Seed (1-indexed) placed in each bracket slot.

    Every seed of the half-size order is followed by its mirrored complement,
    so ``compute_seed_order(8) == [1, 8, 4, 5, 2, 7, 3, 6]``.

    Args:
        slot_count: Bracket size, a power of two

    Returns:
        ``order`` where ``order[slot]`` is the seed placed in ``slot``

    Raises:
        InvalidInputException: If ``slot_count`` is not a power of two
    """
    if not is_power_of_two(slot_count):
        raise InvalidInputException(
            f"Bracket size must be a power of two, got {slot_count}"
        )
    if slot_count == 1:
        return [1]
    order: List[int] = []
    for seed in compute_seed_order(slot_count // 2):
        order.append(seed)
        order.append(slot_count + 1 - seed)
    return order


def compute_slot_for_seed(slot_count: int) -> List[int]:
    """Inverse of :func:`compute_seed_order`: ``slots[seed - 1]`` is the slot."""
    slots = [0] * slot_count
    for slot, seed in enumerate(compute_seed_order(slot_count)):
        slots[seed - 1] = slot
    return slots


def seed_sort_key(participant: Participant, unseeded: float = math.inf) -> float:
    return participant.seed if participant.seed is not None else unseeded


def order_participants(
    participants: Sequence[Participant],
    seeding: str,
    rng: Optional[random.Random] = None,
) -> List[Participant]:
    """Order participants for bracket placement.

    Random seeding shuffles uniformly with ``rng``. Manual and ranked seeding
    sort by explicit seed; unseeded participants follow the seeded ones in
    their original relative order (the sort is stable).
    """
    ordered = list(participants)
    if seeding == SEEDING_RANDOM:
        (rng or random.Random()).shuffle(ordered)
        return ordered
    return sorted(ordered, key=seed_sort_key)


def place_in_slots(
    ordered: Sequence[Participant], slot_count: int
) -> List[Optional[Participant]]:
    """Put the i-th ordered participant on the slot reserved for seed i + 1.

    Slots left as None are byes.
    """
    slots: List[Optional[Participant]] = [None] * slot_count
    slot_for_seed = compute_slot_for_seed(slot_count)
    for index, participant in enumerate(ordered):
        slots[slot_for_seed[index]] = participant
    return slots
