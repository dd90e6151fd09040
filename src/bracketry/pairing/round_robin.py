"""Round-robin builders for the group stage and championship formats."""

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
import string
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from bracketry.constants import CHAMPIONSHIP_GROUP_NAME
from bracketry.models.participant import Participant
from bracketry.models.tournament.match import Match
from bracketry.models.tournament.standing import Group, initial_standings
from bracketry.utils import setup_logger
from bracketry.utils.validation import validate_participants_strict

logger = setup_logger(__name__)


def group_name(index: int) -> str:
    """Display name of the group at ``index``: Group A, Group B, ..."""
    if index < len(string.ascii_uppercase):
        return f"Group {string.ascii_uppercase[index]}"
    return f"Group {index + 1}"


def split_evenly(items: Sequence, parts: int) -> List[list]:
    """Split ``items`` into ``parts`` contiguous chunks whose sizes differ by
    at most one; the first chunks receive the remainder."""
    size, remainder = divmod(len(items), parts)
    chunks, start = [], 0
    for index in range(parts):
        end = start + size + (1 if index < remainder else 0)
        chunks.append(list(items[start:end]))
        start = end
    return chunks


def build_group_stage(
    participants: Sequence[Participant],
    group_count: int,
    rng: Optional[random.Random] = None,
    best_of: int = 1,
) -> Tuple[List[Match], List[Group]]:
    """Shuffle participants into groups and pair everyone within each group.

    Every group plays all C(k, 2) pairings in round 1. The group count is
    reduced when the field is too small to give every group two members.

    Returns:
        Tuple of (matches, groups), groups carrying all-zero standings
    """
    validate_participants_strict(participants)

    effective_count = max(1, min(group_count, len(participants) // 2))
    if effective_count != group_count:
        logger.info(
            f"Reducing group count from {group_count} to {effective_count} "
            f"for {len(participants)} participants"
        )

    shuffled = list(participants)
    (rng or random.Random()).shuffle(shuffled)

    matches: List[Match] = []
    groups: List[Group] = []
    for index, members in enumerate(split_evenly(shuffled, effective_count)):
        member_ids = [p.id for p in members]
        group = Group(
            name=group_name(index),
            participant_ids=member_ids,
            standings=initial_standings(member_ids),
        )
        groups.append(group)
        for position, (first, second) in enumerate(combinations(member_ids, 2)):
            matches.append(
                Match(
                    round=1,
                    position=position,
                    participant1_id=first,
                    participant2_id=second,
                    best_of=best_of,
                    group_id=group.id,
                )
            )

    logger.debug(f"Built {len(groups)} groups with {len(matches)} matches")
    return matches, groups


def build_championship(
    participants: Sequence[Participant],
    home_and_away: bool = False,
    best_of: int = 1,
) -> Tuple[List[Match], List[Group]]:
    """Pair every participant with every other one.

    All first legs are played in round 1. With ``home_and_away`` the return
    legs, with the slots mirrored, make up round 2.

    Returns:
        Tuple of (matches, [virtual group holding every participant])
    """
    validate_participants_strict(participants)

    ids = [p.id for p in participants]
    pairs = list(combinations(ids, 2))
    matches = [
        Match(
            round=1,
            position=position,
            participant1_id=home,
            participant2_id=away,
            best_of=best_of,
        )
        for position, (home, away) in enumerate(pairs)
    ]
    if home_and_away:
        matches.extend(
            Match(
                round=2,
                position=position,
                participant1_id=away,
                participant2_id=home,
                best_of=best_of,
            )
            for position, (home, away) in enumerate(pairs)
        )

    group = Group(
        name=CHAMPIONSHIP_GROUP_NAME,
        participant_ids=ids,
        standings=initial_standings(ids),
    )
    logger.debug(f"Built championship with {len(matches)} matches")
    return matches, [group]
