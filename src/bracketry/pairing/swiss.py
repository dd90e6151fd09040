"""Swiss system pairing.

Round 1 splits the ordered field into a top and a bottom half and pairs them
rank for rank. Later rounds pair greedily from the top of the live standings,
each player taking the unpaired opponent with the closest score.
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
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from bracketry.constants import (
    MATCH_COMPLETED,
    SEEDING_MANUAL,
    SEEDING_RANKED,
)
from bracketry.models.participant import Participant
from bracketry.models.tournament.format_rules import PointsScheme
from bracketry.models.tournament.match import Match
from bracketry.models.tournament.penalty import Penalty
from bracketry.models.tournament.standing import Standing
from bracketry.models.tournament.tournament_config import TournamentConfig
from bracketry.pairing.seeding import seed_sort_key
from bracketry.tournament.standings_calculator import calculate_standings
from bracketry.utils import setup_logger, utc_now
from bracketry.utils.validation import validate_participants_strict

logger = setup_logger(__name__)

SwissPairing = Tuple[str, Optional[str]]


def _bye_match(
    participant_id: str, round_number: int, position: int, best_of: int
) -> Match:
    return Match(
        round=round_number,
        position=position,
        participant1_id=participant_id,
        status=MATCH_COMPLETED,
        winner_id=participant_id,
        best_of=best_of,
        completed_at=utc_now(),
    )


def _matches_from_pairings(
    pairings: Sequence[SwissPairing], round_number: int, best_of: int
) -> List[Match]:
    matches = []
    for position, (first, second) in enumerate(pairings):
        if second is None:
            matches.append(_bye_match(first, round_number, position, best_of))
        else:
            matches.append(
                Match(
                    round=round_number,
                    position=position,
                    participant1_id=first,
                    participant2_id=second,
                    best_of=best_of,
                )
            )
    return matches


def build_first_swiss_round(
    participants: Sequence[Participant],
    seeding: str,
    rng: Optional[random.Random] = None,
    best_of: int = 1,
) -> List[Match]:
    """Pair rank i of the top half against rank i of the bottom half.

    Manual and ranked seeding order the field by seed (unseeded last);
    otherwise the field is shuffled. With an odd field the middle player,
    who has no counterpart in the bottom half, receives a completed bye.
    """
    validate_participants_strict(participants)

    ordered = list(participants)
    if seeding in (SEEDING_MANUAL, SEEDING_RANKED):
        ordered.sort(key=seed_sort_key)
    else:
        (rng or random.Random()).shuffle(ordered)

    half = math.ceil(len(ordered) / 2)
    pairings: List[SwissPairing] = []
    for index in range(half):
        partner = ordered[index + half] if index + half < len(ordered) else None
        pairings.append((ordered[index].id, partner.id if partner else None))

    logger.debug(f"Round 1 pairings: {pairings}")
    return _matches_from_pairings(pairings, 1, best_of)


def _closest_opponent(
    player: Standing,
    ranked: Sequence[Standing],
    paired: Set[str],
    allow_rematch: bool,
) -> Optional[Standing]:
    best: Optional[Standing] = None
    best_gap = math.inf
    for candidate in ranked:
        if candidate.participant_id == player.participant_id:
            continue
        if candidate.participant_id in paired:
            continue
        if not allow_rematch and candidate.participant_id in player.opponents:
            continue
        gap = abs(player.points - candidate.points)
        if gap < best_gap:
            best, best_gap = candidate, gap
    return best


def _greedy_pairings(
    ranked: Sequence[Standing], avoid_rematches: bool, rematch_fallback: bool
) -> List[SwissPairing]:
    paired: Set[str] = set()
    pairings: List[SwissPairing] = []
    byes: List[SwissPairing] = []
    for player in ranked:
        if player.participant_id in paired:
            continue
        opponent = _closest_opponent(
            player, ranked, paired, allow_rematch=not avoid_rematches
        )
        if opponent is None and avoid_rematches and rematch_fallback:
            opponent = _closest_opponent(player, ranked, paired, allow_rematch=True)
        paired.add(player.participant_id)
        if opponent is None:
            byes.append((player.participant_id, None))
        else:
            paired.add(opponent.participant_id)
            pairings.append((player.participant_id, opponent.participant_id))
    return pairings + byes


def pair_swiss_standings(
    ranked: Sequence[Standing], avoid_rematches: bool = True
) -> List[SwissPairing]:
    """Greedy closest-score pairing of standings already in pairing order.

    A strict no-rematch pass runs first. When it leaves more than the odd
    player out, the whole pass is retried letting each stranded player fall
    back to a rematch.

    Returns:
        (first, second) id pairs; a None second id is a bye
    """
    pairings = _greedy_pairings(ranked, avoid_rematches, rematch_fallback=False)
    byes = sum(1 for _, second in pairings if second is None)
    if byes > len(ranked) % 2:
        logger.info(
            f"No-rematch pairing left {byes} players unpaired, allowing rematches"
        )
        pairings = _greedy_pairings(ranked, avoid_rematches, rematch_fallback=True)
    return pairings


def swiss_pairing_order(standings: Iterable[Standing]) -> List[Standing]:
    """Descending (points, Buchholz); the sort is stable."""
    return sorted(standings, key=lambda s: (s.points, s.buchholz), reverse=True)


def build_next_swiss_round(
    participants: Sequence[Participant],
    matches: Sequence[Match],
    round_number: int,
    avoid_rematches: bool = True,
    config: Optional[TournamentConfig] = None,
    penalties: Iterable[Penalty] = (),
) -> List[Match]:
    """Pair round ``round_number`` from the standings of ``matches``.

    Args:
        participants: Participants to pair; anyone left out (for example an
            eliminated player) still counts towards Buchholz but is not paired
        matches: Every match played so far
        round_number: Number of the round being built
        avoid_rematches: Prefer opponents not faced yet
        config: Point values and best-of; defaults apply when omitted
        penalties: Point deductions folded into the standings

    Returns:
        The new round's matches, byes already completed
    """
    validate_participants_strict(participants, minimum=1)
    config = config or TournamentConfig()
    points = PointsScheme.from_config(config)

    active_ids = [p.id for p in participants]
    known_ids = list(active_ids)
    for match in matches:
        for pid in match.participant_ids:
            if pid not in known_ids:
                known_ids.append(pid)

    table = calculate_standings(known_ids, matches, points, penalties)
    active = set(active_ids)
    ranked = swiss_pairing_order(s for s in table if s.participant_id in active)

    pairings = pair_swiss_standings(ranked, avoid_rematches)
    logger.debug(f"Round {round_number} pairings: {pairings}")
    return _matches_from_pairings(pairings, round_number, config.best_of)
