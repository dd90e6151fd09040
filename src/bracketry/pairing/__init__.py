"""Pairing and bracket generation for all tournament formats."""

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
from typing import List, Optional, Sequence, Tuple

from bracketry.constants import BRACKET_WINNERS, SWISS_GROUP_NAME
from bracketry.models.participant import Participant
from bracketry.models.tournament.format_rules import (
    ChampionshipRules,
    DoubleEliminationRules,
    GroupStageRules,
    SingleEliminationRules,
    SwissRules,
    format_rules,
)
from bracketry.models.tournament.match import Match
from bracketry.models.tournament.standing import Group, initial_standings
from bracketry.models.tournament.tournament_config import TournamentConfig
from bracketry.pairing.elimination import build_single_elimination
from bracketry.pairing.round_robin import build_championship, build_group_stage
from bracketry.pairing.seeding import (
    compute_seed_order,
    compute_slot_for_seed,
    next_power_of_two,
    rounds_for,
)
from bracketry.pairing.swiss import build_first_swiss_round, build_next_swiss_round
from bracketry.utils.validation import validate_config_strict


def build_bracket(
    participants: Sequence[Participant],
    tournament_format: str,
    config: Optional[TournamentConfig] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Match], List[Group]]:
    """Generate the initial match set of a tournament.

    Elimination formats return the full bracket and no groups; group stage
    and championship return every round-robin match with their groups; Swiss
    returns round 1 and a single standings group.

    Raises:
        InvalidConfigurationException: For an unknown format or bad settings
        InvalidParticipantsException: For fewer than two participants
    """
    config = config or TournamentConfig()
    validate_config_strict(config)
    rules = format_rules(tournament_format, config)

    if isinstance(rules, SingleEliminationRules):
        matches = build_single_elimination(
            participants, rules.seeding, rng, rules.best_of, rules.best_of_final
        )
        return matches, []
    if isinstance(rules, DoubleEliminationRules):
        # Winners bracket only; no losers bracket or grand final
        matches = build_single_elimination(
            participants,
            rules.seeding,
            rng,
            rules.best_of,
            rules.best_of_final,
            bracket=BRACKET_WINNERS,
        )
        return matches, []
    if isinstance(rules, GroupStageRules):
        return build_group_stage(participants, rules.group_count, rng, rules.best_of)
    if isinstance(rules, ChampionshipRules):
        return build_championship(participants, rules.home_and_away, rules.best_of)
    if isinstance(rules, SwissRules):
        matches = build_first_swiss_round(
            participants, rules.seeding, rng, rules.best_of
        )
        ids = [p.id for p in participants]
        group = Group(
            name=SWISS_GROUP_NAME, participant_ids=ids, standings=initial_standings(ids)
        )
        return matches, [group]
    raise AssertionError(f"Unhandled rules type: {type(rules).__name__}")


__all__ = [
    "build_bracket",
    "build_championship",
    "build_first_swiss_round",
    "build_group_stage",
    "build_next_swiss_round",
    "build_single_elimination",
    "compute_seed_order",
    "compute_slot_for_seed",
    "next_power_of_two",
    "rounds_for",
]
