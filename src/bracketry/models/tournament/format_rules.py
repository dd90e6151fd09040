"""Per-format rules derived from a tournament's format and configuration.

Each tournament format maps to exactly one frozen rules class carrying only
the settings that format uses. Engine operations call :func:`format_rules`
once and dispatch on the resulting type.
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
from dataclasses import dataclass
from typing import Optional, Union

from bracketry.constants import (
    FORMAT_CHAMPIONSHIP,
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_GROUPS,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    SWISS_ROUNDS_AUTO,
)
from bracketry.exceptions import InvalidConfigurationException
from bracketry.models.tournament.tournament_config import TournamentConfig


@dataclass(frozen=True)
class PointsScheme:
    """Table points awarded per result."""

    win: float
    draw: float
    loss: float

    @classmethod
    def from_config(cls, config: TournamentConfig) -> "PointsScheme":
        return cls(
            win=config.points_win, draw=config.points_draw, loss=config.points_loss
        )


@dataclass(frozen=True)
class SingleEliminationRules:
    seeding: str
    best_of: int
    best_of_final: Optional[int]
    high_score_wins: bool


@dataclass(frozen=True)
class DoubleEliminationRules:
    """Only the winners bracket is generated; see DESIGN.md."""

    seeding: str
    best_of: int
    best_of_final: Optional[int]
    high_score_wins: bool


@dataclass(frozen=True)
class GroupStageRules:
    group_count: int
    points: PointsScheme
    best_of: int
    high_score_wins: bool
    use_head_to_head: bool


@dataclass(frozen=True)
class ChampionshipRules:
    home_and_away: bool
    points: PointsScheme
    best_of: int
    high_score_wins: bool
    use_head_to_head: bool


@dataclass(frozen=True)
class SwissRules:
    seeding: str
    rounds: Union[int, str]
    avoid_rematches: bool
    points: PointsScheme
    best_of: int
    high_score_wins: bool
    use_head_to_head: bool

    def total_rounds(self, participant_count: int) -> int:
        """Configured round count, or ceil(log2(N)) when set to auto."""
        if self.rounds == SWISS_ROUNDS_AUTO:
            return max(1, math.ceil(math.log2(max(participant_count, 2))))
        return int(self.rounds)


FormatRules = Union[
    SingleEliminationRules,
    DoubleEliminationRules,
    GroupStageRules,
    ChampionshipRules,
    SwissRules,
]

ELIMINATION_RULES = (SingleEliminationRules, DoubleEliminationRules)


def format_rules(tournament_format: str, config: TournamentConfig) -> FormatRules:
    """Build the rules variant for ``tournament_format``.

    Raises:
        InvalidConfigurationException: If the format is not one of the five
            supported formats.
    """
    points = PointsScheme.from_config(config)
    if tournament_format == FORMAT_SINGLE_ELIMINATION:
        return SingleEliminationRules(
            seeding=config.seeding,
            best_of=config.best_of,
            best_of_final=config.best_of_final,
            high_score_wins=config.high_score_wins,
        )
    if tournament_format == FORMAT_DOUBLE_ELIMINATION:
        return DoubleEliminationRules(
            seeding=config.seeding,
            best_of=config.best_of,
            best_of_final=config.best_of_final,
            high_score_wins=config.high_score_wins,
        )
    if tournament_format == FORMAT_GROUPS:
        return GroupStageRules(
            group_count=config.group_count,
            points=points,
            best_of=config.best_of,
            high_score_wins=config.high_score_wins,
            use_head_to_head=config.use_head_to_head,
        )
    if tournament_format == FORMAT_CHAMPIONSHIP:
        return ChampionshipRules(
            home_and_away=config.home_and_away,
            points=points,
            best_of=config.best_of,
            high_score_wins=config.high_score_wins,
            use_head_to_head=config.use_head_to_head,
        )
    if tournament_format == FORMAT_SWISS:
        return SwissRules(
            seeding=config.seeding,
            rounds=config.swiss_rounds,
            avoid_rematches=config.swiss_avoid_rematches,
            points=points,
            best_of=config.best_of,
            high_score_wins=config.high_score_wins,
            use_head_to_head=config.use_head_to_head,
        )
    raise InvalidConfigurationException(
        f"Tournament format '{tournament_format}' is not supported"
    )


def is_elimination(rules: FormatRules) -> bool:
    return isinstance(rules, ELIMINATION_RULES)
