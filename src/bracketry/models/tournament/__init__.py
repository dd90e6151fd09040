"""Tournament data models."""

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

from bracketry.models.tournament.event import TournamentEvent, create_event
from bracketry.models.tournament.format_rules import (
    ChampionshipRules,
    DoubleEliminationRules,
    FormatRules,
    GroupStageRules,
    PointsScheme,
    SingleEliminationRules,
    SwissRules,
    format_rules,
    is_elimination,
)
from bracketry.models.tournament.match import Game, Match, MatchScore, ScoreAmendment
from bracketry.models.tournament.participant_status import ParticipantStatus
from bracketry.models.tournament.penalty import Penalty
from bracketry.models.tournament.standing import Group, Standing, initial_standings
from bracketry.models.tournament.tournament import Tournament
from bracketry.models.tournament.tournament_config import TournamentConfig

__all__ = [
    "ChampionshipRules",
    "DoubleEliminationRules",
    "FormatRules",
    "Game",
    "Group",
    "GroupStageRules",
    "Match",
    "MatchScore",
    "ParticipantStatus",
    "Penalty",
    "PointsScheme",
    "ScoreAmendment",
    "SingleEliminationRules",
    "Standing",
    "SwissRules",
    "Tournament",
    "TournamentConfig",
    "TournamentEvent",
    "create_event",
    "format_rules",
    "initial_standings",
    "is_elimination",
]
