"""Bracketry: tournament bracket and standings engine.

Create tournaments in five formats (single elimination, double elimination,
groups, championship and Swiss), record results and let the engine move
winners forward, keep standings and name the champion.
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

from bracketry.exceptions import (
    BracketryException,
    IllegalTransitionException,
    InvalidInputException,
)
from bracketry.models import (
    Game,
    Group,
    Match,
    MatchScore,
    Participant,
    ParticipantStatus,
    Penalty,
    Standing,
    Tournament,
    TournamentConfig,
    TournamentEvent,
)
from bracketry.tournament import EngineResult, TournamentEngine

__version__ = "0.1.0"

__all__ = [
    "BracketryException",
    "EngineResult",
    "Game",
    "Group",
    "IllegalTransitionException",
    "InvalidInputException",
    "Match",
    "MatchScore",
    "Participant",
    "ParticipantStatus",
    "Penalty",
    "Standing",
    "Tournament",
    "TournamentConfig",
    "TournamentEngine",
    "TournamentEvent",
]
