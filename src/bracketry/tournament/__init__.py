"""Tournament progression engine.

The components in this package each own one concern of a running
tournament; :class:`TournamentEngine` ties them together behind a
copy-on-write facade.
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

from bracketry.tournament.elimination_manager import EliminationManager
from bracketry.tournament.engine import EngineResult, TournamentEngine
from bracketry.tournament.result_processor import MatchResultProcessor
from bracketry.tournament.standings_calculator import (
    calculate_standings,
    refresh_standings,
)
from bracketry.tournament.tiebreak_resolver import rank_standings, sort_standings
from bracketry.tournament.winner_resolver import TournamentWinnerResolver

__all__ = [
    "EliminationManager",
    "EngineResult",
    "MatchResultProcessor",
    "TournamentEngine",
    "TournamentWinnerResolver",
    "calculate_standings",
    "rank_standings",
    "refresh_standings",
    "sort_standings",
]
