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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
LOGGER_ROOT = "bracketry"
LOG_LEVEL_ENV_VAR = "BRACKETRY_LOG_LEVEL"

# Tournament formats
FORMAT_SINGLE_ELIMINATION = "single_elimination"
FORMAT_DOUBLE_ELIMINATION = "double_elimination"
FORMAT_GROUPS = "groups"
FORMAT_CHAMPIONSHIP = "championship"
FORMAT_SWISS = "swiss"

ELIMINATION_FORMATS = (FORMAT_SINGLE_ELIMINATION, FORMAT_DOUBLE_ELIMINATION)
STANDINGS_FORMATS = (FORMAT_GROUPS, FORMAT_CHAMPIONSHIP, FORMAT_SWISS)
ALL_FORMATS = ELIMINATION_FORMATS + STANDINGS_FORMATS

# Tournament lifecycle
TOURNAMENT_DRAFT = "draft"
TOURNAMENT_REGISTRATION = "registration"
TOURNAMENT_IN_PROGRESS = "in_progress"
TOURNAMENT_COMPLETED = "completed"
TOURNAMENT_CANCELLED = "cancelled"

# Match lifecycle
MATCH_PENDING = "pending"
MATCH_IN_PROGRESS = "in_progress"
MATCH_COMPLETED = "completed"
MATCH_CANCELLED = "cancelled"

# Seeding modes
SEEDING_RANDOM = "random"
SEEDING_MANUAL = "manual"
SEEDING_RANKED = "ranked"
SEEDING_MODES = (SEEDING_RANDOM, SEEDING_MANUAL, SEEDING_RANKED)

# Default points (football style)
DEFAULT_POINTS_WIN = 3
DEFAULT_POINTS_DRAW = 1
DEFAULT_POINTS_LOSS = 0

DEFAULT_GROUP_COUNT = 4
DEFAULT_QUALIFIERS_PER_GROUP = 2
DEFAULT_BEST_OF = 1
SWISS_ROUNDS_AUTO = "auto"

# Score awarded when a participant forfeits: winner 3, forfeiter 0
FORFEIT_WINNER_SCORE = 3
FORFEIT_LOSER_SCORE = 0

# Bracket tags (double elimination only generates the winners bracket)
BRACKET_WINNERS = "winners"

# Virtual group names
CHAMPIONSHIP_GROUP_NAME = "Standings"
SWISS_GROUP_NAME = "Swiss standings"

# Elimination branches recorded on a participant status
BRANCH_REPECHAGE = "repechage"
BRANCH_FORFEIT = "forfeit"
BRANCH_STATUS_ONLY = "status_only"

# Event types
EVENT_TOURNAMENT_CREATED = "tournament_created"
EVENT_TOURNAMENT_STARTED = "tournament_started"
EVENT_TOURNAMENT_COMPLETED = "tournament_completed"
EVENT_PARTICIPANT_ADDED = "participant_added"
EVENT_PARTICIPANT_REMOVED = "participant_removed"
EVENT_SEEDS_SWAPPED = "seeds_swapped"
EVENT_BRACKET_GENERATED = "bracket_generated"
EVENT_SWISS_ROUND_GENERATED = "swiss_round_generated"
EVENT_MATCH_STARTED = "match_started"
EVENT_MATCH_COMPLETED = "match_completed"
EVENT_MATCH_SCORE_UPDATED = "match_score_updated"
EVENT_MATCH_RESET = "match_reset"
EVENT_PENALTY_ADDED = "penalty_added"
EVENT_PENALTY_REMOVED = "penalty_removed"
EVENT_PARTICIPANT_ELIMINATED = "participant_eliminated"
EVENT_PARTICIPANT_REINSTATED = "participant_reinstated"
EVENT_WINNER_SELECTED = "winner_selected"

EVENT_TYPES = (
    EVENT_TOURNAMENT_CREATED,
    EVENT_TOURNAMENT_STARTED,
    EVENT_TOURNAMENT_COMPLETED,
    EVENT_PARTICIPANT_ADDED,
    EVENT_PARTICIPANT_REMOVED,
    EVENT_SEEDS_SWAPPED,
    EVENT_BRACKET_GENERATED,
    EVENT_SWISS_ROUND_GENERATED,
    EVENT_MATCH_STARTED,
    EVENT_MATCH_COMPLETED,
    EVENT_MATCH_SCORE_UPDATED,
    EVENT_MATCH_RESET,
    EVENT_PENALTY_ADDED,
    EVENT_PENALTY_REMOVED,
    EVENT_PARTICIPANT_ELIMINATED,
    EVENT_PARTICIPANT_REINSTATED,
    EVENT_WINNER_SELECTED,
)

# Debounce delay for remote snapshot writes, in seconds
DEFAULT_SYNC_DELAY = 0.5
