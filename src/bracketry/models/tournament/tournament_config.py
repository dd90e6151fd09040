"""TournamentConfig data class."""

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

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from bracketry.constants import (
    DEFAULT_BEST_OF,
    DEFAULT_GROUP_COUNT,
    DEFAULT_POINTS_DRAW,
    DEFAULT_POINTS_LOSS,
    DEFAULT_POINTS_WIN,
    DEFAULT_QUALIFIERS_PER_GROUP,
    SEEDING_RANDOM,
    SWISS_ROUNDS_AUTO,
)

# Keys of the external configuration record
_RECORD_ALIASES = {
    "groupCount": "group_count",
    "qualifiersPerGroup": "qualifiers_per_group",
    "pointsWin": "points_win",
    "pointsDraw": "points_draw",
    "pointsLoss": "points_loss",
    "homeAndAway": "home_and_away",
    "highScoreWins": "high_score_wins",
    "useHeadToHead": "use_head_to_head",
    "swissRounds": "swiss_rounds",
    "swissAvoidRematches": "swiss_avoid_rematches",
    "bestOf": "best_of",
    "bestOfFinal": "best_of_final",
    "thirdPlaceMatch": "third_place_match",
}


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    seeding : str
        Bracket / first-round ordering: "random", "manual" or "ranked".
    group_count : int
        Number of groups in the group stage format.
    qualifiers_per_group : int
        Recorded for the caller; no playoff stage is generated, so the
        group stage rules ignore it.
    points_win, points_draw, points_loss : float
        Table points per result.
    home_and_away : bool
        Championship plays every pairing twice with mirrored fixtures.
    high_score_wins : bool
        Score polarity; False means the lowest score wins.
    use_head_to_head : bool
        Break perfect two-way ties on head-to-head results.
    swiss_rounds : int or "auto"
        Number of Swiss rounds; "auto" means ceil(log2(N)).
    swiss_avoid_rematches : bool
        Avoid pairing participants who already met.
    best_of : int
        Default number of games per match.
    best_of_final : int or None
        Override of ``best_of`` for the final of an elimination bracket.
    third_place_match : bool
        Recorded for the caller; no third-place match is generated.
    """

    seeding: str = SEEDING_RANDOM
    group_count: int = DEFAULT_GROUP_COUNT
    qualifiers_per_group: int = DEFAULT_QUALIFIERS_PER_GROUP
    points_win: float = DEFAULT_POINTS_WIN
    points_draw: float = DEFAULT_POINTS_DRAW
    points_loss: float = DEFAULT_POINTS_LOSS
    home_and_away: bool = False
    high_score_wins: bool = True
    use_head_to_head: bool = False
    swiss_rounds: Union[int, str] = SWISS_ROUNDS_AUTO
    swiss_avoid_rematches: bool = True
    best_of: int = DEFAULT_BEST_OF
    best_of_final: Optional[int] = None
    third_place_match: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TournamentConfig":
        """Deserialize configuration from dictionary.

        Accepts both the snake_case keys written by :meth:`to_dict` and the
        camelCase keys of the external configuration record. Unknown keys are
        ignored.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _RECORD_ALIASES.get(key, key)
            if name in known and value is not None:
                values[name] = value
        return cls(**values)
