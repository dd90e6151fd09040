"""Standing and Group data classes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bracketry.utils import generate_id


@dataclass
class Standing:
    """Aggregated results of one participant.

    ``played`` is always ``won + drawn + lost`` and ``points`` is a cache of
    the fold over completed matches minus penalties; neither is ever edited
    independently of the match set.

    Attributes
    ----------
    participant_id : str
        Participant this row belongs to.
    won, drawn, lost : int
        Result counts (a bye counts as a win).
    scored_for, scored_against : float
        Score totals over completed matches.
    points : float
        Table points after penalties.
    buchholz : float
        Sum of opponents' points (Swiss only).
    opponents : list of str
        Opponents already faced, in order (byes excluded).
    """

    participant_id: str
    won: int = 0
    drawn: int = 0
    lost: int = 0
    scored_for: float = 0
    scored_against: float = 0
    points: float = 0
    buchholz: float = 0
    opponents: List[str] = field(default_factory=list)

    @property
    def played(self) -> int:
        return self.won + self.drawn + self.lost

    @property
    def differential(self) -> float:
        return self.scored_for - self.scored_against

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "participant_id": self.participant_id,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "scored_for": self.scored_for,
            "scored_against": self.scored_against,
            "points": self.points,
            "buchholz": self.buchholz,
            "opponents": list(self.opponents),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Standing":
        """Deserialize standing from dictionary (``played`` is derived)."""
        return cls(
            participant_id=data["participant_id"],
            won=data.get("won", 0),
            drawn=data.get("drawn", 0),
            lost=data.get("lost", 0),
            scored_for=data.get("scored_for", 0),
            scored_against=data.get("scored_against", 0),
            points=data.get("points", 0),
            buchholz=data.get("buchholz", 0),
            opponents=list(data.get("opponents", [])),
        )


def initial_standings(participant_ids: List[str]) -> List[Standing]:
    """All-zero standings for the given participants, in order."""
    return [Standing(participant_id=pid) for pid in participant_ids]


@dataclass
class Group:
    """A named subset of participants with its own standings table.

    Championship and Swiss tournaments use a single virtual group holding
    every participant.
    """

    name: str
    participant_ids: List[str] = field(default_factory=list)
    standings: List[Standing] = field(default_factory=list)
    id: str = field(default_factory=lambda: generate_id("group"))

    def standing_for(self, participant_id: str) -> Optional[Standing]:
        for standing in self.standings:
            if standing.participant_id == participant_id:
                return standing
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "participant_ids": list(self.participant_ids),
            "standings": [s.to_dict() for s in self.standings],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        return cls(
            id=data["id"],
            name=data["name"],
            participant_ids=list(data.get("participant_ids", [])),
            standings=[Standing.from_dict(s) for s in data.get("standings", [])],
        )
