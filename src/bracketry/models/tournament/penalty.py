"""Penalty data class."""

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
from datetime import datetime
from typing import Any, Dict

from bracketry.utils import format_timestamp, generate_id, parse_timestamp, utc_now


@dataclass
class Penalty:
    """Point deduction applied to a participant's standings.

    Penalties never change played/won/lost counts, only the point total.
    A negative ``points`` value acts as a bonus.
    """

    participant_id: str
    points: float
    reason: str
    created_at: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=lambda: generate_id("penalty"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "participant_id": self.participant_id,
            "points": self.points,
            "reason": self.reason,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Penalty":
        return cls(
            id=data["id"],
            participant_id=data["participant_id"],
            points=data["points"],
            reason=data.get("reason", ""),
            created_at=parse_timestamp(data.get("created_at")) or utc_now(),
        )
