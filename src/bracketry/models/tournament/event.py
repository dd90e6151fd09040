"""Tournament audit events."""

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

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from bracketry.constants import EVENT_TYPES
from bracketry.utils import format_timestamp, generate_id, parse_timestamp, utc_now


@dataclass
class TournamentEvent:
    """Append-only audit record.

    The engine writes events but never reads them back to make a decision;
    they exist for display and history only.
    """

    type: str
    description: str
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=lambda: generate_id("event"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "description": self.description,
            "data": copy.deepcopy(self.data),
            "timestamp": format_timestamp(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentEvent":
        return cls(
            id=data["id"],
            type=data["type"],
            description=data.get("description", ""),
            data=copy.deepcopy(data.get("data") or {}),
            timestamp=parse_timestamp(data.get("timestamp")) or utc_now(),
        )


def create_event(
    event_type: str, description: str, data: Optional[Dict[str, Any]] = None
) -> TournamentEvent:
    """Build an event, rejecting unknown event types."""
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown tournament event type: {event_type}")
    return TournamentEvent(type=event_type, description=description, data=data or {})
