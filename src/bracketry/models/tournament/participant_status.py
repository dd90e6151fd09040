"""Participant elimination status."""

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
from typing import Any, Dict, List, Optional

from bracketry.type_hints import Snapshot
from bracketry.utils import format_timestamp, parse_timestamp


@dataclass
class ParticipantStatus:
    """Elimination state of a participant, with what is needed to undo it.

    Attributes
    ----------
    participant_id : str
        Participant this status belongs to.
    is_eliminated : bool
        Active (False) or eliminated (True).
    eliminated_at : datetime or None
        When the elimination was recorded.
    elimination_reason : str or None
        Free text given by the organiser.
    branch : str or None
        "repechage", "forfeit" or "status_only".
    forfeit_match_id : str or None
        Match the elimination event was recorded on.
    original_match_state : dict or None
        Full snapshot of the forfeit match before it was modified. None when
        the elimination did not touch the match.
    downstream_match_states : list of dict
        Snapshots of every later match the elimination modified.
    promoted_opponent_id : str or None
        Opponent spliced into the eliminated participant's slot (repechage).
    """

    participant_id: str
    is_eliminated: bool = False
    eliminated_at: Optional[datetime] = None
    elimination_reason: Optional[str] = None
    branch: Optional[str] = None
    forfeit_match_id: Optional[str] = None
    original_match_state: Optional[Snapshot] = None
    downstream_match_states: List[Snapshot] = field(default_factory=list)
    promoted_opponent_id: Optional[str] = None

    def clear(self) -> None:
        """Reset every field to its inactive default."""
        self.is_eliminated = False
        self.eliminated_at = None
        self.elimination_reason = None
        self.branch = None
        self.forfeit_match_id = None
        self.original_match_state = None
        self.downstream_match_states = []
        self.promoted_opponent_id = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "is_eliminated": self.is_eliminated,
            "eliminated_at": format_timestamp(self.eliminated_at),
            "elimination_reason": self.elimination_reason,
            "branch": self.branch,
            "forfeit_match_id": self.forfeit_match_id,
            "original_match_state": copy.deepcopy(self.original_match_state),
            "downstream_match_states": copy.deepcopy(self.downstream_match_states),
            "promoted_opponent_id": self.promoted_opponent_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantStatus":
        return cls(
            participant_id=data["participant_id"],
            is_eliminated=data.get("is_eliminated", False),
            eliminated_at=parse_timestamp(data.get("eliminated_at")),
            elimination_reason=data.get("elimination_reason"),
            branch=data.get("branch"),
            forfeit_match_id=data.get("forfeit_match_id"),
            original_match_state=copy.deepcopy(data.get("original_match_state")),
            downstream_match_states=copy.deepcopy(
                data.get("downstream_match_states", [])
            ),
            promoted_opponent_id=data.get("promoted_opponent_id"),
        )
