"""Participant data class."""

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
from typing import Any, Dict, Optional

from bracketry.utils import generate_id


@dataclass
class Participant:
    """A player or team entered in a tournament.

    Attributes
    ----------
    id : str
        Stable identifier.
    name : str
        Display name.
    seed : int or None
        Pre-assigned rank (1..N, unique among seeded participants).
    metadata : dict
        Opaque data carried for the caller (club, rating, ...).
    avatar : str or None
        Optional image reference, never interpreted by the engine.
    """

    id: str
    name: str
    seed: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    avatar: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: str,
        seed: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "Participant":
        """Create a participant with a fresh id."""
        return cls(
            id=generate_id("participant"),
            name=name,
            seed=seed,
            metadata=dict(metadata or {}),
        )

    @property
    def is_seeded(self) -> bool:
        return self.seed is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "seed": self.seed,
            "metadata": dict(self.metadata),
            "avatar": self.avatar,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            seed=data.get("seed"),
            metadata=dict(data.get("metadata") or {}),
            avatar=data.get("avatar"),
        )
