"""Match data classes: score, sub-games, amendment history and the match itself."""

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
from typing import Any, Dict, List, Optional

from bracketry.constants import (
    MATCH_CANCELLED,
    MATCH_COMPLETED,
    MATCH_IN_PROGRESS,
    MATCH_PENDING,
)
from bracketry.type_hints import MaybeParticipantId, Slot
from bracketry.utils import format_timestamp, generate_id, parse_timestamp


@dataclass
class MatchScore:
    """Score pair of a match (or of one game of a best-of)."""

    participant1_score: float
    participant2_score: float

    def score_for(self, slot: Slot) -> float:
        return self.participant1_score if slot == 1 else self.participant2_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant1_score": self.participant1_score,
            "participant2_score": self.participant2_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchScore":
        return cls(
            participant1_score=data["participant1_score"],
            participant2_score=data["participant2_score"],
        )


@dataclass
class Game:
    """One game of a best-of-N match, carrying its own winner."""

    game_number: int
    participant1_score: float
    participant2_score: float
    winner_id: Optional[str] = None
    completed_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: generate_id("game"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "game_number": self.game_number,
            "participant1_score": self.participant1_score,
            "participant2_score": self.participant2_score,
            "winner_id": self.winner_id,
            "completed_at": format_timestamp(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        return cls(
            id=data["id"],
            game_number=data["game_number"],
            participant1_score=data["participant1_score"],
            participant2_score=data["participant2_score"],
            winner_id=data.get("winner_id"),
            completed_at=parse_timestamp(data.get("completed_at")),
        )


@dataclass
class ScoreAmendment:
    """Entry of a match's amendment history: the score that was replaced."""

    previous_score: MatchScore
    modified_at: datetime
    previous_winner_id: Optional[str] = None
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "previous_score": self.previous_score.to_dict(),
            "modified_at": format_timestamp(self.modified_at),
            "previous_winner_id": self.previous_winner_id,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreAmendment":
        return cls(
            previous_score=MatchScore.from_dict(data["previous_score"]),
            modified_at=parse_timestamp(data["modified_at"]),
            previous_winner_id=data.get("previous_winner_id"),
            reason=data.get("reason"),
        )


@dataclass
class Match:
    """A single match between up to two participants.

    Attributes
    ----------
    id : str
        Unique match id.
    round : int
        Round number (1-indexed).
    position : int
        Position within the round (0-indexed).
    participant1_id, participant2_id : str or None
        Slot occupants. An empty slot is either "to be decided" (a later
        bracket round) or a permanent bye.
    score : MatchScore or None
        Current score; kept on partial saves.
    winner_id, loser_id : str or None
        Set only while the match is completed with a decisive result.
    status : str
        One of pending, in_progress, completed, cancelled.
    score_history : list of ScoreAmendment
        Scores replaced by amendments, oldest first.
    games : list of Game
        Sub-games of a best-of-N match.
    best_of : int
        Number of games the match is played over.
    bracket : str or None
        Bracket tag ("winners" for double elimination).
    group_id : str or None
        Owning group for group-stage matches.
    """

    round: int
    position: int
    participant1_id: MaybeParticipantId = None
    participant2_id: MaybeParticipantId = None
    status: str = MATCH_PENDING
    score: Optional[MatchScore] = None
    winner_id: Optional[str] = None
    loser_id: Optional[str] = None
    score_history: List[ScoreAmendment] = field(default_factory=list)
    games: List[Game] = field(default_factory=list)
    best_of: int = 1
    bracket: Optional[str] = None
    group_id: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: generate_id("match"))

    # ========== Slot helpers ==========

    @property
    def participant_ids(self) -> List[str]:
        """Filled slots, in slot order."""
        return [pid for pid in (self.participant1_id, self.participant2_id) if pid]

    @property
    def is_full(self) -> bool:
        return bool(self.participant1_id and self.participant2_id)

    @property
    def is_bye(self) -> bool:
        """A completed match with exactly one participant."""
        return self.status == MATCH_COMPLETED and len(self.participant_ids) == 1

    @property
    def is_completed(self) -> bool:
        return self.status == MATCH_COMPLETED

    @property
    def is_unresolved(self) -> bool:
        return self.status in (MATCH_PENDING, MATCH_IN_PROGRESS)

    @property
    def is_cancelled(self) -> bool:
        return self.status == MATCH_CANCELLED

    def has_participant(self, participant_id: str) -> bool:
        return participant_id in (self.participant1_id, self.participant2_id)

    def slot_of(self, participant_id: str) -> Optional[Slot]:
        """Return 1 or 2 for the slot holding ``participant_id``."""
        if self.participant1_id == participant_id:
            return 1
        if self.participant2_id == participant_id:
            return 2
        return None

    def occupant(self, slot: Slot) -> MaybeParticipantId:
        return self.participant1_id if slot == 1 else self.participant2_id

    def set_occupant(self, slot: Slot, participant_id: MaybeParticipantId) -> None:
        if slot == 1:
            self.participant1_id = participant_id
        else:
            self.participant2_id = participant_id

    def opponent_of(self, participant_id: str) -> MaybeParticipantId:
        if self.participant1_id == participant_id:
            return self.participant2_id
        if self.participant2_id == participant_id:
            return self.participant1_id
        return None

    def reset(self) -> None:
        """Return the match to pending, dropping any result."""
        self.status = MATCH_PENDING
        self.score = None
        self.winner_id = None
        self.loser_id = None
        self.games = []
        self.started_at = None
        self.completed_at = None

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round": self.round,
            "position": self.position,
            "participant1_id": self.participant1_id,
            "participant2_id": self.participant2_id,
            "status": self.status,
            "score": self.score.to_dict() if self.score else None,
            "winner_id": self.winner_id,
            "loser_id": self.loser_id,
            "score_history": [a.to_dict() for a in self.score_history],
            "games": [g.to_dict() for g in self.games],
            "best_of": self.best_of,
            "bracket": self.bracket,
            "group_id": self.group_id,
            "started_at": format_timestamp(self.started_at),
            "completed_at": format_timestamp(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        score = data.get("score")
        return cls(
            id=data["id"],
            round=data["round"],
            position=data["position"],
            participant1_id=data.get("participant1_id"),
            participant2_id=data.get("participant2_id"),
            status=data.get("status", MATCH_PENDING),
            score=MatchScore.from_dict(score) if score else None,
            winner_id=data.get("winner_id"),
            loser_id=data.get("loser_id"),
            score_history=[
                ScoreAmendment.from_dict(a) for a in data.get("score_history", [])
            ],
            games=[Game.from_dict(g) for g in data.get("games", [])],
            best_of=data.get("best_of", 1),
            bracket=data.get("bracket"),
            group_id=data.get("group_id"),
            started_at=parse_timestamp(data.get("started_at")),
            completed_at=parse_timestamp(data.get("completed_at")),
        )
