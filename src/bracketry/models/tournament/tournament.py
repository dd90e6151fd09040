"""Tournament aggregate: the single owner of all tournament state.

Engine components receive a Tournament, mutate it in place and hand it back;
the engine facade runs every operation on a copy so that callers only ever
see fully applied transitions.
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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from bracketry.constants import TOURNAMENT_DRAFT
from bracketry.exceptions import (
    MatchNotFoundException,
    ParticipantNotFoundException,
)
from bracketry.models.participant import Participant
from bracketry.models.tournament.event import TournamentEvent, create_event
from bracketry.models.tournament.format_rules import FormatRules, format_rules
from bracketry.models.tournament.match import Match
from bracketry.models.tournament.participant_status import ParticipantStatus
from bracketry.models.tournament.penalty import Penalty
from bracketry.models.tournament.standing import Group
from bracketry.models.tournament.tournament_config import TournamentConfig
from bracketry.utils import format_timestamp, generate_id, parse_timestamp, utc_now


@dataclass
class Tournament:
    """Complete, serializable state of one tournament.

    Attributes
    ----------
    name : str
        Tournament name.
    format : str
        One of the five supported formats.
    status : str
        draft, registration, in_progress, completed or cancelled.
    config : TournamentConfig
        Configuration settings.
    participants : list of Participant
        Entrants, in registration order.
    matches : list of Match
        Flat match collection; bracket links are computed from
        (round, position), never stored.
    groups : list of Group
        Groups with their cached standings.
    penalties : list of Penalty
        Point deductions.
    participant_statuses : list of ParticipantStatus
        Elimination state per participant (only for participants that were
        ever eliminated).
    events : list of TournamentEvent
        Append-only audit log.
    winner_id : str or None
        Champion, once resolved automatically or selected manually.
    """

    name: str
    format: str
    config: TournamentConfig = field(default_factory=TournamentConfig)
    status: str = TOURNAMENT_DRAFT
    description: Optional[str] = None
    participants: List[Participant] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    penalties: List[Penalty] = field(default_factory=list)
    participant_statuses: List[ParticipantStatus] = field(default_factory=list)
    events: List[TournamentEvent] = field(default_factory=list)
    winner_id: Optional[str] = None
    game: Optional[str] = None
    category: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: generate_id("tournament"))

    # ========== Properties ==========

    @property
    def rules(self) -> FormatRules:
        """Rules variant for this tournament's format."""
        return format_rules(self.format, self.config)

    @property
    def participant_ids(self) -> List[str]:
        return [p.id for p in self.participants]

    @property
    def rounds_played(self) -> int:
        """Highest round number that has matches, 0 before generation."""
        return max((m.round for m in self.matches), default=0)

    # ========== Lookups ==========

    def get_participant(self, participant_id: str) -> Participant:
        """Return the participant with ``participant_id``.

        Raises:
            ParticipantNotFoundException: If no such participant exists
        """
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        raise ParticipantNotFoundException(
            f"Participant '{participant_id}' is not in tournament '{self.name}'"
        )

    def participant_name(self, participant_id: Optional[str]) -> str:
        if participant_id is None:
            return "BYE"
        for participant in self.participants:
            if participant.id == participant_id:
                return participant.name
        return participant_id

    def get_match(self, match_id: str) -> Match:
        """Return the match with ``match_id``.

        Raises:
            MatchNotFoundException: If no such match exists
        """
        for match in self.matches:
            if match.id == match_id:
                return match
        raise MatchNotFoundException(
            f"Match '{match_id}' is not in tournament '{self.name}'"
        )

    def match_index(self) -> Dict[tuple, Match]:
        """Bracket matches keyed by (round, position); group matches excluded."""
        return {
            (m.round, m.position): m for m in self.matches if m.group_id is None
        }

    def match_at(self, round_number: int, position: int) -> Optional[Match]:
        return self.match_index().get((round_number, position))

    def matches_in_round(self, round_number: int) -> List[Match]:
        return sorted(
            (m for m in self.matches if m.round == round_number),
            key=lambda m: m.position,
        )

    def matches_of(self, participant_id: str) -> List[Match]:
        return [m for m in self.matches if m.has_participant(participant_id)]

    def get_group(self, group_id: str) -> Optional[Group]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def status_for(self, participant_id: str) -> Optional[ParticipantStatus]:
        for status in self.participant_statuses:
            if status.participant_id == participant_id:
                return status
        return None

    def is_eliminated(self, participant_id: str) -> bool:
        status = self.status_for(participant_id)
        return bool(status and status.is_eliminated)

    def active_participants(self) -> List[Participant]:
        return [p for p in self.participants if not self.is_eliminated(p.id)]

    # ========== Mutation helpers ==========

    def record_event(
        self, event_type: str, description: str, data: Optional[Dict[str, Any]] = None
    ) -> TournamentEvent:
        """Append an audit event and return it."""
        event = create_event(event_type, description, data)
        self.events.append(event)
        return event

    def touch(self) -> None:
        self.updated_at = utc_now()

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "format": self.format,
            "status": self.status,
            "config": self.config.to_dict(),
            "participants": [p.to_dict() for p in self.participants],
            "matches": [m.to_dict() for m in self.matches],
            "groups": [g.to_dict() for g in self.groups],
            "penalties": [p.to_dict() for p in self.penalties],
            "participant_statuses": [s.to_dict() for s in self.participant_statuses],
            "events": [e.to_dict() for e in self.events],
            "winner_id": self.winner_id,
            "game": self.game,
            "category": self.category,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
            "started_at": format_timestamp(self.started_at),
            "completed_at": format_timestamp(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Args:
            data: Dictionary containing tournament data

        Returns:
            Reconstructed Tournament object
        """
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            format=data["format"],
            status=data.get("status", TOURNAMENT_DRAFT),
            config=TournamentConfig.from_dict(data.get("config")),
            participants=[
                Participant.from_dict(p) for p in data.get("participants", [])
            ],
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            groups=[Group.from_dict(g) for g in data.get("groups", [])],
            penalties=[Penalty.from_dict(p) for p in data.get("penalties", [])],
            participant_statuses=[
                ParticipantStatus.from_dict(s)
                for s in data.get("participant_statuses", [])
            ],
            events=[TournamentEvent.from_dict(e) for e in data.get("events", [])],
            winner_id=data.get("winner_id"),
            game=data.get("game"),
            category=data.get("category"),
            created_at=parse_timestamp(data.get("created_at")) or utc_now(),
            updated_at=parse_timestamp(data.get("updated_at")) or utc_now(),
            started_at=parse_timestamp(data.get("started_at")),
            completed_at=parse_timestamp(data.get("completed_at")),
        )
