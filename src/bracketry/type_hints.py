"""Type hints used in Bracketry."""

from typing import Any, Dict, List, Literal, Optional, Tuple

# Tournament format literals
TournamentFormat = Literal[
    "single_elimination",
    "double_elimination",
    "groups",
    "championship",
    "swiss",
]

TournamentStatus = Literal[
    "draft", "registration", "in_progress", "completed", "cancelled"
]
MatchStatus = Literal["pending", "in_progress", "completed", "cancelled"]
SeedingMode = Literal["random", "manual", "ranked"]
BracketSide = Literal["winners", "losers", "finals"]

# Slot index inside a match (1 = participant1, 2 = participant2)
Slot = Literal[1, 2]

# A participant id, or None for an empty slot / bye
MaybeParticipantId = Optional[str]
# (round, position) key of a match
MatchKey = Tuple[int, int]
# Serialized snapshot of a model
Snapshot = Dict[str, Any]
# Participant ids tied for a position
TieSet = List[str]
