"""Notifications emitted by the engine for presentation layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class EventType(str, Enum):
    HAND_STARTED = "hand_started"
    CUT_REVEALED = "cut_revealed"
    TRUMP_RANK_CHOSEN = "trump_rank_chosen"
    TRUMP_SUIT_CHOSEN = "trump_suit_chosen"
    CARD_PLAYED = "card_played"
    TRICK_RESOLVED = "trick_resolved"
    HAND_RESOLVED = "hand_resolved"
    MATCH_RESOLVED = "match_resolved"


@dataclass(frozen=True)
class GameEvent:
    event_type: EventType
    seat: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)


EventEmitter = Callable[[GameEvent], None]
