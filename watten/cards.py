"""Card-related data structures and helpers for Watten."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Optional


class Suit(Enum):
    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(IntEnum):
    """Deck ranks, valued by their pip number (Ace is 1)."""

    ACE = 1
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.name.lower()


# Deck order within a suit; Ace is high in Watten.
RANK_ORDER: list[Rank] = [
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
    Rank.ACE,
]

ACE_VALUE = 14

# Any rank 1..13 may be named as trump rank, even ones the deck does not hold.
MIN_TRUMP_RANK = 1
MAX_TRUMP_RANK = 13

RANK_NAMES: dict[int, str] = {
    1: "Ace",
    11: "Jack",
    12: "Queen",
    13: "King",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        # Plain ints compare equal to their Rank, so normalise them here.
        object.__setattr__(self, "rank", Rank(self.rank))

    @property
    def value(self) -> int:
        return ACE_VALUE if self.rank is Rank.ACE else int(self.rank)

    def __str__(self) -> str:
        return card_label(self)


@dataclass(frozen=True)
class CriticalCard:
    rank: Rank
    suit: Suit
    level: int


# The three "holy" cards, strongest first.
CRITICAL_CARDS: tuple[CriticalCard, ...] = (
    CriticalCard(Rank.KING, Suit.HEARTS, 1),
    CriticalCard(Rank.SEVEN, Suit.CLUBS, 2),
    CriticalCard(Rank.SEVEN, Suit.SPADES, 3),
)


def rank_name(rank: int) -> str:
    return RANK_NAMES.get(int(rank), str(int(rank)))


def team_of(seat: int) -> int:
    """Seats 0 and 2 form team 0, seats 1 and 3 form team 1."""
    return seat % 2


def are_teammates(seat_a: int, seat_b: int) -> bool:
    return team_of(seat_a) == team_of(seat_b)


def next_seat(seat: int, num_players: int = 4) -> int:
    return (seat + 1) % num_players


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def parse_suit(value: "Suit | str") -> Suit:
    if isinstance(value, Suit):
        return value
    return Suit[value.upper()]


def card_label(card: Card) -> str:
    return f"{rank_name(card.rank)} of {card.suit.name.title()}"


def suit_label(suit: Optional[Suit]) -> Optional[str]:
    return suit.name.title() if suit is not None else None
