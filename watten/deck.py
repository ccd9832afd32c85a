"""Deck management for Watten."""

from __future__ import annotations

from random import Random
from typing import Iterator, List, Optional, Sequence

from loguru import logger

from .cards import RANK_ORDER, Card, Suit

DECK_SIZE = 32


class DeckError(RuntimeError):
    """Base class for deck bookkeeping failures."""


class EmptyDeck(DeckError):
    """Raised when drawing from a deck with no cards left."""


class InsufficientCards(DeckError):
    """Raised when a deal asks for more cards than the deck holds."""


def build_deck() -> List[Card]:
    """Return the ordered 32-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in RANK_ORDER]


class Deck:
    """The 32-card Watten deck. The top of the deck is the end of ``cards``."""

    def __init__(self, rng: Optional[Random] = None, cards: Optional[Sequence[Card]] = None) -> None:
        self.rng = rng if rng is not None else Random()
        self.cards: List[Card] = []
        if cards is not None:
            self.cards = list(cards)
        else:
            self.reset()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def count(self) -> int:
        return len(self.cards)

    def reset(self) -> None:
        self.cards = build_deck()

    def shuffle(self) -> None:
        # Random.shuffle is an in-place Fisher-Yates permutation.
        self.rng.shuffle(self.cards)

    def draw(self) -> Card:
        if not self.cards:
            raise EmptyDeck("Cannot draw from an empty deck.")
        return self.cards.pop()

    def peek_random(self) -> Card:
        """Reveal a random card without taking it out of the deck."""
        if not self.cards:
            raise EmptyDeck("Cannot reveal a card from an empty deck.")
        return self.cards[self.rng.randrange(len(self.cards))]

    def remove(self, card: Card) -> Card:
        try:
            self.cards.remove(card)
        except ValueError as exc:
            raise DeckError(f"{card} is not in the deck.") from exc
        return card

    def deal(self, num_players: int, per_player: int) -> List[List[Card]]:
        """Deal ``per_player`` cards to each player, one card per player per round."""
        return self.deal_counts([per_player] * num_players)

    def deal_counts(self, counts: Sequence[int]) -> List[List[Card]]:
        """Round-robin deal where player ``i`` receives ``counts[i]`` cards."""
        if any(count < 0 for count in counts):
            raise ValueError("Card counts must not be negative.")
        needed = sum(counts)
        if needed > len(self.cards):
            raise InsufficientCards(f"Deal needs {needed} cards but only {len(self.cards)} remain.")

        hands: List[List[Card]] = [[] for _ in counts]
        for round_index in range(max(counts, default=0)):
            for player, count in enumerate(counts):
                if round_index < count:
                    hands[player].append(self.draw())
        logger.debug("Dealt {} cards, {} left in deck", needed, len(self.cards))
        return hands
