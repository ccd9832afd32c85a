"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import List

from loguru import logger

from watten.cards import Card, Suit
from watten.game import HandEngine


class BotInvariantError(RuntimeError):
    """Raised in strict mode when a bot finds no legal card to play."""


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    def on_hand_start(self, hand: HandEngine) -> None:
        """Optional hook invoked at the start of each hand."""
        return None

    def choose_trump_rank(self, hand: HandEngine, player: int) -> int:
        """Return the trump rank to announce as rank selector."""
        return int(hand.hands[player][0].rank)

    def choose_trump_suit(self, hand: HandEngine, player: int) -> Suit:
        """Return the trump suit to announce as dealer."""
        return hand.hands[player][0].suit

    def play_card(self, hand: HandEngine, player: int) -> Card:
        """Return the card to play."""
        return self.legal_cards(hand, player)[0]

    def legal_cards(self, hand: HandEngine, player: int) -> List[Card]:
        """Legal moves, or the first card in hand when the rules leave nothing playable."""
        legal = hand.available_moves(player)
        if legal:
            return legal
        cards = hand.hands[player]
        message = f"{self.name}: no legal card for seat {player} holding {[str(card) for card in cards]}"
        logger.error(message)
        if self.strict or not cards:
            raise BotInvariantError(message)
        return [cards[0]]
