"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from watten.cards import MAX_TRUMP_RANK, MIN_TRUMP_RANK, Card, Suit
from watten.game import HandEngine

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, *, strict: bool = False) -> None:
        super().__init__(strict=strict)
        self._rng = random.Random(seed)

    def choose_trump_rank(self, hand: HandEngine, player: int) -> int:
        return self._rng.randint(MIN_TRUMP_RANK, MAX_TRUMP_RANK)

    def choose_trump_suit(self, hand: HandEngine, player: int) -> Suit:
        return self._rng.choice(list(Suit))

    def play_card(self, hand: HandEngine, player: int) -> Card:
        return self._rng.choice(self.legal_cards(hand, player))
