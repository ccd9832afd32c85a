"""Greedy, teammate-aware Watten bot."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

from watten.cards import Card, Suit, are_teammates
from watten.game import HandEngine
from watten.scoring import card_score

from .base import BotStrategy


def best_rank(cards: Sequence[Card]) -> int:
    """Most frequent rank in ``cards``; ties go to the lowest rank number."""
    counts = Counter(int(card.rank) for card in cards)
    return min(counts, key=lambda rank: (-counts[rank], rank))


def best_suit(cards: Sequence[Card]) -> Suit:
    """Suit with the greatest summed card value; ties go to the earlier suit."""
    totals: Dict[Suit, int] = {suit: 0 for suit in Suit}
    for card in cards:
        totals[card.suit] += card.value
    return max(Suit, key=lambda suit: totals[suit])


class HeuristicBot(BotStrategy):
    """Lead high, spare cards behind a winning teammate, otherwise win as cheaply as possible.

    Only the strongest card already in the trick is considered, not what the
    remaining seats might still play.
    """

    name = "Heuristic"

    def choose_trump_rank(self, hand: HandEngine, player: int) -> int:
        return best_rank(hand.hands[player])

    def choose_trump_suit(self, hand: HandEngine, player: int) -> Suit:
        return best_suit(hand.hands[player])

    def play_card(self, hand: HandEngine, player: int) -> Card:
        assert hand.state is not None
        state = hand.state
        legal = self.legal_cards(hand, player)
        use_criticals = hand.rules.use_criticals
        trick = state.current_trick
        lead = trick.lead_suit(use_criticals)

        def score(card: Card) -> int:
            return card_score(card, state.trump_rank, state.trump_suit, use_criticals, lead)

        if trick.is_empty():
            return max(legal, key=score)

        winner, _, winning_score = trick.winning_play(state.trump_rank, state.trump_suit, use_criticals)
        if are_teammates(player, winner):
            return min(legal, key=score)

        beating = [card for card in legal if score(card) > winning_score]
        if beating:
            return min(beating, key=score)
        return min(legal, key=score)
