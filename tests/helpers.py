from random import Random
from typing import List, Sequence

from watten.cards import Card, Rank, Suit
from watten.deck import build_deck
from watten.game import HandEngine, HandPhase
from watten.rules_schema import RuleSet
from watten.state import PlayState

PLAIN_RULES = RuleSet(use_criticals=False, use_schleck=False)


class FixedRandom(Random):
    """Random source whose cut always lands on the same deck index."""

    def __init__(self, index: int) -> None:
        super().__init__(0)
        self.index = index

    def randrange(self, *args, **kwargs) -> int:
        return self.index


def c(rank: Rank, suit: Suit) -> Card:
    return Card(rank, suit)


def stacked_deck(hands: Sequence[Sequence[Card]], dealer: int) -> List[Card]:
    """Deck order that deals ``hands[seat]`` to every seat, dealing from the seat left of ``dealer``."""
    order = [(dealer + 1 + offset) % 4 for offset in range(4)]
    per_seat = len(hands[0])
    draws = [hands[order[k % 4]][k // 4] for k in range(4 * per_seat)]
    rest = [card for card in build_deck() if card not in draws]
    return rest + list(reversed(draws))


def hand_in_play(
    hands: Sequence[Sequence[Card]],
    *,
    trump_rank: int,
    trump_suit: Suit,
    leader: int = 0,
    dealer: int = 3,
    rules: RuleSet = PLAIN_RULES,
) -> HandEngine:
    """A hand engine skipped straight to the playing phase with the given cards."""
    hand = HandEngine(dealer=dealer, rules=rules, deck_order=build_deck())
    hand.trump_rank = trump_rank
    hand.trump_suit = trump_suit
    hand.state = PlayState(
        hands=[list(cards) for cards in hands],
        leader=leader,
        trump_rank=trump_rank,
        trump_suit=trump_suit,
        cutter=(dealer + 1) % 4,
        dealer=dealer,
        rules=rules,
    )
    hand.hands = hand.state.hands
    hand.phase = HandPhase.PLAYING
    return hand
