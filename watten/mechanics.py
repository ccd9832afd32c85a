"""Legal move generation for Watten."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .cards import Card, Suit
from .scoring import card_score, is_critical, lead_suit_for
from .trick import Trick


def holds_plain_trump(hand: Sequence[Card], trump_rank: Optional[int], trump_suit: Optional[Suit], use_criticals: bool) -> bool:
    """True if the hand has a trump-suit card that is neither critical nor of trump rank."""
    return any(
        card.suit is trump_suit and card.rank != trump_rank and not is_critical(card, use_criticals)
        for card in hand
    )


def is_card_play_valid(
    card: Card,
    player: int,
    hands: Sequence[Sequence[Card]],
    trick: Trick,
    trump_rank: Optional[int],
    trump_suit: Optional[Suit],
    use_criticals: bool,
    use_blind: bool,
    cutter: int,
    dealer: int,
) -> bool:
    """Return True if ``player`` may play ``card`` into ``trick``.

    Only a trump-suit lead restricts the follower: a seat still holding a plain
    trump card must either play trump suit or beat the led card. Critical cards
    are suitless and always playable. In blind mode only the cutter and dealer
    know trump, so everybody else is exempt.
    """
    first = trick.first_card()
    if first is None:
        return True
    if is_critical(card, use_criticals):
        return True
    if is_critical(first, use_criticals):
        return True
    if first.suit is not trump_suit:
        return True
    if use_blind and player not in (cutter, dealer):
        return True
    if not holds_plain_trump(hands[player], trump_rank, trump_suit, use_criticals):
        return True
    if card.suit is trump_suit:
        return True

    lead = lead_suit_for(first, use_criticals)
    return card_score(card, trump_rank, trump_suit, use_criticals, lead) > card_score(
        first, trump_rank, trump_suit, use_criticals, lead
    )


def legal_moves(
    player: int,
    hands: Sequence[Sequence[Card]],
    trick: Trick,
    trump_rank: Optional[int],
    trump_suit: Optional[Suit],
    use_criticals: bool,
    use_blind: bool,
    cutter: int,
    dealer: int,
) -> List[Card]:
    """Return the cards of ``player``'s hand that may be played, in hand order."""
    return [
        card
        for card in hands[player]
        if is_card_play_valid(
            card,
            player,
            hands,
            trick,
            trump_rank,
            trump_suit,
            use_criticals,
            use_blind,
            cutter,
            dealer,
        )
    ]
