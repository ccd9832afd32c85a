"""Card strength evaluation for Watten.

Scores are only meaningful relative to each other inside one trick: a higher
score beats a lower one. The bands are

    critical cards       10000 / 9000 / 8000
    Rechte               5000
    trump rank           3000 + value
    trump suit           1000 + value
    lead suit            500 + value
    off-suit (with lead) 0
    no lead context      value
"""

from __future__ import annotations

from typing import Optional

from .cards import CRITICAL_CARDS, Card, Suit

SCORE_CRITICAL: dict[int, int] = {1: 10000, 2: 9000, 3: 8000}
SCORE_RECHTE = 5000
SCORE_TRUMP_RANK = 3000
SCORE_TRUMP_SUIT = 1000
SCORE_LEAD_SUIT = 500


def critical_level(card: Card, enabled: bool) -> Optional[int]:
    """Return the critical level (1 is strongest) or None."""
    if not enabled:
        return None
    for critical in CRITICAL_CARDS:
        if card.rank == critical.rank and card.suit is critical.suit:
            return critical.level
    return None


def is_critical(card: Card, enabled: bool) -> bool:
    return critical_level(card, enabled) is not None


def card_score(
    card: Card,
    trump_rank: Optional[int],
    trump_suit: Optional[Suit],
    use_criticals: bool,
    lead_suit: Optional[Suit] = None,
) -> int:
    level = critical_level(card, use_criticals)
    if level is not None:
        return SCORE_CRITICAL[level]

    is_trump_rank = trump_rank is not None and card.rank == trump_rank
    is_trump_suit = trump_suit is not None and card.suit is trump_suit

    if is_trump_rank and is_trump_suit:
        return SCORE_RECHTE
    if is_trump_rank:
        return SCORE_TRUMP_RANK + card.value
    if is_trump_suit:
        return SCORE_TRUMP_SUIT + card.value
    if lead_suit is not None and lead_suit is not trump_suit and card.suit is lead_suit:
        return SCORE_LEAD_SUIT + card.value
    if lead_suit is not None and card.suit is not lead_suit:
        return 0
    return card.value


def lead_suit_for(first_card: Optional[Card], use_criticals: bool) -> Optional[Suit]:
    """Critical cards belong to no suit, so they set no lead suit."""
    if first_card is None or is_critical(first_card, use_criticals):
        return None
    return first_card.suit
