"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cards import Card, Suit
from .scoring import card_score, lead_suit_for

PLAYERS_PER_TRICK = 4


class TrickError(RuntimeError):
    """Raised when trick play breaks ordering constraints."""


@dataclass
class Trick:
    leader: int
    plays: List[Tuple[int, Card]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.plays

    def is_full(self) -> bool:
        return len(self.plays) == PLAYERS_PER_TRICK

    def add_play(self, player: int, card: Card) -> None:
        if self.is_full():
            raise TrickError("Trick already complete.")
        if not self.plays and player != self.leader:
            raise TrickError("Only the leader can start the trick.")
        if any(seat == player for seat, _ in self.plays):
            raise TrickError(f"Seat {player} already played to this trick.")
        self.plays.append((player, card))

    def first_card(self) -> Optional[Card]:
        return self.plays[0][1] if self.plays else None

    def lead_suit(self, use_criticals: bool) -> Optional[Suit]:
        return lead_suit_for(self.first_card(), use_criticals)

    def winning_play(
        self,
        trump_rank: Optional[int],
        trump_suit: Optional[Suit],
        use_criticals: bool,
    ) -> Tuple[int, Card, int]:
        """Return (seat, card, score) of the strongest play so far.

        Works on partial tricks too; earlier plays win ties.
        """
        if not self.plays:
            raise TrickError("Cannot determine winner on empty trick.")
        lead = self.lead_suit(use_criticals)
        winning_player, winning_card = self.plays[0]
        winning_score = card_score(winning_card, trump_rank, trump_suit, use_criticals, lead)
        for player, card in self.plays[1:]:
            score = card_score(card, trump_rank, trump_suit, use_criticals, lead)
            if score > winning_score:
                winning_player, winning_card, winning_score = player, card, score
        return winning_player, winning_card, winning_score
