"""Trick-playing state for one Watten hand."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from .cards import Card, Suit, next_seat, team_of
from .mechanics import legal_moves
from .rules_schema import RuleSet
from .trick import Trick, TrickError

NUM_PLAYERS = 4


class IllegalPlay(RuntimeError):
    """Raised when an illegal card play is attempted."""


@dataclass(frozen=True)
class TrickResult:
    plays: Tuple[Tuple[int, Card], ...]
    winner: int
    winning_card: Card
    team: int


@dataclass
class PlayState:
    hands: List[List[Card]]
    leader: int
    trump_rank: int
    trump_suit: Suit
    cutter: int
    dealer: int
    rules: RuleSet = field(default_factory=RuleSet)
    current_player: int = field(init=False)
    current_trick: Trick = field(init=False)
    tricks_won: List[int] = field(init=False)
    trick_history: List[TrickResult] = field(default_factory=list)
    last_trick_winner: Optional[int] = None
    hand_winner: Optional[int] = None

    def __post_init__(self) -> None:
        if len(self.hands) != NUM_PLAYERS:
            raise ValueError("PlayState supports exactly four players.")
        self.hands = [list(hand) for hand in self.hands]
        self.current_player = self.leader
        self.current_trick = Trick(leader=self.leader)
        self.tricks_won = [0, 0]

    def available_moves(self, player: int) -> List[Card]:
        if player != self.current_player:
            raise IllegalPlay("Not this player's turn.")
        return legal_moves(
            player,
            self.hands,
            self.current_trick,
            self.trump_rank,
            self.trump_suit,
            self.rules.use_criticals,
            self.rules.use_blind,
            self.cutter,
            self.dealer,
        )

    def trick_awaiting_clear(self) -> bool:
        return self.current_trick.is_full()

    def play_card(self, player: int, card: Card, *, force: bool = False) -> Optional[TrickResult]:
        """Play ``card`` for ``player``; returns the result when the card completes a trick.

        ``force`` skips the legality check but only when the legal set is empty,
        so a bot's invariant fallback can still be played.
        """
        if self.is_finished():
            raise IllegalPlay("The hand is already decided.")
        if self.trick_awaiting_clear():
            raise IllegalPlay("The completed trick must be cleared first.")
        if player != self.current_player:
            raise IllegalPlay("Not this player's turn.")
        if card not in self.hands[player]:
            raise IllegalPlay("Card not present in hand.")

        legal = self.available_moves(player)
        if card not in legal:
            if not force or legal:
                raise IllegalPlay(f"Card {card} is not legal in this context.")
            logger.error("Seat {} has no legal card; forcing {}", player, card)

        try:
            self.current_trick.add_play(player, card)
        except TrickError as exc:
            raise IllegalPlay(str(exc)) from exc
        self.hands[player].remove(card)
        logger.debug("Seat {} played {}", player, card)

        if self.current_trick.is_full():
            return self._complete_trick()
        self.current_player = next_seat(player, NUM_PLAYERS)
        return None

    def _complete_trick(self) -> TrickResult:
        winner, winning_card, _ = self.current_trick.winning_play(
            self.trump_rank, self.trump_suit, self.rules.use_criticals
        )
        team = team_of(winner)
        self.tricks_won[team] += 1
        result = TrickResult(
            plays=tuple(self.current_trick.plays),
            winner=winner,
            winning_card=winning_card,
            team=team,
        )
        self.trick_history.append(result)
        self.last_trick_winner = winner
        self.current_player = winner
        logger.debug("Seat {} won the trick with {}; tricks {}", winner, winning_card, self.tricks_won)

        if self.tricks_won[team] >= self.rules.scoring.tricks_to_win_hand:
            self.hand_winner = team
        return result

    def start_next_trick(self) -> None:
        if not self.trick_awaiting_clear():
            raise IllegalPlay("The current trick is still in progress.")
        if self.is_finished():
            raise IllegalPlay("The hand is already decided.")
        assert self.last_trick_winner is not None
        self.current_trick = Trick(leader=self.last_trick_winner)
        self.current_player = self.last_trick_winner

    def is_finished(self) -> bool:
        return self.hand_winner is not None
