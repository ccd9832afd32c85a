"""Convenience service layer for presentation layers and bots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from loguru import logger

from .cards import Card, Suit, card_label, rank_name, serialize_card, suit_label
from .deck import DeckError
from .events import EventEmitter
from .game import HandEngine, HandPhase, InvalidPhaseAction, MatchController
from .rules_schema import RuleSet
from .state import NUM_PLAYERS, IllegalPlay

if TYPE_CHECKING:
    from bots.base import BotStrategy


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    reason: Optional[str] = None


@dataclass
class TrickPlayView:
    player: int
    card: dict
    label: str


@dataclass
class HandView:
    phase: str
    dealer: int
    cutter: int
    current_player: Optional[int]
    trump_rank: Optional[int]
    trump_rank_label: Optional[str]
    trump_suit: Optional[str]
    cut_card: Optional[dict]
    hand: list[dict]
    hand_labels: list[str]
    legal_moves: list[dict]
    legal_move_labels: list[str]
    remaining_cards: list[int]
    trick: list[TrickPlayView]
    tricks_won: list[int]
    trick_history: list[dict]
    winning_team: Optional[int]


@dataclass
class MatchView:
    scores: list[int]
    dealer: int
    match_over: bool
    winner: Optional[int]
    hand: Optional[HandView]


class MatchService:
    """Facade around MatchController; every command reports success or a reason."""

    def __init__(self, controller: Optional[MatchController] = None, *, rules: Optional[RuleSet] = None, seed: Optional[int] = None) -> None:
        self.controller = controller or MatchController(rules=rules or RuleSet(), seed=seed)

    def set_event_emitter(self, emitter: Optional[EventEmitter]) -> None:
        self.controller.set_event_emitter(emitter)

    # Queries -----------------------------------------------------------
    # Before the first hand is dealt these return empty values, never raise.

    def current_phase(self) -> Optional[HandPhase]:
        hand = self.controller.current_hand
        return hand.phase if hand is not None else None

    def hands(self) -> List[List[Card]]:
        hand = self.controller.current_hand
        if hand is None:
            return [[] for _ in range(NUM_PLAYERS)]
        return [list(cards) for cards in hand.hands]

    def trick_so_far(self) -> List[Tuple[int, Card]]:
        hand = self.controller.current_hand
        return hand.trick_so_far() if hand is not None else []

    def trump_rank(self) -> Optional[int]:
        hand = self.controller.current_hand
        return hand.trump_rank if hand is not None else None

    def trump_suit(self) -> Optional[Suit]:
        hand = self.controller.current_hand
        return hand.trump_suit if hand is not None else None

    def scores(self) -> List[int]:
        return list(self.controller.scores)

    def tricks_won_this_hand(self) -> List[int]:
        hand = self.controller.current_hand
        return hand.tricks_won() if hand is not None else [0, 0]

    def dealer_seat(self) -> int:
        return self.controller.dealer

    def current_player_seat(self) -> Optional[int]:
        hand = self.controller.current_hand
        return hand.current_player if hand is not None else None

    def is_hand_over(self) -> bool:
        hand = self.controller.current_hand
        return hand is None or hand.is_over()

    def is_match_over(self) -> bool:
        return self.controller.is_match_over()

    def has_active_hand(self) -> bool:
        return self.controller.current_hand is not None

    # Commands ----------------------------------------------------------

    def new_match(self) -> CommandResult:
        return self._run("new_match", self.controller.start_match)

    def start_next_hand(self) -> CommandResult:
        return self._run("start_next_hand", self.controller.start_hand)

    def perform_cut(self) -> CommandResult:
        return self._run("perform_cut", lambda: self._require_hand().perform_cut())

    def select_trump_rank(self, rank: int) -> CommandResult:
        return self._run("select_trump_rank", lambda: self._require_hand().select_trump_rank(rank))

    def select_trump_suit(self, suit: "Suit | str") -> CommandResult:
        return self._run("select_trump_suit", lambda: self._require_hand().select_trump_suit(suit))

    def play_card(self, seat: int, card: Card) -> CommandResult:
        return self._run("play_card", lambda: self._require_hand().play_card(seat, card))

    def start_next_trick(self) -> CommandResult:
        return self._run("start_next_trick", lambda: self._require_hand().start_next_trick())

    def play_bot_turn(self, bot: "BotStrategy") -> CommandResult:
        """Apply ``bot``'s decision for whichever seat has to act."""
        hand = self.controller.current_hand
        if hand is None:
            return CommandResult(False, "No active hand.")
        seat = hand.current_player
        if seat is None:
            return CommandResult(False, "No seat has to act in this phase.")
        if hand.phase is HandPhase.CUTTING:
            return self.perform_cut()
        if hand.phase is HandPhase.SELECTING_RANK:
            return self.select_trump_rank(bot.choose_trump_rank(hand, seat))
        if hand.phase is HandPhase.SELECTING_SUIT:
            return self.select_trump_suit(bot.choose_trump_suit(hand, seat))
        if hand.phase is HandPhase.PLAYING:
            # An empty legal set means the bot fell back to its first card.
            force = not hand.available_moves(seat)
            card = bot.play_card(hand, seat)
            return self._run("play_card", lambda: hand.play_card(seat, card, force=force))
        return CommandResult(False, f"Bots do not act in phase {hand.phase}.")

    # Views -------------------------------------------------------------

    def get_match_view(self, perspective: int = 0) -> MatchView:
        return MatchView(
            scores=self.scores(),
            dealer=self.controller.dealer,
            match_over=self.controller.is_match_over(),
            winner=self.controller.winner(),
            hand=self.get_hand_view(perspective) if self.has_active_hand() else None,
        )

    def get_hand_view(self, perspective: int = 0) -> HandView:
        hand = self._require_hand()
        visible = list(hand.hands[perspective])
        legal: list[Card] = []
        if hand.phase is HandPhase.PLAYING and hand.current_player == perspective:
            legal = hand.available_moves(perspective)

        trick_history: list[dict] = []
        if hand.state is not None:
            for result in hand.state.trick_history:
                trick_history.append(
                    {
                        "plays": [
                            {"player": player, "card": serialize_card(card), "label": card_label(card)}
                            for player, card in result.plays
                        ],
                        "winner": result.winner,
                        "team": result.team,
                    }
                )

        return HandView(
            phase=str(hand.phase),
            dealer=hand.dealer,
            cutter=hand.cutter,
            current_player=hand.current_player,
            trump_rank=hand.trump_rank,
            trump_rank_label=rank_name(hand.trump_rank) if hand.trump_rank is not None else None,
            trump_suit=suit_label(hand.trump_suit),
            cut_card=serialize_card(hand.cut_card) if hand.cut_card is not None else None,
            hand=[serialize_card(card) for card in visible],
            hand_labels=[card_label(card) for card in visible],
            legal_moves=[serialize_card(card) for card in legal],
            legal_move_labels=[card_label(card) for card in legal],
            remaining_cards=[len(cards) for cards in hand.hands],
            trick=[
                TrickPlayView(player=player, card=serialize_card(card), label=card_label(card))
                for player, card in hand.trick_so_far()
            ],
            tricks_won=hand.tricks_won(),
            trick_history=trick_history,
            winning_team=hand.winning_team,
        )

    # Helpers -----------------------------------------------------------

    def _run(self, name: str, action: Callable[[], object]) -> CommandResult:
        try:
            action()
        except (IllegalPlay, InvalidPhaseAction) as exc:
            logger.warning("Rejected {}: {}", name, exc)
            return CommandResult(False, str(exc))
        except DeckError:
            logger.exception("Deck bookkeeping failed during {}", name)
            raise
        return CommandResult(True)

    def _require_hand(self) -> HandEngine:
        if self.controller.current_hand is None:
            raise InvalidPhaseAction("No active hand.")
        return self.controller.current_hand
