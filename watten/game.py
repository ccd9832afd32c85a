"""High-level hand and match orchestration for Watten."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from .cards import MAX_TRUMP_RANK, MIN_TRUMP_RANK, Card, Suit, card_label, next_seat, parse_suit
from .deck import DECK_SIZE, Deck
from .events import EventEmitter, EventType, GameEvent
from .rules_schema import RuleSet
from .scoring import critical_level
from .state import NUM_PLAYERS, PlayState, TrickResult

CARDS_PER_HAND = 5
# Seat 3 deals "before" the match so the first rotation gives the deal to seat 0.
INITIAL_DEALER = NUM_PLAYERS - 1


class InvalidPhaseAction(RuntimeError):
    """Raised when a command is issued in a phase that does not accept it."""


class HandPhase(Enum):
    CUTTING = auto()
    SELECTING_RANK = auto()
    SELECTING_SUIT = auto()
    PLAYING = auto()
    TRICK_COMPLETE = auto()
    HAND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.lower()


def phase_plan(rules: RuleSet) -> Tuple[HandPhase, ...]:
    """Ordered setup phases leading into play for the given rules."""
    phases: List[HandPhase] = []
    if rules.cutting_enabled:
        phases.append(HandPhase.CUTTING)
    phases.extend([HandPhase.SELECTING_RANK, HandPhase.SELECTING_SUIT, HandPhase.PLAYING])
    return tuple(phases)


@dataclass
class HandEngine:
    """Manage a single hand of Watten, from the cut to the third won trick."""

    dealer: int
    rules: RuleSet = field(default_factory=RuleSet)
    rng: Optional[Random] = None
    deck_order: Optional[Sequence[Card]] = None
    event_emitter: Optional[EventEmitter] = None
    on_complete: Optional[Callable[[int], None]] = None

    phase: HandPhase = field(init=False)
    plan: Tuple[HandPhase, ...] = field(init=False)
    deck: Deck = field(init=False)
    hands: List[List[Card]] = field(init=False)
    cutter: int = field(init=False)
    rank_selector: int = field(init=False)
    suit_selector: int = field(init=False)
    cut_card: Optional[Card] = field(init=False, default=None)
    cut_claimed: bool = field(init=False, default=False)
    trump_rank: Optional[int] = field(init=False, default=None)
    trump_suit: Optional[Suit] = field(init=False, default=None)
    state: Optional[PlayState] = field(init=False, default=None)
    winning_team: Optional[int] = field(init=False, default=None)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = Random()
        # A preset order is taken as already shuffled.
        self.deck = Deck(rng=self.rng, cards=self.deck_order)
        if self.deck_order is None:
            self.deck.shuffle()
        if len(self.deck) != DECK_SIZE:
            raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")

        self.rank_selector = next_seat(self.dealer, NUM_PLAYERS)
        self.cutter = self.rank_selector
        self.suit_selector = self.dealer
        self.hands = [[] for _ in range(NUM_PLAYERS)]
        self.plan = phase_plan(self.rules)
        self.phase = self.plan[0]

        self._emit(EventType.HAND_STARTED, seat=self.dealer, dealer=self.dealer)
        if self.phase is not HandPhase.CUTTING:
            self._deal()

    # Commands ----------------------------------------------------------

    def perform_cut(self) -> Card:
        self._ensure_phase(HandPhase.CUTTING)
        if self.cut_card is not None:
            raise InvalidPhaseAction("The deck has already been cut this hand.")

        card = self.deck.peek_random()
        self.cut_card = card
        if critical_level(card, self.rules.use_criticals) is not None:
            self.deck.remove(card)
            self.cut_claimed = True
            logger.debug("Seat {} cut the critical {} and keeps it", self.cutter, card)
        else:
            logger.debug("Seat {} cut the {}", self.cutter, card)

        self._emit(
            EventType.CUT_REVEALED,
            seat=self.cutter,
            card=card,
            label=card_label(card),
            kept=self.cut_claimed,
        )
        self._deal()
        self._advance_setup()
        return card

    def select_trump_rank(self, rank: int) -> None:
        self._ensure_phase(HandPhase.SELECTING_RANK)
        if isinstance(rank, bool) or not isinstance(rank, int):
            raise InvalidPhaseAction(f"Trump rank must be an integer, got {rank!r}.")
        if not MIN_TRUMP_RANK <= rank <= MAX_TRUMP_RANK:
            raise InvalidPhaseAction(f"Trump rank must be between {MIN_TRUMP_RANK} and {MAX_TRUMP_RANK}.")
        self.trump_rank = int(rank)
        logger.debug("Seat {} chose trump rank {}", self.rank_selector, self.trump_rank)
        self._emit(EventType.TRUMP_RANK_CHOSEN, seat=self.rank_selector, rank=self.trump_rank)
        self._advance_setup()

    def select_trump_suit(self, suit: "Suit | str") -> None:
        self._ensure_phase(HandPhase.SELECTING_SUIT)
        try:
            chosen = parse_suit(suit)
        except (KeyError, AttributeError) as exc:
            raise InvalidPhaseAction(f"Unknown suit: {suit!r}") from exc
        self.trump_suit = chosen
        logger.debug("Seat {} chose trump suit {}", self.suit_selector, chosen)
        self._emit(EventType.TRUMP_SUIT_CHOSEN, seat=self.suit_selector, suit=chosen)
        self._advance_setup()

    def play_card(self, player: int, card: Card, *, force: bool = False) -> Optional[TrickResult]:
        self._ensure_phase(HandPhase.PLAYING)
        assert self.state is not None
        result = self.state.play_card(player, card, force=force)
        self._emit(EventType.CARD_PLAYED, seat=player, card=card, label=card_label(card))
        if result is None:
            return None

        self._emit(
            EventType.TRICK_RESOLVED,
            seat=result.winner,
            winner=result.winner,
            team=result.team,
            card=result.winning_card,
        )
        if self.state.is_finished():
            self._finish_hand()
        else:
            self.phase = HandPhase.TRICK_COMPLETE
        return result

    def start_next_trick(self) -> None:
        self._ensure_phase(HandPhase.TRICK_COMPLETE)
        assert self.state is not None
        self.state.start_next_trick()
        self.phase = HandPhase.PLAYING

    # Queries -----------------------------------------------------------

    @property
    def current_player(self) -> Optional[int]:
        if self.phase is HandPhase.CUTTING:
            return self.cutter
        if self.phase is HandPhase.SELECTING_RANK:
            return self.rank_selector
        if self.phase is HandPhase.SELECTING_SUIT:
            return self.suit_selector
        if self.phase in (HandPhase.PLAYING, HandPhase.TRICK_COMPLETE):
            assert self.state is not None
            return self.state.current_player
        return None

    def trick_so_far(self) -> List[Tuple[int, Card]]:
        if self.state is None:
            return []
        return list(self.state.current_trick.plays)

    def tricks_won(self) -> List[int]:
        if self.state is None:
            return [0, 0]
        return list(self.state.tricks_won)

    def available_moves(self, player: int) -> List[Card]:
        self._ensure_phase(HandPhase.PLAYING)
        assert self.state is not None
        return self.state.available_moves(player)

    def is_over(self) -> bool:
        return self.phase is HandPhase.HAND_COMPLETE

    def card_accounting(self) -> int:
        """Count every card of the deck wherever it currently sits."""
        total = len(self.deck) + sum(len(hand) for hand in self.hands)
        if self.state is not None:
            total += sum(len(result.plays) for result in self.state.trick_history)
            if not self.state.current_trick.is_full():
                total += len(self.state.current_trick.plays)
        return total

    # Internals ---------------------------------------------------------

    def _deal(self) -> None:
        order = [(self.dealer + 1 + offset) % NUM_PLAYERS for offset in range(NUM_PLAYERS)]
        counts = [
            CARDS_PER_HAND - 1 if self.cut_claimed and seat == self.cutter else CARDS_PER_HAND
            for seat in order
        ]
        dealt = self.deck.deal_counts(counts)
        hands: List[List[Card]] = [[] for _ in range(NUM_PLAYERS)]
        for seat, cards in zip(order, dealt):
            if self.cut_claimed and seat == self.cutter:
                assert self.cut_card is not None
                hands[seat].append(self.cut_card)
            hands[seat].extend(cards)
        self.hands = hands

    def _advance_setup(self) -> None:
        index = self.plan.index(self.phase)
        self.phase = self.plan[index + 1]
        if self.phase is HandPhase.PLAYING:
            self._start_play()

    def _start_play(self) -> None:
        assert self.trump_rank is not None and self.trump_suit is not None
        self.state = PlayState(
            hands=self.hands,
            leader=self.rank_selector,
            trump_rank=self.trump_rank,
            trump_suit=self.trump_suit,
            cutter=self.cutter,
            dealer=self.dealer,
            rules=self.rules,
        )
        self.hands = self.state.hands

    def _finish_hand(self) -> None:
        assert self.state is not None and self.state.hand_winner is not None
        self.winning_team = self.state.hand_winner
        self.phase = HandPhase.HAND_COMPLETE
        logger.info("Team {} won the hand, tricks {}", self.winning_team, self.state.tricks_won)
        self._emit(EventType.HAND_RESOLVED, team=self.winning_team, tricks=list(self.state.tricks_won))
        if self.on_complete is not None:
            self.on_complete(self.winning_team)

    def _emit(self, event_type: EventType, *, seat: Optional[int] = None, **data) -> None:
        if self.event_emitter is None:
            return
        self.event_emitter(GameEvent(event_type=event_type, seat=seat, data=data))

    def _ensure_phase(self, expected: HandPhase) -> None:
        if self.phase != expected:
            raise InvalidPhaseAction(f"Action not allowed in phase {self.phase}. Expected {expected}.")


@dataclass(frozen=True)
class HandResult:
    winning_team: int
    points: int
    new_scores: Tuple[int, int]
    match_over: bool


@dataclass
class MatchController:
    """Track team scores and the dealer across the hands of one match."""

    rules: RuleSet = field(default_factory=RuleSet)
    seed: Optional[int] = None
    scores: List[int] = field(default_factory=lambda: [0, 0])
    dealer: int = INITIAL_DEALER
    rng: Random = field(init=False)
    current_hand: Optional[HandEngine] = field(default=None, init=False)
    hand_history: List[HandResult] = field(default_factory=list)
    match_winner: Optional[int] = field(default=None, init=False)
    event_emitter: Optional[EventEmitter] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)

    def set_event_emitter(self, emitter: Optional[EventEmitter]) -> None:
        self.event_emitter = emitter
        if self.current_hand is not None:
            self.current_hand.event_emitter = emitter

    def start_match(self) -> HandEngine:
        """Reset scores and deal the first hand; a match is only abandoned between hands."""
        hand = self.current_hand
        if hand is not None and not hand.is_over() and not self.is_match_over():
            raise InvalidPhaseAction("A hand is in progress; finish it before starting a new match.")
        self.scores = [0, 0]
        self.dealer = INITIAL_DEALER
        self.hand_history = []
        self.match_winner = None
        self.current_hand = None
        logger.info("Starting a new match with {}", self.rules)
        return self.start_hand()

    def start_hand(self, deck_order: Optional[Sequence[Card]] = None) -> HandEngine:
        if self.is_match_over():
            raise InvalidPhaseAction("The match is over; start a new match instead.")
        if self.current_hand is not None and not self.current_hand.is_over():
            raise InvalidPhaseAction("The current hand is still being played.")
        self.dealer = next_seat(self.dealer, NUM_PLAYERS)
        self.current_hand = HandEngine(
            dealer=self.dealer,
            rules=self.rules,
            rng=self.rng,
            deck_order=deck_order,
            event_emitter=self.event_emitter,
            on_complete=self.on_hand_complete,
        )
        return self.current_hand

    def on_hand_complete(self, winning_team: int) -> HandResult:
        if self.is_match_over():
            raise InvalidPhaseAction("The match is already decided.")
        if winning_team not in (0, 1):
            raise ValueError(f"Unknown team {winning_team}.")
        points = self.rules.scoring.points_per_hand
        self.scores[winning_team] += points
        if self.scores[winning_team] >= self.rules.scoring.target_score:
            self.match_winner = winning_team

        result = HandResult(
            winning_team=winning_team,
            points=points,
            new_scores=(self.scores[0], self.scores[1]),
            match_over=self.match_winner is not None,
        )
        self.hand_history.append(result)
        logger.info("Scores after hand {}: {}", len(self.hand_history), self.scores)

        if self.match_winner is not None:
            logger.info("Team {} won the match", self.match_winner)
            if self.event_emitter is not None:
                self.event_emitter(
                    GameEvent(
                        event_type=EventType.MATCH_RESOLVED,
                        data={"team": self.match_winner, "scores": list(self.scores)},
                    )
                )
        return result

    def is_match_over(self) -> bool:
        return self.match_winner is not None

    def winner(self) -> Optional[int]:
        return self.match_winner
