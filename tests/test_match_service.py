from tests.helpers import PLAIN_RULES, stacked_deck
from bots.heuristic import HeuristicBot
from watten.cards import Card, Rank, Suit
from watten.events import EventType
from watten.game import HandPhase, MatchController
from watten.rules_schema import RuleSet
from watten.service import MatchService


def sweep_hands():
    seat0 = [Card(Rank.NINE, suit) for suit in Suit] + [Card(Rank.ACE, Suit.HEARTS)]
    seat1 = [Card(rank, Suit.CLUBS) for rank in (Rank.SEVEN, Rank.EIGHT, Rank.TEN, Rank.JACK, Rank.QUEEN)]
    seat2 = [Card(rank, Suit.DIAMONDS) for rank in (Rank.SEVEN, Rank.EIGHT, Rank.TEN, Rank.JACK, Rank.QUEEN)]
    seat3 = [Card(rank, Suit.SPADES) for rank in (Rank.SEVEN, Rank.EIGHT, Rank.TEN, Rank.JACK, Rank.QUEEN)]
    return [seat0, seat1, seat2, seat3]


def stacked_service(events=None) -> MatchService:
    controller = MatchController(rules=PLAIN_RULES, event_emitter=events.append if events is not None else None)
    controller.dealer = 3
    controller.start_hand(deck_order=stacked_deck(sweep_hands(), dealer=0))
    return MatchService(controller)


def test_initial_view():
    service = MatchService(seed=3)
    service.new_match()

    view = service.get_hand_view(perspective=0)
    assert view.phase == "cutting"
    assert view.dealer == 0
    assert view.cutter == 1
    assert view.hand == []
    assert view.trump_rank is None
    assert service.current_phase() is HandPhase.CUTTING
    assert service.current_player_seat() == 1


def test_commands_in_wrong_phase_are_rejected_with_a_reason():
    service = stacked_service()
    before = service.hands()

    result = service.play_card(1, before[1][0])
    assert not result.ok
    assert "phase" in result.reason
    assert not service.select_trump_suit(Suit.HEARTS).ok
    assert not service.perform_cut().ok
    assert service.hands() == before
    assert service.current_phase() is HandPhase.SELECTING_RANK


def test_illegal_play_is_rejected_and_state_kept():
    service = stacked_service()
    assert service.select_trump_rank(9).ok
    assert service.select_trump_suit("hearts").ok

    result = service.play_card(2, Card(Rank.SEVEN, Suit.DIAMONDS))
    assert not result.ok
    assert result.reason == "Not this player's turn."
    assert service.trick_so_far() == []
    assert service.current_player_seat() == 1


def test_full_hand_through_the_facade_emits_events():
    events = []
    service = stacked_service(events)
    hands = sweep_hands()
    service.select_trump_rank(9)
    service.select_trump_suit(Suit.HEARTS)

    plays = [
        [(1, hands[1][0]), (2, hands[2][0]), (3, hands[3][0]), (0, hands[0][0])],
        [(0, hands[0][1]), (1, hands[1][1]), (2, hands[2][1]), (3, hands[3][1])],
        [(0, hands[0][2]), (1, hands[1][2]), (2, hands[2][2]), (3, hands[3][2])],
    ]
    for trick in plays:
        for seat, card in trick:
            assert service.play_card(seat, card).ok
        if not service.is_hand_over():
            assert service.start_next_trick().ok

    assert service.is_hand_over()
    assert service.tricks_won_this_hand() == [3, 0]
    assert service.scores() == [2, 0]
    assert not service.is_match_over()

    kinds = [event.event_type for event in events]
    assert kinds[0] is EventType.HAND_STARTED
    assert kinds[1:3] == [EventType.TRUMP_RANK_CHOSEN, EventType.TRUMP_SUIT_CHOSEN]
    assert kinds.count(EventType.CARD_PLAYED) == 12
    assert kinds.count(EventType.TRICK_RESOLVED) == 3
    assert kinds[-1] is EventType.HAND_RESOLVED
    assert events[-1].data["team"] == 0

    view = service.get_match_view(perspective=0)
    assert view.hand is not None
    assert view.hand.phase == "hand_complete"
    assert view.hand.winning_team == 0
    assert len(view.hand.trick_history) == 3
    assert view.hand.remaining_cards == [2, 2, 2, 2]


def test_legal_moves_shown_to_seat_to_act():
    service = stacked_service()
    service.select_trump_rank(9)
    service.select_trump_suit(Suit.HEARTS)

    view = service.get_hand_view(perspective=1)
    assert view.current_player == 1
    assert view.trump_rank_label == "9"
    assert view.trump_suit == "Hearts"
    assert view.legal_move_labels == [
        "7 of Clubs",
        "8 of Clubs",
        "10 of Clubs",
        "Jack of Clubs",
        "Queen of Clubs",
    ]
    assert service.get_hand_view(perspective=2).legal_moves == []


def test_bot_turns_drive_every_phase():
    service = MatchService(rules=RuleSet(use_blind=True), seed=9)
    service.new_match()
    bot = HeuristicBot(strict=True)

    while not service.is_hand_over():
        if service.current_phase() is HandPhase.TRICK_COMPLETE:
            assert service.start_next_trick().ok
        else:
            assert service.play_bot_turn(bot).ok

    assert sum(service.scores()) == 2
    assert not service.play_bot_turn(bot).ok


def test_new_match_refused_mid_hand():
    service = stacked_service()
    hands = sweep_hands()
    service.select_trump_rank(9)
    service.select_trump_suit(Suit.HEARTS)
    assert service.play_card(1, hands[1][0]).ok

    result = service.new_match()
    assert not result.ok
    assert "in progress" in result.reason
    assert service.trick_so_far() == [(1, hands[1][0])]
    assert service.current_phase() is HandPhase.PLAYING
    assert service.current_player_seat() == 2


def test_queries_before_first_hand_return_empty_values():
    service = MatchService(seed=1)

    assert service.current_phase() is None
    assert service.current_player_seat() is None
    assert service.hands() == [[], [], [], []]
    assert service.trick_so_far() == []
    assert service.trump_rank() is None
    assert service.trump_suit() is None
    assert service.tricks_won_this_hand() == [0, 0]
    assert service.get_match_view().hand is None
    assert not service.play_bot_turn(HeuristicBot()).ok
