"""Simple bot arena for Watten."""

from __future__ import annotations

import argparse
from typing import Dict, Iterable, Optional, Sequence

from loguru import logger

from watten.cards import team_of
from watten.game import HandPhase
from watten.log import configure_logging
from watten.rules_schema import RuleSet
from watten.service import MatchService

from .base import BotStrategy
from .heuristic import HeuristicBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "heuristic": HeuristicBot,
    "random": RandomBot,
}

# Safety net against a stuck state machine; a hand needs at most 24 actions.
MAX_ACTIONS_PER_HAND = 64


def play_hand(service: MatchService, seats: Sequence[BotStrategy]) -> None:
    hand = service.controller.current_hand
    assert hand is not None
    for bot in dict.fromkeys(seats):
        bot.on_hand_start(hand)
    for _ in range(MAX_ACTIONS_PER_HAND):
        if hand.is_over():
            return
        if hand.phase is HandPhase.TRICK_COMPLETE:
            result = service.start_next_trick()
        else:
            seat = hand.current_player
            assert seat is not None
            result = service.play_bot_turn(seats[seat])
        if not result.ok:
            raise RuntimeError(f"Bot action rejected in phase {hand.phase}: {result.reason}")
    raise RuntimeError("Hand did not finish within the action limit.")


def play_match(service: MatchService, seats: Sequence[BotStrategy]) -> Optional[int]:
    service.new_match()
    while True:
        play_hand(service, seats)
        if service.is_match_over():
            return service.controller.winner()
        service.start_next_hand()


def run_match(
    bot_a: BotStrategy,
    bot_b: BotStrategy,
    *,
    n_matches: int = 1,
    seed: int | None = None,
    rules: RuleSet | None = None,
) -> dict:
    """Team 0 (seats 0 and 2) plays ``bot_a``, team 1 (seats 1 and 3) plays ``bot_b``."""
    service = MatchService(rules=rules or RuleSet(), seed=seed)
    seats = [bot_a if team_of(seat) == 0 else bot_b for seat in range(4)]
    wins = [0, 0]
    history = []
    for _ in range(n_matches):
        winner = play_match(service, seats)
        assert winner is not None
        wins[winner] += 1
        history.append(
            {
                "winner": winner,
                "scores": service.scores(),
                "hands": len(service.controller.hand_history),
            }
        )
        logger.info("Match won by team {} with scores {}", winner, service.scores())
    return {"wins": wins, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run bot-vs-bot Watten matches.")
    parser.add_argument("--bot-a", default="heuristic", choices=BOT_REGISTRY.keys())
    parser.add_argument("--bot-b", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--matches", type=int, default=10, help="Number of matches to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--no-criticals", action="store_true", help="Disable the critical cards.")
    parser.add_argument("--no-schleck", action="store_true", help="Skip cutting the deck.")
    parser.add_argument("--blind", action="store_true", help="Play Blind Watten.")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    rules = RuleSet(
        use_criticals=not args.no_criticals,
        use_schleck=not args.no_schleck,
        use_blind=args.blind,
    )
    bot_a = BOT_REGISTRY[args.bot_a]()
    bot_b = BOT_REGISTRY[args.bot_b]()
    results = run_match(bot_a, bot_b, n_matches=args.matches, seed=args.seed, rules=rules)

    print(f"Wins after {args.matches} matches: {args.bot_a}={results['wins'][0]} {args.bot_b}={results['wins'][1]}")


if __name__ == "__main__":
    main()
