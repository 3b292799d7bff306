"""Simple bot arena for Whot!."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Optional, Sequence

from whot.game import GameMode, create_session

from .base import BotStrategy
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "base": BotStrategy,
    "greedy": GreedyBot,
    "random": RandomBot,
}


def run_match(
    bots: Sequence[BotStrategy],
    *,
    seed: Optional[int] = None,
    max_turns: int = 1000,
) -> dict:
    """Play one game between ``bots`` and report how it ended.

    Seats are named ``bot0``, ``bot1``, ... in list order.
    """
    players = [f"bot{index}" for index in range(len(bots))]
    policies = dict(zip(players, bots))
    session = create_session(players, GameMode.FREE, seed=seed)
    state = session.state
    deck_size = state.total_cards()

    moves = 0
    while not state.is_finished() and moves < max_turns:
        player = state.current_player
        decision = policies[player].choose_move(
            state.hand(player).cards(),
            state.available_moves(player),
            state.top_card,
            state.requested_shape,
        )
        if decision.card is None:
            state.draw_card(player)
        else:
            state.play_card(player, decision.card.uid, decision.requested_shape)
        moves += 1
        if state.total_cards() != deck_size:
            raise RuntimeError(f"Card count drifted to {state.total_cards()} after move {moves}.")

    if not state.is_finished():
        logger.info("Match stopped after %d moves without a winner", moves)
    return {
        "winner": state.winner,
        "moves": moves,
        "hand_sizes": state.hand_sizes(),
        "names": {player: bot.name for player, bot in policies.items()},
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run bot matches.")
    parser.add_argument("--bots", nargs="+", default=["greedy", "random"], choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--max-turns", type=int, default=1000)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    wins: Dict[str, int] = {}
    for game_index in range(args.n):
        bots = [BOT_REGISTRY[name]() for name in args.bots]
        result = run_match(bots, seed=args.seed + game_index, max_turns=args.max_turns)
        winner = result["winner"] or "none"
        wins[winner] = wins.get(winner, 0) + 1
        logger.info("Game %d: winner=%s moves=%d", game_index + 1, winner, result["moves"])

    for seat, name in enumerate(args.bots):
        print(f"bot{seat} ({name}): {wins.get(f'bot{seat}', 0)}/{args.n} wins")
    if wins.get("none"):
        print(f"Unfinished: {wins['none']}")


if __name__ == "__main__":
    main()
