import argparse
import logging
import sys
from typing import List, Optional

from holdem.errors import TableError
from holdem.models import TableConfig

from .simulate import run_session


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play a table of baseline bots locally")
    parser.add_argument("--players", type=int, default=6)
    parser.add_argument("--hands", type=int, default=100)
    parser.add_argument("--buy-in", type=int, default=1_000)
    parser.add_argument("--sb", type=int, default=5)
    parser.add_argument("--bb", type=int, default=10)
    parser.add_argument("--seats", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible sessions")
    parser.add_argument("--verbose", action="store_true", help="Log every action")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.players > args.seats:
        parser.error("--players cannot exceed --seats")

    try:
        config = TableConfig(
            buy_in=args.buy_in,
            small_blind=args.sb,
            big_blind=args.bb,
            seats=args.seats,
        )
        result = run_session(config, players=args.players, hands=args.hands, seed=args.seed)
    except TableError as exc:
        parser.error(str(exc))

    print(f"Hands played: {result.hands_played}")
    for player_id, stack in sorted(result.final_stacks.items()):
        print(f"  {player_id}: {stack}")
    if result.busted:
        print(f"Busted: {', '.join(result.busted)}")
    return 0 if result.chips_conserved else 1


if __name__ == "__main__":
    sys.exit(main())
