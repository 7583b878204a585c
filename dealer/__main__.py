import argparse
import asyncio
import logging
import random
from typing import Optional

from holdem.game import new_game
from holdem.models import Action, GameConfig, RemainderPolicy

from .bots import STRATEGIES, BotTable
from .dealer import Dealer

logging.basicConfig(level=logging.INFO)

LOGGER = logging.getLogger("holdem.cli")


async def play(args: argparse.Namespace) -> None:
    config = GameConfig(
        starting_cash=args.starting_cash,
        small_blind=args.small_blind,
        blind_increase_every=args.blind_every,
        blind_increase_by=args.blind_step,
        move_time_ms=args.move_time,
        remainder_policy=RemainderPolicy(args.remainder),
        max_hands=args.max_hands,
    )
    rng = random.Random(args.seed)
    game = new_game(args.players, config=config, rng=rng)
    actions: "asyncio.Queue[Optional[Action]]" = asyncio.Queue()
    dealer = Dealer(game, actions)
    strategy = STRATEGIES[args.strategy]
    BotTable(actions, {name: strategy for name in args.players}, rng=random.Random(args.seed)).attach(dealer)

    result = await dealer.run()
    LOGGER.info(
        "Match finished after %d hands; winner=%s stacks=%s house=%d",
        result.hands_played,
        result.winner,
        result.stacks,
        game.house,
    )


def main() -> None:
    # Plays a bot-only match; useful for eyeballing the engine's logs.
    parser = argparse.ArgumentParser(description="Texas Hold'em dealer with demo bots")
    parser.add_argument("--players", nargs="+", default=["Alice", "Bob", "Carol", "Dave"])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--starting-cash", type=int, default=1_000)
    parser.add_argument("--small-blind", type=int, default=10)
    parser.add_argument("--blind-every", type=int, default=10, help="Raise the blinds every N hands")
    parser.add_argument("--blind-step", type=int, default=10, help="Small blind increment")
    parser.add_argument(
        "--move-time",
        type=int,
        default=15_000,
        help="Move time in milliseconds (0 disables timeouts)",
    )
    parser.add_argument("--remainder", choices=[policy.value for policy in RemainderPolicy], default="HOUSE")
    parser.add_argument("--max-hands", type=int, default=None)
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), default="baseline")
    args = parser.parse_args()

    asyncio.run(play(args))


if __name__ == "__main__":
    main()
