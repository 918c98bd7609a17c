"""
Console blackjack table.

    twentyone -n Ana Bruno Carla
    twentyone -n Ana Bruno --auto --rounds 100 --seed 7 --log-file table.log
"""

import argparse
import asyncio
import logging
import random
import sys
from typing import Optional

from twentyone.adapters.cli import CLIAdapter
from twentyone.common.action import Action
from twentyone.common.io_interface import (
    AsyncIOInterfaceWrapper,
    ConsoleIOInterface,
    IOInterface,
    LoggingIOInterface,
)
from twentyone.constants import DEALER_STANDS_ON
from twentyone.session import GameSession

logger = logging.getLogger("twentyone.cli")

VALID_ACTIONS = [Action.HIT, Action.STAND]


def auto_action(total: int) -> Action:
    """Simulation strategy for players: draw below the dealer's threshold."""
    return Action.HIT if total < DEALER_STANDS_ON else Action.STAND


async def play_round(
    session: GameSession,
    io: AsyncIOInterfaceWrapper,
    auto: bool = False,
    log_io: Optional[LoggingIOInterface] = None,
) -> None:
    """Play one round to the end, asking each player in turn."""
    engine = session.engine
    engine.start_round()
    await _flush_log(session, log_io)

    while engine.current_player is not None:
        player = engine.current_player
        if auto:
            action = auto_action(player.value())
        else:
            action = await io.get_player_action(player.name, VALID_ACTIONS)

        if action is Action.HIT:
            engine.hit(player)
        else:
            engine.stand(player)
        await _flush_log(session, log_io)


async def _flush_log(
    session: GameSession, log_io: Optional[LoggingIOInterface]
) -> None:
    adapter = session.adapter
    if not isinstance(adapter, CLIAdapter):
        return
    messages = adapter.drain_log()
    if log_io is not None:
        for message in messages:
            await log_io.output_async(message)


async def run_session(
    session: GameSession,
    io_interface: IOInterface,
    rounds: Optional[int] = None,
    auto: bool = False,
    log_io: Optional[LoggingIOInterface] = None,
) -> None:
    """
    Play rounds until `rounds` have been played or, when no count is given,
    until the players decline another round.
    """
    io = AsyncIOInterfaceWrapper(io_interface)
    try:
        played = 0
        while rounds is None or played < rounds:
            await play_round(session, io, auto=auto, log_io=log_io)
            played += 1
            if isinstance(session.adapter, CLIAdapter):
                session.adapter.render_scoreboard(session.scoreboard())

            if rounds is None:
                answer = await io.input("Next round? [y/n] ")
                if answer.strip().lower() not in ("y", "yes"):
                    break
    finally:
        io.close()

    if log_io is not None:
        await log_io.output_async(
            "Final score: "
            + ", ".join(f"{name} {wins}" for name, wins in session.scoreboard())
        )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play blackjack against the dealer.")
    parser.add_argument(
        "-n",
        "--names",
        nargs="+",
        default=None,
        help="names of the players, 2 to 4 (prompted for when omitted)",
    )
    parser.add_argument(
        "-r",
        "--rounds",
        type=int,
        default=None,
        help="number of rounds to play (default: ask after every round)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed for a reproducible deck"
    )
    parser.add_argument(
        "--auto",
        action="store_true",
        help="players hit below 17 and stand otherwise, without prompting",
    )
    parser.add_argument(
        "--log-file", default=None, help="append the table's event log to this file"
    )
    parser.add_argument(
        "--show-all-hands",
        action="store_true",
        help="show every player's cards, not only the player on turn",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log engine activity"
    )
    return parser.parse_args(argv)


def prompt_names(io_interface: IOInterface) -> list:
    io_interface.output("Enter player names, one per line; an empty line to finish.")
    names = []
    while True:
        name = io_interface.input(f"Player {len(names) + 1}: ").strip()
        if not name:
            return names
        names.append(name)


async def main(argv=None, io_interface: Optional[IOInterface] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if args.verbose:
        logging.getLogger("twentyone").setLevel(logging.DEBUG)

    io_interface = io_interface or ConsoleIOInterface()
    try:
        names = args.names if args.names is not None else prompt_names(io_interface)
    except (KeyboardInterrupt, EOFError):
        io_interface.output("\nLeaving the table.")
        return 1
    rng = random.Random(args.seed) if args.seed is not None else None
    adapter = CLIAdapter(io_interface, hide_other_hands=not args.show_all_hands)

    try:
        session = GameSession(names, adapter=adapter, rng=rng)
    except ValueError as e:
        io_interface.output(f"Cannot start the table: {e}")
        return 2

    log_io = LoggingIOInterface(args.log_file) if args.log_file else None
    try:
        await run_session(
            session, io_interface, rounds=args.rounds, auto=args.auto, log_io=log_io
        )
    except (KeyboardInterrupt, EOFError):
        io_interface.output("\nLeaving the table.")

    io_interface.output("Final score:")
    for name, wins in session.scoreboard():
        io_interface.output(f"  {name}: {wins}")
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
