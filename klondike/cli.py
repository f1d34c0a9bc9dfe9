"""
Klondike CLI - Command-line interface for the engine.

Usage:
    klondike deal [--seed N] [--show-shadow]        Deal and show the player's view
    klondike demo [--mode classic|draw_three]       Draw until the deck is recycled
    klondike serve [--host H] [--port P]            Run the REST API
"""

import argparse
import logging
import random
import sys

from .config import MODE_NAMES, load_settings, parse_mode
from .engine_core.diagnostics import format_state, render_state
from .engine_core.moves import DECK_RECYCLED, pull_from_deck
from .engine_core.redaction import update_client_data
from .engine_core.setup import init_game
from .engine_core.state import GameState

logger = logging.getLogger("klondike")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Klondike - Solitaire engine with redacted state sync",
        prog="klondike",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log engine internals")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Deal command
    deal_parser = subparsers.add_parser("deal", help="Deal a game and print the player's view")
    deal_parser.add_argument("--seed", type=int, help="Seed for a reproducible deal")
    deal_parser.add_argument("--show-shadow", action="store_true", help="Also print the full deal")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Draw through the deck until it is recycled")
    demo_parser.add_argument("--seed", type=int, help="Seed for a reproducible deal")
    demo_parser.add_argument("--mode", choices=sorted(MODE_NAMES), help="Draw mode")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "deal":
        cmd_deal(args, settings)
    elif args.command == "demo":
        cmd_demo(args, settings)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _rng(seed):
    return random.Random(seed) if seed is not None else random.SystemRandom()


def cmd_deal(args, settings):
    """Deal a game and print the client view."""
    seed = args.seed if args.seed is not None else settings.seed
    shadow = GameState.create()
    client = GameState.create()
    init_game(shadow, client, 0, _rng(seed))

    if args.show_shadow:
        print("Shadow:")
        print(render_state(shadow))
        print()
    print("Player view:")
    print(render_state(client))


def cmd_demo(args, settings):
    """Draw until the deck is recycled, dumping the client after each draw."""
    seed = args.seed if args.seed is not None else settings.seed
    mode = parse_mode(args.mode) if args.mode else settings.mode

    shadow = GameState.create()
    client = GameState.create()
    generation = 0
    init_game(shadow, client, generation, _rng(seed))
    print(f"--- client {format_state(client)}")

    draws = 0
    while True:
        generation += 1
        outcome = pull_from_deck(shadow, mode, generation)
        update_client_data(client, shadow)
        if outcome in (DECK_RECYCLED, 0):
            break
        draws += 1
        print(f"--- client {format_state(client)}")

    print(f"--- shadow {format_state(shadow)}")
    print(f"--- client {format_state(client)}")
    print(f"Deck recycled after {draws} draw(s) in {mode.name.lower()} mode")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    from .api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
