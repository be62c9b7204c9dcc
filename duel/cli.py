"""
Duel CLI - Command-line interface for the engine.

Usage:
    duel heroes                    List hero templates
    duel locations [--seed N]      Show the route with sample monsters
    duel serve [--host] [--port]   Run the REST API
"""

import argparse
import logging
import os
import sys

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Duel - Two-player hero duel engine",
        prog="duel",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("DUEL_LOG_LEVEL", "INFO"),
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $DUEL_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Heroes command
    subparsers.add_parser("heroes", help="List hero templates")

    # Locations command
    locations_parser = subparsers.add_parser("locations", help="Show the route")
    locations_parser.add_argument("--seed", type=int, default=None, help="Seed for sample monsters")
    locations_parser.add_argument("--samples", type=int, default=2, help="Sample monsters per location")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "heroes":
        cmd_heroes(args)
    elif args.command == "locations":
        cmd_locations(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_heroes(args):
    """List hero templates."""
    from .catalog import HERO_TEMPLATES

    for hero in HERO_TEMPLATES:
        print(f"{hero.card_id:<20} {hero.name:<14} ({hero.hero_class.value})")
        print(
            f"  HP {hero.hp}  AP {hero.ap}  MP {hero.mp}  "
            f"DP {hero.dp}  RP {hero.rp}  SP {hero.sp}"
        )
        if hero.description:
            print(f"  {hero.description}")


def cmd_locations(args):
    """Show the route with sample monsters."""
    from .api.service import APIService

    if args.samples < 0:
        print(f"Error: --samples must be >= 0, got {args.samples}")
        sys.exit(1)

    route = APIService().list_locations(seed=args.seed, samples=args.samples)
    for location in route.locations:
        print(f"Days {location.first_day}-{location.last_day}: {location.name} (severity {location.severity})")
        print(f"  {location.description}")
        for monster in location.sample_monsters:
            print(
                f"  - {monster.name}: HP {monster.hp}  AP {monster.ap}  "
                f"MP {monster.mp}  reward {monster.gold_reward}"
            )
    print(f"\nThe duel ends in a draw after day {route.day_limit}.")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    logger.info("Serving duel API on %s:%d", args.host, args.port)
    uvicorn.run("duel.api.app:app", host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
