"""floorgen CLI entry point.

Generate a floor layout and print it (colored ASCII or JSON), or run the
read-only HTTP API. Accepts configuration via flags and FLOORGEN_*
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from floorgen import __version__
from floorgen.layout import ConfigurationError, FloorConfig, RoomType, generate_floor
from floorgen.layout.model import ROOM_TYPE_GLYPHS
from floorgen.layout.policy import coerce_seed, scaled_config
from floorgen.logging_utils import configure as configure_logging
from floorgen.logging_utils import log

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_GENERATION_FAILED = 3

GLYPH_COLORS = {
    "#": Fore.BLUE,
    ".": Fore.WHITE + Style.DIM,
    ROOM_TYPE_GLYPHS[RoomType.ENTRANCE]: Fore.GREEN + Style.BRIGHT,
    ROOM_TYPE_GLYPHS[RoomType.EXIT]: Fore.CYAN + Style.BRIGHT,
    ROOM_TYPE_GLYPHS[RoomType.BOSS]: Fore.RED + Style.BRIGHT,
    ROOM_TYPE_GLYPHS[RoomType.SHOP]: Fore.YELLOW + Style.BRIGHT,
    ROOM_TYPE_GLYPHS[RoomType.TREASURE]: Fore.MAGENTA + Style.BRIGHT,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    floorgen: procedural dungeon floor layouts

    Generate a BSP-partitioned floor (rooms, L-shaped corridors, room types,
    tile grid) for a seed, or serve floors over a small read-only HTTP API.
    CLI flags take precedence over FLOORGEN_* environment variables.
    """

    epilog = dedent(
        """
        Environment variables:
          FLOORGEN_<FIELD>      Any FloorConfig field, e.g. FLOORGEN_MIN_ROOM_SIZE=5
          FLOORGEN_LOG_LEVEL    debug | info | warn | error (default: info)
          FLOORGEN_LOG_JSON     1 to emit JSON log lines
          HOST / PORT           Bind address for `serve` (default: 0.0.0.0:5000)

        Examples:
          # Print floor 3 for a fixed seed
          python run.py generate --seed 42 --level 3

          # String seeds are hashed deterministically
          python run.py generate --seed crypt-of-ash --json

          # Grow the floor with depth using the default scaling policy
          python run.py generate --seed 7 --level 5 --scale

          # Serve the HTTP API on localhost:8080
          python run.py serve --host 127.0.0.1 --port 8080

        Exit codes: 0 success, 2 invalid configuration, 3 generation failed.
        """
    )

    parser = argparse.ArgumentParser(
        prog="floorgen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"floorgen {__version__}",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        choices=["debug", "info", "warn", "error"],
        help="Structured log threshold (default: env FLOORGEN_LOG_LEVEL or info)",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one floor and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a floor layout and print it as ASCII or JSON.",
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Floor width in tiles")
    gen_parser.add_argument("--height", type=int, default=None, help="Floor height in tiles")
    gen_parser.add_argument("--level", type=int, default=None, help="Floor level, 1-based (default: 1)")
    gen_parser.add_argument(
        "--adjacency",
        choices=["siblings", "geometric"],
        default=None,
        help="Corridor candidate strategy (default: siblings)",
    )
    gen_parser.add_argument(
        "--scale",
        action="store_true",
        help="Grow width/height with --level using the default scaling policy",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the LevelModel as JSON")
    gen_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable ANSI colors")
    gen_parser.set_defaults(command="generate")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the read-only HTTP API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server exposing /api/floor",
    )
    serve_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    serve_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    serve_parser.set_defaults(command="serve")

    args = parser.parse_args(argv)
    # No subcommand (including global-only flags like --log-level): generate
    if args.command is None:
        args = parser.parse_args([*argv, "generate"])
    return args


def colorize(text: str) -> str:
    return "".join(
        f"{GLYPH_COLORS[ch]}{ch}{Style.RESET_ALL}" if ch in GLYPH_COLORS else ch for ch in text
    )


def build_config(args: argparse.Namespace) -> FloorConfig:
    config = FloorConfig.from_env()
    config = config.with_overrides(
        width=args.width,
        height=args.height,
        floor_level=args.level,
        adjacency=args.adjacency,
    )
    if args.seed is not None or config.seed is None:
        config = config.with_overrides(seed=coerce_seed(args.seed))
    if args.scale:
        config = scaled_config(config, config.floor_level)
    return config


def run_generate(args: argparse.Namespace) -> int:
    try:
        config = build_config(args)
        result = generate_floor(config)
    except ConfigurationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    if not result.ok:
        if args.json:
            print(json.dumps(result.error.to_dict(), indent=2))
        print(f"[ERROR] generation failed ({result.kind}): {result.error}", file=sys.stderr)
        return EXIT_GENERATION_FAILED

    level = result.level
    if args.json:
        print(json.dumps(level.to_dict(), indent=2))
        return EXIT_OK

    color = not args.no_color and sys.stdout.isatty()
    if color:
        _color_init()
    text = level.to_ascii(annotate=True)
    print(colorize(text) if color else text)
    counts = {}
    for room in level.rooms:
        counts[room.room_type.value] = counts.get(room.room_type.value, 0) + 1
    summary = ", ".join(f"{k}={v}" for k, v in sorted(counts.items()))
    print(f"seed={level.seed} level={level.floor_level} size={level.width}x{level.height} "
          f"rooms={len(level.rooms)} corridors={len(level.corridors)} ({summary})")
    return EXIT_OK


def run_serve(args: argparse.Namespace) -> int:
    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", "5000"))
    log.info(event="startup", mode="serve", host=host, port=port, debug=args.debug)

    # Import server entrypoint only after environment is ready
    from floorgen import server

    server.start_server(host, port, args.debug)
    return EXIT_OK


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file, override=True)
    else:
        load_dotenv()
    if args.log_level:
        configure_logging(level=args.log_level)

    if args.command == "serve":
        return run_serve(args)
    return run_generate(args)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
