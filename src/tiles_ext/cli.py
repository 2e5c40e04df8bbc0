from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .exceptions import TilesExtError
from .lines import LineType, line
from .location import Location
from .queries import get_random_tiles_by_type, is_wall
from .settings import Settings
from .tilemap import TileMap
from .utils.logging import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="tiles-ext",
        description="Grid line rasterization and tile map queries",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_line = sub.add_parser("line", help="Print the cells on a line between two cells.")
    p_line.add_argument("coords", type=int, nargs=4, metavar=("C0", "R0", "C1", "R1"))
    p_line.add_argument(
        "--mode",
        choices=[t.name.lower() for t in LineType],
        default=None,
        help="Line type (defaults to the configured lines.default_mode).",
    )
    p_line.add_argument(
        "--exclusive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Leave both endpoints out of the result (defaults to lines.exclusive).",
    )
    p_line.add_argument("--map", dest="map_path", type=Path, default=None, help="ASCII map file; adds wall flags.")

    p_sample = sub.add_parser("sample", help="Print random cells showing a given tile character.")
    p_sample.add_argument("tile", help="Tile character to look for.")
    p_sample.add_argument("count", type=int, help="Maximum number of cells to return.")
    p_sample.add_argument("--map", dest="map_path", type=Path, required=True, help="ASCII map file.")
    p_sample.add_argument("--seed", type=int, default=None, help="Seed for reproducible sampling.")
    return parser.parse_args(argv)


def load_map(path: Path, settings: Settings) -> TileMap:
    rows = path.read_text(encoding="utf-8").splitlines()
    while rows and not rows[-1]:
        rows.pop()
    tile_map = TileMap.from_ascii(rows, wall_chars=settings.map.wall_chars)
    logger.info("Loaded %r from %s", tile_map, path)
    return tile_map


def _run_line(args: argparse.Namespace, settings: Settings) -> List[dict]:
    mode = LineType.parse(args.mode) if args.mode else settings.lines.line_type
    exclusive = settings.lines.exclusive if args.exclusive is None else args.exclusive
    tile_map = load_map(args.map_path, settings) if args.map_path else None
    c0, r0, c1, r1 = args.coords
    cells = line(mode, Location(c0, r0, tile_map), Location(c1, r1, tile_map), exclusive)
    out = []
    for cell in cells:
        entry = cell.as_dict()
        if tile_map is not None:
            entry["wall"] = is_wall(cell)
        out.append(entry)
    return out


def _run_sample(args: argparse.Namespace, settings: Settings) -> List[dict]:
    tile_map = load_map(args.map_path, settings)
    rng = random.Random(args.seed) if args.seed is not None else None
    return [c.as_dict() for c in get_random_tiles_by_type(args.tile, args.count, tile_map, rng)]


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        settings = Settings.load(user_path=args.settings_path)
        configure_logging(level=logging.DEBUG if args.debug else settings.logging.level, stream=sys.stderr)
        if args.command == "line":
            data = _run_line(args, settings)
        else:
            data = _run_sample(args, settings)
    except (TilesExtError, yaml.YAMLError, ValueError, OSError) as exc:
        print(f"tiles-ext: error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(data))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
