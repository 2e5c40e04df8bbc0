from __future__ import annotations

import logging
import random
from typing import Any, Hashable, List, Optional

from .exceptions import MissingTileMapError
from .location import Location

logger = logging.getLogger(__name__)


def is_wall(location: Location, tile_map: Optional[Any] = None) -> bool:
    """Return True if ``location`` is an obstacle on its map.

    The map is ``tile_map`` when given, otherwise the map the location
    belongs to. Any object exposing ``is_obstacle(col, row)`` works.

    Raises:
        MissingTileMapError: if neither map is available.
    """
    tile_map = tile_map if tile_map is not None else location.tile_map
    if tile_map is None:
        raise MissingTileMapError(f"No tile map to check ({location.col}, {location.row}) against")
    return bool(tile_map.is_obstacle(location.col, location.row))


def get_random_tiles_by_type(
    tile: Optional[Hashable],
    max_count: int,
    tile_map: Optional[Any],
    rng: Optional[random.Random] = None,
) -> List[Location]:
    """Return up to ``max_count`` random locations on ``tile_map`` showing ``tile``.

    Returns an empty list when no tile or no map is supplied, or when the map
    does not use the tile.
    """
    if not tile or tile_map is None:
        logger.debug("Random tile query skipped: tile=%r, map=%r", tile, tile_map)
        return []
    index = tile_map.get_image_type(tile)
    return list(tile_map.sample_tiles_by_type(index, max_count, rng))
