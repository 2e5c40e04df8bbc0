from __future__ import annotations

import logging
import random
from typing import Hashable, Iterable, List, Optional, Sequence

from .location import Location

logger = logging.getLogger(__name__)


class TileMap:
    """
    A small in-memory tile map: one image index and one wall flag per cell.

    - ``tileset`` lists the images (any hashable value, e.g. a character or a
      sprite name); a cell stores the index of its image in that list.
    - Walls are tracked separately from images, as obstacles.

    Coordinate system is 0-based: col in [0, width), row in [0, height).
    """

    def __init__(self, width: int, height: int, tileset: Optional[Sequence[Hashable]] = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("TileMap width/height must be > 0")
        self._width = int(width)
        self._height = int(height)
        self._tileset: List[Hashable] = list(tileset) if tileset else []
        # cells[row][col]
        self._images: List[List[int]] = [[0 for _ in range(self._width)] for _ in range(self._height)]
        self._walls: List[List[bool]] = [[False for _ in range(self._width)] for _ in range(self._height)]
        logger.debug("TileMap created: %dx%d, %d images", self._width, self._height, len(self._tileset))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def tileset(self) -> List[Hashable]:
        return list(self._tileset)

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self._width and 0 <= row < self._height

    def location(self, col: int, row: int) -> Location:
        """Return a Location on this map."""
        return Location(col, row, self)

    def get_tile(self, col: int, row: int) -> int:
        if not self.in_bounds(col, row):
            raise IndexError(f"Tile out of bounds: ({col}, {row}) for map {self._width}x{self._height}")
        return self._images[row][col]

    def set_tile(self, col: int, row: int, index: int) -> None:
        if not self.in_bounds(col, row):
            raise IndexError(f"Tile out of bounds: ({col}, {row}) for map {self._width}x{self._height}")
        if index < 0:
            raise ValueError("image index must be >= 0")
        self._images[row][col] = int(index)

    def set_wall(self, col: int, row: int, on: bool = True) -> None:
        if not self.in_bounds(col, row):
            raise IndexError(f"Tile out of bounds: ({col}, {row}) for map {self._width}x{self._height}")
        self._walls[row][col] = bool(on)

    def is_obstacle(self, col: int, row: int) -> bool:
        if not self.in_bounds(col, row):
            return True  # Out of bounds acts as wall
        return self._walls[row][col]

    def get_image_type(self, image: Hashable) -> int:
        """Return the tileset index of ``image``, or -1 if the map does not use it."""
        try:
            return self._tileset.index(image)
        except ValueError:
            return -1

    def get_tiles_by_type(self, index: int) -> List[Location]:
        """All cells showing image ``index``, in row-major order."""
        return [
            Location(col, row, self)
            for row in range(self._height)
            for col in range(self._width)
            if self._images[row][col] == index
        ]

    def sample_tiles_by_type(self, index: int, max_count: int, rng: Optional[random.Random] = None) -> List[Location]:
        """Return up to ``max_count`` distinct random cells showing image ``index``."""
        if index < 0 or max_count <= 0:
            return []
        candidates = self.get_tiles_by_type(index)
        count = min(int(max_count), len(candidates))
        picked = (rng or random).sample(candidates, count)
        logger.debug("Sampled %d of %d tiles with image %d", count, len(candidates), index)
        return picked

    @classmethod
    def from_ascii(cls, rows: Sequence[str], wall_chars: Iterable[str] = ("#",)) -> "TileMap":
        """
        Build a TileMap from ASCII rows for tests/tools.
        - Each distinct character is one image, indexed in order of first appearance.
        - Any char in wall_chars is also an obstacle.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        if width == 0:
            raise ValueError("row width must be positive")
        for i, r in enumerate(rows):
            if len(r) != width:
                raise ValueError(f"All rows must have equal width; row 0 has {width}, row {i} has {len(r)}")

        tileset: List[str] = []
        for r in rows:
            for ch in r:
                if ch not in tileset:
                    tileset.append(ch)

        tile_map = cls(width, len(rows), tileset=tileset)
        wall_set = set(wall_chars)
        for row, r in enumerate(rows):
            for col, ch in enumerate(r):
                tile_map.set_tile(col, row, tileset.index(ch))
                if ch in wall_set:
                    tile_map.set_wall(col, row)
        return tile_map

    def to_ascii(self) -> List[str]:
        """Render the map back to rows (only meaningful for single-character images)."""
        return ["".join(str(self._tileset[i]) if i < len(self._tileset) else "?" for i in r) for r in self._images]

    def __repr__(self) -> str:
        return f"TileMap({self._width}x{self._height})"
