from importlib.metadata import version, PackageNotFoundError

from .exceptions import MissingTileMapError, SettingsError, TilesExtError, UnknownLineModeError
from .lines import LineType, covering_line, diagonal_line, lerp, line
from .location import Location
from .queries import get_random_tiles_by_type, is_wall
from .tilemap import TileMap

__all__ = [
    "__version__",
    "Location",
    "LineType",
    "TileMap",
    "TilesExtError",
    "UnknownLineModeError",
    "MissingTileMapError",
    "SettingsError",
    "covering_line",
    "diagonal_line",
    "get_random_tiles_by_type",
    "is_wall",
    "lerp",
    "line",
]

try:
    __version__ = version("tiles-ext")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
