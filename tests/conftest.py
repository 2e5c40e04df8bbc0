import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from tiles_ext.tilemap import TileMap  # noqa: E402


@pytest.fixture
def small_map() -> TileMap:
    rows = [
        "..#.",
        ".~#.",
        "~..~",
    ]
    return TileMap.from_ascii(rows, wall_chars=("#",))
