from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Location:
    """A single grid cell addressed by (col, row).

    ``tile_map`` is an opaque reference to the map the cell belongs to. It is
    carried through line computations unchanged and is ignored by equality and
    hashing, so ``Location(1, 2) == Location(1, 2, some_map)``.
    """

    col: int
    row: int
    tile_map: Optional[Any] = field(default=None, compare=False, hash=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.col, bool) or isinstance(self.row, bool):
            raise TypeError("Location coordinates must be integers, not bool")
        if not isinstance(self.col, int) or not isinstance(self.row, int):
            raise TypeError(f"Location coordinates must be integers: ({self.col!r}, {self.row!r})")

    @property
    def x(self) -> int:
        return self.col

    @property
    def y(self) -> int:
        return self.row

    def as_tuple(self) -> Tuple[int, int]:
        return (self.col, self.row)

    def as_dict(self) -> Dict[str, int]:
        return {"col": self.col, "row": self.row}

    def with_map(self, tile_map: Optional[Any]) -> "Location":
        return Location(self.col, self.row, tile_map)

    @classmethod
    def of(cls, value: "Location | Tuple[int, int]", tile_map: Optional[Any] = None) -> "Location":
        """Coerce a Location or a ``(col, row)`` pair into a Location."""
        if isinstance(value, Location):
            return value if tile_map is None else value.with_map(tile_map)
        col, row = value
        return cls(int(col), int(row), tile_map)
