from __future__ import annotations

import logging
import math
from enum import IntEnum
from typing import List, Union

from .exceptions import UnknownLineModeError
from .location import Location

logger = logging.getLogger(__name__)


class LineType(IntEnum):
    """How a line between two cells is rasterized.

    - DIAGONAL: evenly spaced samples snapped to the nearest cell per axis.
    - COVERING: every cell the segment passes through (supercover).
    """

    DIAGONAL = 0
    COVERING = 1

    @classmethod
    def parse(cls, value: Union["LineType", int, str]) -> "LineType":
        """Resolve a LineType from a member, its integer value or its name.

        Raises UnknownLineModeError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is None:
                raise UnknownLineModeError(value)
            return member
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise UnknownLineModeError(value) from None
        raise UnknownLineModeError(value)


LineMode = Union[LineType, int, str]


def lerp(start: float, end: float, t: float) -> float:
    return start * (1.0 - t) + t * end


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    2.5 -> 3, -0.5 -> 0, -1.5 -> -1. Avoids ``floor(value + 0.5)``, which
    misrounds values just below .5 because of the addition.
    """
    lower = math.floor(value)
    return lower + 1 if value - lower >= 0.5 else lower


def diagonal_line(start: Location, end: Location, exclusive: bool = False) -> List[Location]:
    """Return N+1 evenly spaced cells from start to end, N being the Chebyshev distance.

    Each sample is snapped to the nearest cell independently per axis. With
    ``exclusive`` the two endpoints are left out.
    """
    dx = end.col - start.col
    dy = end.row - start.row
    n = max(abs(dx), abs(dy))
    if n <= 0:
        return [] if exclusive else [start]

    first = 1 if exclusive else 0
    last = n - (1 if exclusive else 0)
    result: List[Location] = []
    for step in range(first, last + 1):
        t = step / n
        result.append(
            Location(
                round_half_up(lerp(start.col, end.col, t)),
                round_half_up(lerp(start.row, end.row, t)),
                start.tile_map,
            )
        )
    return result


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def covering_line(start: Location, end: Location, exclusive: bool = False) -> List[Location]:
    """Return every cell the segment from start to end passes through, in travel order.

    Walks the grid one axis step at a time. At each step the x axis advances
    when ``(1 + 2*ix) * |dy| < (1 + 2*iy) * |dx|``; otherwise (ties included)
    the y axis advances. With ``exclusive`` the two endpoints are left out.
    """
    if start.col == end.col and start.row == end.row:
        return [] if exclusive else [start]

    dx = end.col - start.col
    dy = end.row - start.row
    absx, absy = abs(dx), abs(dy)
    stepx, stepy = _sign(dx), _sign(dy)

    x, y = start.col, start.row
    ix = iy = 0

    def advance() -> None:
        nonlocal x, y, ix, iy
        if (1 + 2 * ix) * absy < (1 + 2 * iy) * absx:
            x += stepx
            ix += 1
        else:
            y += stepy
            iy += 1

    if exclusive:
        advance()

    result: List[Location] = []
    while ix < absx or iy < absy:
        result.append(Location(x, y, start.tile_map))
        advance()
    if not exclusive:
        result.append(Location(x, y, start.tile_map))
    return result


def line(line_type: LineMode, start: Location, end: Location, exclusive: bool = False) -> List[Location]:
    """Return the cells on a line from start to end using the given line type.

    Args:
        line_type: LineType member, its integer value, or its name
            ("diagonal" / "covering", case-insensitive).
        start: first endpoint.
        end: last endpoint.
        exclusive: leave both endpoints out of the result.

    Returns:
        A new list of Locations ordered from start toward end. Every Location
        carries ``start.tile_map``.

    Raises:
        UnknownLineModeError: if line_type is not a known line type.
    """
    mode = LineType.parse(line_type)
    if mode is LineType.DIAGONAL:
        result = diagonal_line(start, end, exclusive)
    elif mode is LineType.COVERING:
        result = covering_line(start, end, exclusive)
    else:  # pragma: no cover - parse() only yields known members
        raise UnknownLineModeError(line_type)
    logger.debug(
        "%s line (%d,%d)->(%d,%d) exclusive=%s -> %d cells",
        mode.name.lower(), start.col, start.row, end.col, end.row, exclusive, len(result),
    )
    return result
