"""
utils.py

Small helpers shared by the kernels, curves and the CLI. Inputs arrive as
shapely geometries, numpy arrays or plain sequences of ``(x, y)`` pairs;
these helpers coerce them to one representation.

The public helpers:
- `as_coords(geom)` : (N, 2) float array from a LineString or a sequence
- `as_point(point)` : shapely Point from a Point or an ``(x, y)`` pair
- `as_segment(segment)` : two-point LineString
- `iter_segments(coords)` : the polyline's segments, in order
- `is_finite_point(point)` : both coordinates finite
- `safe_log_exception(msg, exc, **ctx)` : logs exceptions robustly

"""

from typing import Any, Iterator
import sys
import math
import logging
import numpy as np
from shapely.geometry import LineString, Point

logger = logging.getLogger(__name__)


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
    """Log an exception robustly.

    Attempts to call `logger.exception`. If logging fails for any reason,
    falls back to writing a compact message to `sys.stderr`.
    """
    try:
        if ctx:
            ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
            logger.exception('%s | %s | %s', msg, exc, ctx_s)
        else:
            logger.exception('%s | %s', msg, exc)
    except Exception:
        sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')


def as_coords(geom) -> np.ndarray:
    """Return the coordinates of ``geom`` as an (N, 2) float array.

    Accepts a `LineString` (empty allowed), an (N, 2) array-like, or an
    empty sequence. Extra dimensions (z) are dropped.
    """
    if isinstance(geom, LineString):
        if geom.is_empty:
            return np.empty((0, 2), dtype=float)
        return np.asarray(geom.coords, dtype=float)[:, :2].copy()
    arr = np.asarray(geom, dtype=float)
    if arr.size == 0:
        return np.empty((0, 2), dtype=float)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f'expected a sequence of (x, y) pairs, got shape {arr.shape}')
    return arr[:, :2].copy()


def as_point(point) -> Point:
    if isinstance(point, Point):
        return point
    x, y = point[:2]
    return Point(float(x), float(y))


def as_segment(segment) -> LineString:
    """Coerce ``segment`` to a two-point LineString."""
    coords = as_coords(segment)
    if coords.shape[0] != 2:
        raise ValueError(f'a segment has exactly two points, got {coords.shape[0]}')
    return LineString(coords)


def iter_segments(coords: np.ndarray) -> Iterator[LineString]:
    for i in range(len(coords) - 1):
        yield LineString([coords[i], coords[i + 1]])


def is_finite_point(point: Point) -> bool:
    if point.is_empty:
        return False
    return math.isfinite(point.x) and math.isfinite(point.y)
