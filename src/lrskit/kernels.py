"""
kernels.py

Metric kernels: the geometric primitives a `Curve` is computed with.

A curve never measures anything itself. Lengths, nearest positions,
point-to-line distances, interpolation and splitting depend on how the
coordinates are interpreted, so they are delegated to a kernel:

- `PlanarKernel` : Euclidean plane, backed by shapely/GEOS.
- `SphericalKernel` : lon/lat degrees on an ellipsoid, backed by `pyproj.Geod`.
  Lengths and distances are geodesic and expressed in metres.

Orientation, segment crossing and the affine transform used for normals
work on the coordinate plane and are shared by both kernels.

"""
from typing import List, NamedTuple, Optional, Sequence, Tuple
from abc import ABC, abstractmethod
import enum
import logging
import math

import numpy as np
from affine import Affine
from pyproj import Geod
from shapely.geometry import LineString, Point
from shapely.ops import substring as planar_substring

from lrskit.config import GEODESIC, CURVE_DEFAULTS
from lrskit.utils import as_coords, is_finite_point

logger = logging.getLogger(__name__)


class Orientation(enum.Enum):
    CLOCKWISE = -1
    COLLINEAR = 0
    COUNTERCLOCKWISE = 1


class SegmentOverlap(NamedTuple):
    """Two collinear segments sharing more than a single point."""
    geometry: LineString


class MetricKernel(ABC):
    """Geometric primitives a curve's algorithms are written against.

    Subclasses implement the metric operations. ``locate`` must return NaN
    (never raise) when no finite fraction exists, and ``segmentize`` must
    return None when the line cannot be split.
    """

    name = 'abstract'

    # -- metric operations -------------------------------------------------

    @abstractmethod
    def length(self, line: LineString) -> float:
        """Total length of ``line``."""

    @abstractmethod
    def locate(self, line: LineString, point: Point) -> float:
        """Fraction in [0, 1] of the position on ``line`` nearest to ``point``."""

    @abstractmethod
    def distance(self, line: LineString, point: Point) -> float:
        """Shortest distance from ``point`` to ``line``."""

    @abstractmethod
    def interpolate(self, line: LineString, fraction: float) -> Point:
        """Point at ``fraction`` of the length of ``line``."""

    @abstractmethod
    def substring(self, line: LineString, start: float, end: float) -> LineString:
        """Part of ``line`` between two fractions, reversed when start > end."""

    @abstractmethod
    def segment_contains(self, segment: LineString, point: Point) -> bool:
        """Whether ``point`` lies on the two-point ``segment``."""

    def segmentize(self, line: LineString, n: int) -> Optional[List[LineString]]:
        """Split ``line`` into ``n`` pieces of equal length."""
        if n < 1 or line.is_empty or len(line.coords) < 2:
            return None
        total = self.length(line)
        if not math.isfinite(total) or total <= 0.0:
            return None
        return [self.substring(line, i / n, (i + 1) / n) for i in range(n)]

    # -- coordinate-plane operations ---------------------------------------

    def orientation(self, p: Sequence[float], q: Sequence[float], r: Sequence[float]) -> Orientation:
        """Orientation of the triangle (p, q, r)."""
        det = (q[0] - p[0]) * (r[1] - p[1]) - (q[1] - p[1]) * (r[0] - p[0])
        if det > 0:
            return Orientation.COUNTERCLOCKWISE
        if det < 0:
            return Orientation.CLOCKWISE
        return Orientation.COLLINEAR

    def segment_intersection(self, a: LineString, b: LineString):
        """Crossing of two segments.

        Returns a `Point` for a single crossing, a `SegmentOverlap` when the
        segments are collinear and overlap, and None when they are disjoint.
        """
        inter = a.intersection(b)
        if inter.is_empty:
            return None
        if inter.geom_type == 'Point':
            return inter
        return SegmentOverlap(inter)

    def normal_transform(self, start: Tuple[float, float], dx: float, dy: float,
                         scale: float, angle: float) -> Affine:
        """Compose translate, scale (about ``start``) and rotate (about ``start``).

        As an affine product the right-most factor applies first: the segment
        is rotated, then scaled, then moved by (dx, dy).
        """
        x0, y0 = start
        scaling = Affine.translation(x0, y0) * Affine.scale(scale) * Affine.translation(-x0, -y0)
        return Affine.translation(dx, dy) * scaling * Affine.rotation(angle, pivot=(x0, y0))

    def transform(self, line: LineString, transform: Affine) -> LineString:
        return LineString([transform * (x, y) for x, y in as_coords(line)])


class PlanarKernel(MetricKernel):
    """Euclidean kernel; all results are in coordinate units."""

    name = 'planar'

    def length(self, line):
        return float(line.length)

    def locate(self, line, point):
        if line.is_empty or not is_finite_point(point) or line.length == 0:
            return math.nan
        return float(line.project(point, normalized=True))

    def distance(self, line, point):
        return float(line.distance(point))

    def interpolate(self, line, fraction):
        return line.interpolate(fraction, normalized=True)

    def substring(self, line, start, end):
        return planar_substring(line, start, end, normalized=True)

    def segment_contains(self, segment, point):
        return segment.distance(point) <= CURVE_DEFAULTS['contains_tolerance']


class SphericalKernel(MetricKernel):
    """Geodesic kernel for lon/lat coordinates.

    Distances come from `pyproj.Geod` on the configured ellipsoid. The
    nearest segment to a point is found in a local equirectangular frame
    centred on the point's latitude, then measured geodesically. Lines
    crossing the antimeridian are not supported.
    """

    name = 'spherical'

    def __init__(self, ellps: Optional[str] = None):
        self.ellps = ellps or GEODESIC['ellps']
        self.geod = Geod(ellps=self.ellps)

    def __repr__(self):
        return f'SphericalKernel(ellps={self.ellps!r})'

    def _segment_lengths(self, coords: np.ndarray) -> np.ndarray:
        if coords.shape[0] < 2:
            return np.zeros(0, dtype=float)
        _, _, dist = self.geod.inv(coords[:-1, 0], coords[:-1, 1], coords[1:, 0], coords[1:, 1])
        return np.asarray(dist, dtype=float)

    def _along_segment(self, a: np.ndarray, b: np.ndarray, dist: float) -> Tuple[float, float]:
        """Point ``dist`` metres from ``a`` on the geodesic towards ``b``."""
        if dist <= 0.0:
            return float(a[0]), float(a[1])
        az, _, seg_len = self.geod.inv(a[0], a[1], b[0], b[1])
        if dist >= seg_len:
            return float(b[0]), float(b[1])
        lon, lat, _ = self.geod.fwd(a[0], a[1], az, dist)
        return float(lon), float(lat)

    def _point_at(self, coords: np.ndarray, seg_lengths: np.ndarray, target: float) -> Tuple[float, float]:
        cum = np.concatenate([[0.0], np.cumsum(seg_lengths)])
        idx = int(np.searchsorted(cum, target, side='right')) - 1
        idx = min(max(idx, 0), len(seg_lengths) - 1)
        return self._along_segment(coords[idx], coords[idx + 1], target - cum[idx])

    def _nearest(self, coords: np.ndarray, point: Point) -> Tuple[int, float]:
        """Index of the nearest segment and the clamped parameter on it."""
        k = math.cos(math.radians(point.y))
        px, py = point.x * k, point.y
        xs = coords[:, 0] * k
        ys = coords[:, 1]
        x0, y0 = xs[:-1], ys[:-1]
        vx, vy = xs[1:] - x0, ys[1:] - y0
        denom = vx * vx + vy * vy
        denom = np.where(denom == 0, 1e-12, denom)
        t = np.clip(((px - x0) * vx + (py - y0) * vy) / denom, 0.0, 1.0)
        cx = x0 + t * vx
        cy = y0 + t * vy
        d2 = (px - cx) ** 2 + (py - cy) ** 2
        idx = int(np.argmin(d2))
        return idx, float(t[idx])

    def length(self, line):
        return float(self._segment_lengths(as_coords(line)).sum())

    def locate(self, line, point):
        coords = as_coords(line)
        if coords.shape[0] < 2 or not is_finite_point(point):
            return math.nan
        seg_lengths = self._segment_lengths(coords)
        total = float(seg_lengths.sum())
        if total == 0.0:
            return math.nan
        idx, t = self._nearest(coords, point)
        along = float(seg_lengths[:idx].sum()) + t * float(seg_lengths[idx])
        return along / total

    def distance(self, line, point):
        coords = as_coords(line)
        idx, t = self._nearest(coords, point)
        seg_len = float(self._segment_lengths(coords[idx:idx + 2])[0])
        lon, lat = self._along_segment(coords[idx], coords[idx + 1], t * seg_len)
        _, _, dist = self.geod.inv(point.x, point.y, lon, lat)
        return float(dist)

    def interpolate(self, line, fraction):
        coords = as_coords(line)
        if fraction <= 0.0:
            return Point(coords[0])
        if fraction >= 1.0:
            return Point(coords[-1])
        seg_lengths = self._segment_lengths(coords)
        return Point(self._point_at(coords, seg_lengths, fraction * float(seg_lengths.sum())))

    def substring(self, line, start, end):
        if start > end:
            return LineString(as_coords(self.substring(line, end, start))[::-1])
        coords = as_coords(line)
        seg_lengths = self._segment_lengths(coords)
        cum = np.concatenate([[0.0], np.cumsum(seg_lengths)])
        total = cum[-1]
        d_start, d_end = start * total, end * total
        out = [self._point_at(coords, seg_lengths, d_start)]
        out.extend(tuple(c) for c, d in zip(coords, cum) if d_start < d < d_end)
        out.append(self._point_at(coords, seg_lengths, d_end))
        return LineString(out)

    def segment_contains(self, segment, point):
        (ax, ay), (bx, by) = as_coords(segment)
        _, _, ab = self.geod.inv(ax, ay, bx, by)
        _, _, ap = self.geod.inv(ax, ay, point.x, point.y)
        _, _, pb = self.geod.inv(point.x, point.y, bx, by)
        return (ap + pb) - ab <= GEODESIC['contains_tolerance_m']


PLANAR = PlanarKernel()
SPHERICAL = SphericalKernel()
