"""
curve.py

A curve is the building block of a linear referencing system: a polyline
used as a one-dimensional coordinate system through the distance along it.

The two conversions between spaces are:

- `Curve.project(point)` : spatial point -> `CurveProjection` (distance along
  the curve and signed perpendicular offset);
- `Curve.resolve(projection)` : distance along the curve -> spatial point.

A curve can be a fragment of a longer logical curve (see `fragment`); its
``start_offset`` then makes every distance absolute with respect to the
start of the logical curve.

Distances are integers truncated toward zero. Measurements are delegated to
the curve's `MetricKernel` so the same algorithms serve planar and
spherical coordinates.

"""
from dataclasses import dataclass
from typing import List, Optional
import logging
import math

import numpy as np
from shapely.geometry import LineString, Point, Polygon, box

from lrskit.config import CURVE_DEFAULTS
from lrskit.errors import InvalidGeometry, NotFiniteCoordinates, NotOnTheCurve
from lrskit.kernels import PLANAR, MetricKernel, Orientation
from lrskit.utils import as_coords, as_point, as_segment, iter_segments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveProjection:
    """A point in space projected on a curve.

    - distance_along_curve: distance from the start of the (logical) curve,
      ``start_offset`` included
    - offset: distance to the curve, positive on the left of the direction
      of travel and negative on the right
    """
    distance_along_curve: int
    offset: int = 0


class Curve:
    """Polyline with projection and resolution primitives.

    Parameters
    - geom: LineString or sequence of (x, y) pairs; order gives the direction
    - max_extent: buffer added around the geometry by `bbox`; it does not
      limit `project`
    - kernel: metric kernel, planar by default
    - start_offset: distance of this curve's start along the logical curve
    """

    def __init__(self, geom, max_extent: Optional[int] = None,
                 kernel: Optional[MetricKernel] = None, start_offset: int = 0):
        self.coords = as_coords(geom)
        self.geom = LineString(self.coords) if len(self.coords) >= 2 else LineString()
        if max_extent is None:
            max_extent = CURVE_DEFAULTS['max_extent']
        self.max_extent = int(max_extent)
        self.kernel = kernel if kernel is not None else PLANAR
        self.start_offset = start_offset

    @property
    def start_offset(self) -> int:
        return self._start_offset

    @start_offset.setter
    def start_offset(self, value):
        value = int(value)
        if value < 0:
            raise ValueError(f'start_offset must be non-negative, got {value!r}')
        self._start_offset = value

    def __repr__(self):
        return (f'Curve(n_coords={len(self.coords)}, start_offset={self.start_offset}, '
                f'max_extent={self.max_extent}, kernel={self.kernel.name})')

    @classmethod
    def new_fragmented(cls, geom, max_len: float, max_extent: Optional[int] = None,
                       kernel: Optional[MetricKernel] = None) -> List['Curve']:
        return fragment(geom, max_len, max_extent=max_extent, kernel=kernel)

    def is_valid(self) -> bool:
        """At least two coordinates; exactly two must be distinct."""
        n = len(self.coords)
        if n < 2:
            return False
        return n > 2 or not np.array_equal(self.coords[0], self.coords[-1])

    def length(self) -> int:
        return int(self.kernel.length(self.geom))

    def bbox(self) -> Polygon:
        """Bounding box of the geometry grown by ``max_extent`` on every side."""
        if len(self.coords) == 0:
            raise InvalidGeometry()
        minx, miny = self.coords.min(axis=0)
        maxx, maxy = self.coords.max(axis=0)
        e = float(self.max_extent)
        return box(minx - e, miny - e, maxx + e, maxy + e)

    def project(self, point) -> CurveProjection:
        """Project ``point`` on the closest position of the curve.

        Raises `InvalidGeometry` for an invalid curve and
        `NotFiniteCoordinates` when no finite position can be computed.
        Points far from the curve are projected too; ``max_extent`` is not
        checked here.
        """
        if not self.is_valid():
            raise InvalidGeometry()
        point = as_point(point)

        location = self.kernel.locate(self.geom, point)
        if location is None or not math.isfinite(location):
            logger.debug('no finite location for %s on %r', point.wkt, self)
            raise NotFiniteCoordinates()

        distance_along_curve = int(location * self.kernel.length(self.geom)) + self.start_offset

        begin = self.coords[0]
        end = self.coords[-1]
        if self.kernel.orientation((point.x, point.y), end, begin) is Orientation.CLOCKWISE:
            sign = 1.0
        else:
            sign = -1.0
        offset = int(self.kernel.distance(self.geom, point) * sign)

        return CurveProjection(distance_along_curve=distance_along_curve, offset=offset)

    def resolve(self, projection: CurveProjection) -> Point:
        """Point at ``projection.distance_along_curve``; the offset is ignored.

        Raises `NotOnTheCurve` when the distance falls outside this curve.
        """
        if not self.is_valid():
            raise InvalidGeometry()
        length = self.length()
        if length == 0:
            fraction = math.nan
        else:
            fraction = (projection.distance_along_curve - self.start_offset) / length
        if math.isnan(fraction) or not 0.0 <= fraction <= 1.0:
            logger.debug('distance %s is outside %r', projection.distance_along_curve, self)
            raise NotOnTheCurve()
        return self.kernel.interpolate(self.geom, fraction)

    def intersect_segment(self, segment) -> Optional[Point]:
        """First crossing, in polyline order, between the curve and ``segment``.

        Only one point is returned even if the segment crosses several
        times. Collinear overlaps are ignored. None when nothing crosses.
        """
        segment = as_segment(segment)
        for curve_segment in iter_segments(self.coords):
            hit = self.kernel.segment_intersection(segment, curve_segment)
            if isinstance(hit, Point):
                return hit
        return None

    def normal(self, distance: int) -> LineString:
        """Unit vector perpendicular to the curve at ``distance``, pointing left.

        The vector starts on the curve. Raises like `resolve`, and
        `NotFiniteCoordinates` when no segment holds the resolved point.
        """
        point = self.resolve(CurveProjection(distance_along_curve=distance, offset=0))

        segment = next((s for s in iter_segments(self.coords)
                        if s.length > 0 and self.kernel.segment_contains(s, point)), None)
        if segment is None:
            logger.debug('no segment of %r contains %s', self, point.wkt)
            raise NotFiniteCoordinates()

        seg_length = segment.length
        if seg_length == 0:
            raise NotFiniteCoordinates()
        start = segment.coords[0]
        transform = self.kernel.normal_transform(
            start,
            point.x - start[0],
            point.y - start[1],
            1.0 / seg_length,
            CURVE_DEFAULTS['normal_angle_deg'],
        )
        return self.kernel.transform(segment, transform)

    def sublinestring(self, start_fraction: float, end_fraction: float) -> Optional[LineString]:
        """Part of the curve between two fractions of its length.

        Reversed when ``start_fraction > end_fraction``. None when the curve
        is invalid, a fraction is outside [0, 1], or both fractions are equal.
        """
        if not self.is_valid():
            return None
        for f in (start_fraction, end_fraction):
            if not math.isfinite(f) or not 0.0 <= f <= 1.0:
                return None
        if start_fraction == end_fraction:
            return None
        return self.kernel.substring(self.geom, start_fraction, end_fraction)


def fragment(geom, max_len: float, max_extent: Optional[int] = None,
             kernel: Optional[MetricKernel] = None) -> List[Curve]:
    """Split ``geom`` into curves of at most ``max_len``, of equal length.

    Every fragment has ``start_offset == 0``; chaining them into one logical
    curve is up to the caller (see `lrskit.dispatch.chain_fragments`).
    Returns an empty list when the geometry cannot be split.
    """
    if not max_len > 0:
        raise ValueError(f'max_len must be positive, got {max_len!r}')
    kernel = kernel if kernel is not None else PLANAR
    whole = Curve(geom, max_extent=max_extent, kernel=kernel)
    if not whole.is_valid():
        logger.debug('not fragmenting invalid geometry %r', whole)
        return []

    total = kernel.length(whole.geom)
    if not math.isfinite(total):
        return []
    n = math.ceil(total / max_len)
    pieces = kernel.segmentize(whole.geom, n)
    if pieces is None:
        logger.debug('geometry of %r could not be split in %d', whole, n)
        return []
    logger.debug('split length %.3f into %d fragments', total, len(pieces))
    return [Curve(piece, max_extent=whole.max_extent, kernel=kernel) for piece in pieces]
