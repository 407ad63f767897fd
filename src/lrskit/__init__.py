"""
lrskit
------
Linear referencing on polylines: convert between a distance along a curve
and a spatial coordinate, for planar or lon/lat geometries.

    from lrskit import Curve

    curve = Curve([(0.0, 0.0), (2.0, 0.0)], max_extent=1)
    curve.project((1.0, 1.0))   # CurveProjection(distance_along_curve=1, offset=1)
"""

__version__ = "0.1.0"

from .errors import CurveError, InvalidGeometry, NotFiniteCoordinates, NotOnTheCurve
from .kernels import MetricKernel, PlanarKernel, SphericalKernel, Orientation, SegmentOverlap
from .curve import Curve, CurveProjection, fragment
from .dispatch import CoordinateSystem, kernel_for, new_curve, new_fragmented, chain_fragments
