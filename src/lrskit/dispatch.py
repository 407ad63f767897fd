"""Coordinate-system selection and fragment chaining.

The curve algorithms are identical for every coordinate system; only the
kernel changes. This module is the single place where a coordinate system
is turned into a kernel, so callers pick a `CoordinateSystem` once and get
curves that carry the right kernel.
"""
from typing import List, Optional, Sequence, Union
import enum
import logging

from lrskit.curve import Curve, fragment
from lrskit.kernels import PLANAR, SPHERICAL, MetricKernel

logger = logging.getLogger(__name__)


class CoordinateSystem(enum.Enum):
    PLANAR = 'planar'
    SPHERICAL = 'spherical'


_KERNELS = {
    CoordinateSystem.PLANAR: PLANAR,
    CoordinateSystem.SPHERICAL: SPHERICAL,
}


def kernel_for(system: Union[CoordinateSystem, str]) -> MetricKernel:
    """Shared kernel instance for ``system`` (enum member or its value)."""
    return _KERNELS[CoordinateSystem(system)]


def new_curve(coords, max_extent: Optional[int] = None,
              system: Union[CoordinateSystem, str] = CoordinateSystem.PLANAR) -> Curve:
    return Curve(coords, max_extent=max_extent, kernel=kernel_for(system))


def new_fragmented(coords, max_len: float, max_extent: Optional[int] = None,
                   system: Union[CoordinateSystem, str] = CoordinateSystem.PLANAR) -> List[Curve]:
    """Fragment ``coords`` and chain the fragments into one logical curve."""
    return chain_fragments(fragment(coords, max_len, max_extent=max_extent, kernel=kernel_for(system)))


def chain_fragments(curves: Sequence[Curve]) -> List[Curve]:
    """Set each curve's ``start_offset`` from the lengths of the curves before it.

    The first curve keeps its own offset. Offsets are the truncated running
    sum of the exact lengths, so rounding does not accumulate along the chain.
    Curves are updated in place; call this before sharing them.
    """
    curves = list(curves)
    if not curves:
        return curves
    base = curves[0].start_offset
    running = 0.0
    for curve in curves:
        curve.start_offset = base + int(running)
        running += curve.kernel.length(curve.geom)
    logger.debug('chained %d fragments, logical length %.3f', len(curves), running)
    return curves
