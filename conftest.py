import pytest
from shapely.geometry import LineString

from lrskit import Curve


@pytest.fixture
def straight_curve():
    """Two-unit planar curve along the x axis, bbox buffer of 1."""
    return Curve(LineString([(0.0, 0.0), (2.0, 0.0)]), max_extent=1)


@pytest.fixture
def equator_coords():
    """One degree of longitude along the equator (lon, lat)."""
    return [(0.0, 0.0), (1.0, 0.0)]
