import pytest

from lrskit.curve import Curve, CurveProjection
from lrskit.dispatch import (CoordinateSystem, chain_fragments, kernel_for, new_curve,
                             new_fragmented)
from lrskit.kernels import PlanarKernel, SphericalKernel


def test_kernel_for():
    assert isinstance(kernel_for(CoordinateSystem.PLANAR), PlanarKernel)
    assert isinstance(kernel_for('spherical'), SphericalKernel)
    assert kernel_for('planar') is kernel_for(CoordinateSystem.PLANAR)
    with pytest.raises(ValueError):
        kernel_for('mercator')


def test_new_curve_uses_system_kernel(equator_coords):
    c = new_curve(equator_coords, max_extent=3, system=CoordinateSystem.SPHERICAL)
    assert c.kernel.name == 'spherical'
    assert c.max_extent == 3
    assert new_curve(equator_coords).kernel.name == 'planar'


def test_new_fragmented_offsets_are_continuous():
    fragments = new_fragmented([(0.0, 0.0), (12.0, 0.0), (12.0, 4.0)], 4)
    assert len(fragments) == 4
    assert [f.start_offset for f in fragments] == [0, 4, 8, 12]
    # a point next to the third fragment keeps its absolute distance
    assert fragments[2].project((9.0, 0.5)).distance_along_curve == 9
    p = fragments[3].resolve(CurveProjection(distance_along_curve=14))
    assert (p.x, p.y) == pytest.approx((12.0, 2.0))


def test_new_fragmented_invalid():
    assert new_fragmented([(1.0, 1.0), (1.0, 1.0)], 4) == []


def test_chain_fragments_keeps_first_offset():
    curves = [Curve([(0.0, 0.0), (1.5, 0.0)]), Curve([(1.5, 0.0), (3.0, 0.0)]),
              Curve([(3.0, 0.0), (4.5, 0.0)])]
    curves[0].start_offset = 10
    chained = chain_fragments(curves)
    # running sum is truncated, not the sum of truncated lengths
    assert [c.start_offset for c in chained] == [10, 11, 13]
    assert chain_fragments([]) == []


def test_new_fragmented_spherical(equator_coords):
    fragments = new_fragmented(equator_coords, 50000, system='spherical')
    assert len(fragments) == 3
    assert fragments[0].start_offset == 0
    assert 37105 <= fragments[1].start_offset <= 37107
    assert 74211 <= fragments[2].start_offset <= 74214
    total = sum(f.kernel.length(f.geom) for f in fragments)
    assert total == pytest.approx(111319.49, abs=0.01)
