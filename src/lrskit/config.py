# -*- coding: utf-8 -*-

"""
lrskit/config.py

This module centralizes the tunable parameters of the linear referencing
core. Curves, kernels and the command-line interface read their defaults
from here so every entry point agrees on the same values.

Contents:
---------
1. CURVE_DEFAULTS:
   - Default bounding-box buffer (`max_extent`) for new curves.
   - Absolute tolerance used when looking up the polyline segment that holds
     a resolved point (planar coordinate units).
   - Rotation applied when building a normal vector (degrees, counter-clockwise).

2. GEODESIC:
   - Ellipsoid used by the spherical kernel (any name accepted by `pyproj.Geod`).
   - Tolerance, in metres, for deciding that a point lies on a geodesic segment.

3. LOGGING:
   - Format and default level of the console handler installed by the CLI.

Usage:
------
    from lrskit.config import CURVE_DEFAULTS

    tolerance = CURVE_DEFAULTS['contains_tolerance']
"""

# ───────────────────────────────────────────────────────────────────────────────
# 1) CURVE DEFAULTS
# ───────────────────────────────────────────────────────────────────────────────
CURVE_DEFAULTS = {
    'max_extent': 50,             # bbox buffer, same units as the coordinates
    'contains_tolerance': 1e-9,   # point-on-segment tolerance for normals
    'normal_angle_deg': 90.0,     # normal points to the left of travel
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) GEODESIC PARAMETERS (lon/lat degrees, EPSG:4326 axis order x=lon, y=lat)
# ───────────────────────────────────────────────────────────────────────────────
GEODESIC = {
    'ellps': 'WGS84',
    'contains_tolerance_m': 1e-3,
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) LOGGING
# ───────────────────────────────────────────────────────────────────────────────
LOGGING = {
    'format': '[%(levelname)s] %(name)s: %(message)s',
    'level': 'INFO',
}
