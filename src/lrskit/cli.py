"""Command-line access to curve projection, resolution, normals and fragments.

Coordinates are given as ``"x,y x,y ..."`` for lines and ``"x,y"`` for
points. Results are printed as JSON on stdout; logs go to stderr.

    lrskit project --line "0,0 2,0" --point "1,1"
    lrskit resolve --line "0,0 2,0" --distance 1
    lrskit normal --line "0,0 2,0" --distance 1
    lrskit fragment --line "0,0 2,0" --max-len 1
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from lrskit.config import CURVE_DEFAULTS, LOGGING
from lrskit.curve import CurveProjection
from lrskit.dispatch import CoordinateSystem, new_curve, new_fragmented
from lrskit.errors import CurveError
from lrskit.utils import safe_log_exception

log = logging.getLogger('lrskit')


def _setup_logging(verbose: bool) -> None:
    if not log.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter(LOGGING['format']))
        log.addHandler(h)
    log.setLevel(logging.DEBUG if verbose else LOGGING['level'])


def _parse_point(text: str) -> Tuple[float, float]:
    parts = text.split(',')
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f'expected "x,y", got {text!r}')
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f'expected a non-negative integer, got {text!r}')
    return value


def _parse_line(text: str) -> List[Tuple[float, float]]:
    return [_parse_point(p) for p in text.split()]


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='lrskit', description='Linear referencing on a polyline')
    ap.add_argument('--verbose', action='store_true', help='debug logging')
    sub = ap.add_subparsers(dest='command', required=True)

    def add_command(name, help_text):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('--line', type=_parse_line, required=True, help='"x,y x,y ..."')
        p.add_argument('--max-extent', type=int, default=CURVE_DEFAULTS['max_extent'])
        p.add_argument('--start-offset', type=_non_negative_int, default=0)
        p.add_argument('--spherical', action='store_true', help='lon/lat coordinates, metres')
        return p

    add_command('project', 'point -> distance along the line and offset').add_argument(
        '--point', type=_parse_point, required=True, help='"x,y"')
    add_command('resolve', 'distance along the line -> point').add_argument(
        '--distance', type=int, required=True)
    add_command('normal', 'unit normal at a distance along the line').add_argument(
        '--distance', type=int, required=True)
    add_command('fragment', 'split the line into chained pieces').add_argument(
        '--max-len', type=float, required=True)
    return ap


def _run(args) -> dict | list:
    system = CoordinateSystem.SPHERICAL if args.spherical else CoordinateSystem.PLANAR

    if args.command == 'fragment':
        curves = new_fragmented(args.line, args.max_len, max_extent=args.max_extent, system=system)
        for c in curves:
            c.start_offset += args.start_offset
        return [
            {'start_offset': c.start_offset, 'length': c.length(), 'coords': c.coords.tolist()}
            for c in curves
        ]

    curve = new_curve(args.line, max_extent=args.max_extent, system=system)
    curve.start_offset = args.start_offset

    if args.command == 'project':
        projection = curve.project(args.point)
        return {'distance_along_curve': projection.distance_along_curve, 'offset': projection.offset}
    if args.command == 'resolve':
        point = curve.resolve(CurveProjection(distance_along_curve=args.distance))
        return {'x': point.x, 'y': point.y}
    normal = curve.normal(args.distance)
    return {'coords': [list(c) for c in normal.coords]}


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    log.debug('running %s on %d coordinates', args.command, len(args.line))

    try:
        result = _run(args)
    except CurveError as exc:
        log.error('%s failed: %s', args.command, exc)
        return 1
    except Exception as exc:
        safe_log_exception('unexpected failure', exc, command=args.command)
        return 2

    print(json.dumps(result))
    return 0


if __name__ == '__main__':
    sys.exit(main())
