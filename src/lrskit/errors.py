"""Errors raised by curve operations.

Every failure of a curve operation is one of the three kinds below so that
callers can branch on the cause. All of them derive from `CurveError`.
"""


class CurveError(Exception):
    """Base class of curve failures."""

    message = 'curve operation failed'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class InvalidGeometry(CurveError):
    """The curve needs at least two distinct points."""

    message = 'the curve geometry is not valid (at least two distinct points)'


class NotFiniteCoordinates(CurveError):
    """A geometric computation did not produce a finite result."""

    message = 'the coordinates are not finite'


class NotOnTheCurve(CurveError):
    """A linear position falls outside the curve."""

    message = 'the point is not on the curve'
