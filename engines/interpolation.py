"""Linear extrapolation and 1D/2D linear interpolation."""

from utils.constants import EXTRAPOLATION_MIN, EXTRAPOLATION_MAX


def extrapolate_linear(x1: int, x2: int) -> int:
    """
    Synthesize the sample one step outside the border.

    x1 is the border sample, x2 the next sample inward. The projection
    is clamped to [0, 255].
    """
    x0 = x1 - (x2 - x1)
    return max(EXTRAPOLATION_MIN, min(EXTRAPOLATION_MAX, x0))


def linear_interpolate(x: float, fx1: float, fx2: float) -> float:
    """Estimate f(x) on the unit interval, f(0) = fx1 and f(1) = fx2."""
    return fx1 * (1 - x) + fx2 * x


def bilinear_interpolate(
    x: float,
    y: float,
    fxy11: float,
    fxy12: float,
    fxy21: float,
    fxy22: float
) -> float:
    """Estimate f(x, y) on the unit square from its four corners."""
    return linear_interpolate(
        y,
        linear_interpolate(x, fxy11, fxy21),
        linear_interpolate(x, fxy12, fxy22),
    )
