"""Per-pixel transforms: identity, transpose, rotation and scaling."""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from models.pgm_format import FormatDescriptor
from models.raster import Raster
from models.scale_spec import ScaleSpec
from models.transform_kind import TransformKind
from engines.interpolation import extrapolate_linear, linear_interpolate, bilinear_interpolate


def _split(position: float) -> Tuple[int, float]:
    """Integer part and fractional remainder of a non-negative position."""
    base = int(position)
    return base, position - base


def _identity(t: "Transform", row: int, col: int) -> int:
    return t.source.at(row, col)


def _transpose(t: "Transform", row: int, col: int) -> int:
    return t.source.at(col, row)


def _rotate90(t: "Transform", row: int, col: int) -> int:
    return t.source.at(t.output.width - 1 - col, row)


def _scale_nearest(t: "Transform", row: int, col: int) -> int:
    return t.source.sample(int(row / t.scale.height_factor), int(col / t.scale.width_factor))


def _scale_bilinear_up(t: "Transform", row: int, col: int) -> int:
    """
    Bilinear upscale with extrapolated borders.

    The output is split into nine regions. Cells within half a scale
    step of the top or left edge (or the matching margin at the bottom
    or right) have no source neighbour on that side, so the missing
    neighbour is extrapolated from the border sample and the next one
    inward. Edge cells interpolate along one axis, corners along two.
    Interior cells are shifted back by the top/left margin and
    interpolated from four real neighbours.
    """
    src = t.source
    hs = t.scale.height_factor
    ws = t.scale.width_factor

    top = row < int(hs / 2)
    bottom = row > t.output.height - int((hs + 1) / 2)
    left = col < int(ws / 2)
    right = col > t.output.width - int((ws + 1) / 2)

    base_row, frac_row = _split(row / hs)
    base_col, frac_col = _split(col / ws)

    def near(d_row: int, d_col: int) -> int:
        return src.sample(base_row + d_row, base_col + d_col)

    p = near(0, 0)
    ext = extrapolate_linear

    if top and left:
        value = bilinear_interpolate(
            frac_row, frac_col,
            ext(p, near(1, 1)), ext(p, near(1, 0)), ext(p, near(0, 1)), p)
    elif top and right:
        value = bilinear_interpolate(
            frac_row, frac_col,
            ext(p, near(1, 0)), ext(p, near(1, -1)), p, ext(p, near(0, -1)))
    elif bottom and left:
        value = bilinear_interpolate(
            frac_row, frac_col,
            ext(p, near(0, 1)), p, ext(p, near(-1, 1)), ext(p, near(-1, 0)))
    elif bottom and right:
        value = bilinear_interpolate(
            frac_row, frac_col,
            p, ext(p, near(0, -1)), ext(p, near(-1, 0)), ext(p, near(-1, 1)))
    elif top:
        value = linear_interpolate(frac_row, ext(p, near(1, 0)), p)
    elif bottom:
        value = linear_interpolate(frac_row, p, ext(p, near(-1, 0)))
    elif left:
        value = linear_interpolate(frac_col, ext(p, near(0, 1)), p)
    elif right:
        value = linear_interpolate(frac_col, p, ext(p, near(0, -1)))
    else:
        base_row, frac_row = _split((row - int(hs / 2)) / hs)
        base_col, frac_col = _split((col - int(ws / 2)) / ws)
        value = bilinear_interpolate(
            frac_col, frac_row,
            near(0, 0), near(1, 0), near(0, 1), near(1, 1))

    # Truncated, not clamped to max_value
    return int(value)


def _scale_box_down(t: "Transform", row: int, col: int) -> int:
    """Truncated mean of the source block covered by one output cell."""
    src = t.source
    block_rows = max(1, int(1 / t.scale.height_factor))
    block_cols = max(1, int(1 / t.scale.width_factor))
    start_row = int(row / t.scale.height_factor)
    start_col = int(col / t.scale.width_factor)

    total = 0
    for rs in range(block_rows):
        for cs in range(block_cols):
            total += src.sample(start_row + rs, start_col + cs)
    return total // (block_rows * block_cols)


_EVALUATORS = {
    TransformKind.IDENTITY: _identity,
    TransformKind.TRANSPOSE: _transpose,
    TransformKind.ROTATE90: _rotate90,
    TransformKind.SCALE_NEAREST: _scale_nearest,
    TransformKind.SCALE_BILINEAR_UP: _scale_bilinear_up,
    TransformKind.SCALE_BOX_DOWN: _scale_box_down,
}


@dataclass(frozen=True)
class Transform:
    """Maps an output cell to a sample of the source raster."""

    kind: TransformKind
    source: Raster
    output: FormatDescriptor
    scale: Optional[ScaleSpec] = None

    def __post_init__(self):
        if self.kind.is_scale and self.scale is None:
            raise ValueError(f"{self.kind.value} requires a scale spec")

    def evaluate(self, row: int, col: int) -> int:
        return _EVALUATORS[self.kind](self, row, col)

    def __call__(self, row: int, col: int) -> int:
        return self.evaluate(row, col)

    def render(self) -> np.ndarray:
        """Evaluate every output cell in row-major order."""
        out = np.zeros((self.output.height, self.output.width), dtype=np.int64)
        for row in range(self.output.height):
            for col in range(self.output.width):
                out[row, col] = self.evaluate(row, col)
        return out
