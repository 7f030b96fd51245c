"""Requested operations and the pixel transforms they select."""

from enum import Enum


class TransformKind(Enum):
    """Coordinate mapping evaluated once per output cell."""

    IDENTITY = 'identity'
    TRANSPOSE = 'transpose'
    ROTATE90 = 'rotate90'
    SCALE_NEAREST = 'scale_nearest'
    SCALE_BILINEAR_UP = 'scale_bilinear_up'
    SCALE_BOX_DOWN = 'scale_box_down'

    @property
    def swaps_dimensions(self) -> bool:
        return self in (TransformKind.TRANSPOSE, TransformKind.ROTATE90)

    @property
    def is_scale(self) -> bool:
        return self in (
            TransformKind.SCALE_NEAREST,
            TransformKind.SCALE_BILINEAR_UP,
            TransformKind.SCALE_BOX_DOWN,
        )


class Interpolation(Enum):
    """Interpolation family requested for a scale operation."""

    NEAREST = 'nearest'
    BILINEAR = 'bilinear'


class Operation(Enum):
    """Conversion requested by the caller."""

    CONVERT = 'convert'
    TRANSPOSE = 'transpose'
    ROTATE90 = 'rotate90'
    SCALE = 'scale'

    @property
    def swaps_dimensions(self) -> bool:
        return self in (Operation.TRANSPOSE, Operation.ROTATE90)
