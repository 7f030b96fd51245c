"""Shared utilities."""

from .constants import VERSION, HEADER_COMMENT, MAX_CANVAS_WIDTH, MAX_CANVAS_HEIGHT
from .errors import PnmError, FormatError, ParseError, RangeError, OutOfBoundsError
from .metrics import Timer
from .hexdump import hexdump, write_hexdump

# test_images is imported directly; it depends on models.raster, which imports this package

__all__ = [
    'VERSION',
    'HEADER_COMMENT',
    'MAX_CANVAS_WIDTH',
    'MAX_CANVAS_HEIGHT',
    'PnmError',
    'FormatError',
    'ParseError',
    'RangeError',
    'OutOfBoundsError',
    'Timer',
    'hexdump',
    'write_hexdump',
]
