"""Data models: raster grid, format descriptor, scale factors, transform kinds."""

from .pgm_format import Encoding, FormatDescriptor
from .raster import Raster, check_canvas
from .scale_spec import ScaleSpec, DirectionHint
from .transform_kind import TransformKind, Interpolation, Operation

__all__ = [
    'Encoding',
    'FormatDescriptor',
    'Raster',
    'check_canvas',
    'ScaleSpec',
    'DirectionHint',
    'TransformKind',
    'Interpolation',
    'Operation',
]
