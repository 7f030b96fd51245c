"""PGM engines - codec, scale parsing, transforms, conversion session."""

from .interpolation import extrapolate_linear, linear_interpolate, bilinear_interpolate
from .pgm_codec import decode, decode_bytes, encode, encode_raster, read_pgm, write_pgm
from .scale_parser import parse_scale, validate_scale, scaled_dimensions, select_scale_transform
from .transforms import Transform
from .session import ConversionSession, ConversionResult, derive_output, convert

__all__ = [
    'extrapolate_linear',
    'linear_interpolate',
    'bilinear_interpolate',
    'decode',
    'decode_bytes',
    'encode',
    'encode_raster',
    'read_pgm',
    'write_pgm',
    'parse_scale',
    'validate_scale',
    'scaled_dimensions',
    'select_scale_transform',
    'Transform',
    'ConversionSession',
    'ConversionResult',
    'derive_output',
    'convert',
]
