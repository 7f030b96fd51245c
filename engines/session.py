"""Conversion session: decode, derive output geometry, transform, encode."""

import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple

import numpy as np

from models.pgm_format import Encoding, FormatDescriptor
from models.raster import Raster
from models.scale_spec import ScaleSpec
from models.transform_kind import TransformKind, Interpolation, Operation
from engines.pgm_codec import decode, encode
from engines.scale_parser import parse_and_validate, scaled_dimensions, select_scale_transform
from engines.transforms import Transform
from utils.metrics import Timer

logger = logging.getLogger(__name__)

_FIXED_KINDS = {
    Operation.CONVERT: TransformKind.IDENTITY,
    Operation.TRANSPOSE: TransformKind.TRANSPOSE,
    Operation.ROTATE90: TransformKind.ROTATE90,
}


@dataclass
class ConversionResult:
    """Outcome of one conversion run."""

    input_format: FormatDescriptor
    output_format: FormatDescriptor
    transform_kind: TransformKind
    scale: Optional[ScaleSpec]

    # Runtime
    decode_time_ms: float = 0.0
    encode_time_ms: float = 0.0


def derive_output(
    input_format: FormatDescriptor,
    operation: Operation,
    output_encoding: Optional[Encoding] = None,
    scale_text: Optional[str] = None,
    interpolation: Interpolation = Interpolation.BILINEAR
) -> Tuple[FormatDescriptor, TransformKind, Optional[ScaleSpec]]:
    """
    Output descriptor and transform for an input descriptor.

    Encoding defaults to the input's. Transpose and rotation swap width
    and height; scaling parses and validates `scale_text` and applies
    the factors to the input dimensions.
    """
    encoding = output_encoding
    if encoding is None or encoding is Encoding.UNKNOWN:
        encoding = input_format.encoding

    width, height = input_format.width, input_format.height
    if operation.swaps_dimensions:
        width, height = height, width

    scale = None
    if operation is Operation.SCALE:
        if scale_text is None:
            raise ValueError("Scale operation requires a scale expression")
        scale = parse_and_validate(scale_text)
        width, height = scaled_dimensions(scale, width, height)
        kind = select_scale_transform(scale, interpolation)
    else:
        kind = _FIXED_KINDS[operation]

    output_format = FormatDescriptor(encoding, width, height, input_format.max_value)
    return output_format, kind, scale


class ConversionSession:
    """
    One conversion from an input PGM stream to an output PGM stream.

    The whole input raster is decoded and the output descriptor derived
    before the first output byte is written. Bytes already written when
    encoding fails are not retracted.
    """

    def __init__(
        self,
        operation: Operation = Operation.CONVERT,
        input_encoding: Optional[Encoding] = None,
        output_encoding: Optional[Encoding] = None,
        scale_text: Optional[str] = None,
        interpolation: Interpolation = Interpolation.BILINEAR
    ):
        self.operation = operation
        self.input_encoding = input_encoding
        self.output_encoding = output_encoding
        self.scale_text = scale_text
        self.interpolation = interpolation

    def prepare(self, input_stream: BinaryIO) -> Tuple[FormatDescriptor, Transform]:
        """Decode the input and build the transform; writes nothing."""
        input_format, raster = decode(input_stream, self.input_encoding)
        return self._plan(input_format, raster)

    def _plan(self, input_format: FormatDescriptor, raster: Raster) -> Tuple[FormatDescriptor, Transform]:
        output_format, kind, scale = derive_output(
            input_format, self.operation, self.output_encoding,
            self.scale_text, self.interpolation
        )
        logger.debug(
            "%s %dx%d -> %s %dx%d via %s",
            input_format.encoding.magic, input_format.width, input_format.height,
            output_format.encoding.magic, output_format.width, output_format.height,
            kind.value,
        )
        return input_format, Transform(kind, raster, output_format, scale)

    def run(self, input_stream: BinaryIO, output_stream: BinaryIO) -> ConversionResult:
        timer = Timer()
        input_format, transform = timer.measure_decode(self.prepare, input_stream)
        timer.measure_encode(encode, output_stream, transform.output, transform)
        return ConversionResult(
            input_format=input_format,
            output_format=transform.output,
            transform_kind=transform.kind,
            scale=transform.scale,
            decode_time_ms=timer.decode_time_ms,
            encode_time_ms=timer.encode_time_ms,
        )

    def run_files(self, input_path: str, output_path: str) -> ConversionResult:
        """Convert between files; the output is only created once the input decodes."""
        timer = Timer()
        with open(input_path, 'rb') as input_stream:
            input_format, transform = timer.measure_decode(self.prepare, input_stream)
        with open(output_path, 'wb') as output_stream:
            timer.measure_encode(encode, output_stream, transform.output, transform)
        logger.debug("Wrote %s in %.2f ms", output_path, timer.total_ms)
        return ConversionResult(
            input_format=input_format,
            output_format=transform.output,
            transform_kind=transform.kind,
            scale=transform.scale,
            decode_time_ms=timer.decode_time_ms,
            encode_time_ms=timer.encode_time_ms,
        )


def convert(
    raster: Raster,
    input_format: FormatDescriptor,
    operation: Operation,
    scale_text: Optional[str] = None,
    interpolation: Interpolation = Interpolation.BILINEAR,
    output_encoding: Optional[Encoding] = None
) -> Tuple[FormatDescriptor, np.ndarray]:
    """Transform an in-memory raster; returns the output descriptor and samples."""
    session = ConversionSession(operation, None, output_encoding, scale_text, interpolation)
    _, transform = session._plan(input_format, raster)
    return transform.output, transform.render()
