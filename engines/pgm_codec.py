"""PGM codec: P2 (ASCII) and P5 (binary) grayscale images."""

import logging
import re
from typing import BinaryIO, Callable, Optional, Tuple

import numpy as np

from models.pgm_format import Encoding, FormatDescriptor
from models.raster import Raster, check_canvas
from utils.constants import HEADER_COMMENT
from utils.errors import FormatError

logger = logging.getLogger(__name__)

_INTEGER = re.compile(rb'([+-]?)(\d+)')

SampleProvider = Callable[[int, int], int]


def _corrupted(reason: str) -> FormatError:
    logger.debug("Corrupted input: %s", reason)
    return FormatError("corrupted input")


def _parse_int(token: bytes) -> int:
    match = _INTEGER.fullmatch(token)
    if not match:
        raise _corrupted(f"expected integer, got {token[:16]!r}")
    sign, digits = match.groups()
    # int() caps the digit count, leading zeros excluded
    try:
        return int(sign + (digits.lstrip(b'0') or b'0'))
    except ValueError:
        raise _corrupted(f"integer of {len(digits)} digits") from None


def _split_header(data: bytes) -> Tuple[list, int]:
    """Split the four header lines; returns (lines, body offset)."""
    lines = []
    pos = 0
    for _ in range(4):
        end = data.find(b'\n', pos)
        if end < 0:
            raise _corrupted("truncated header")
        lines.append(data[pos:end])
        pos = end + 1
    return lines, pos


def _parse_header(data: bytes) -> Tuple[str, int, int, int, int]:
    """Returns (magic, width, height, max_value, body offset)."""
    lines, offset = _split_header(data)
    magic_tokens = lines[0].split()
    size_tokens = lines[2].split()
    max_tokens = lines[3].split()
    if len(magic_tokens) != 1 or len(size_tokens) != 2 or len(max_tokens) != 1:
        raise _corrupted("malformed header line")

    magic = magic_tokens[0].decode('ascii', errors='replace')
    width, height = _parse_int(size_tokens[0]), _parse_int(size_tokens[1])
    max_value = _parse_int(max_tokens[0])
    if width < 0 or height < 0 or max_value < 0:
        raise _corrupted(f"negative header value {width} {height} {max_value}")
    return magic, width, height, max_value, offset


def _resolve_encoding(magic: str, expected: Optional[Encoding]) -> Encoding:
    parsed = Encoding.from_magic(magic)
    if expected is None or expected is Encoding.UNKNOWN:
        if parsed is Encoding.UNKNOWN:
            raise FormatError("unknown format")
        return parsed
    if parsed is not expected:
        logger.debug("Expected %s input, found magic %r", expected.magic, magic)
        raise FormatError("wrong format")
    return expected


def _decode_ascii(body: bytes, count: int, max_value: int) -> np.ndarray:
    tokens = body.split()
    if len(tokens) < count:
        raise _corrupted(f"{len(tokens)} samples, expected {count}")
    values = []
    for token in tokens[:count]:
        value = _parse_int(token)
        if value < 0 or value > max_value:
            raise _corrupted(f"sample {value} outside [0, {max_value}]")
        values.append(value)
    return np.array(values, dtype=np.int64)


def _decode_binary(body: bytes, count: int, max_value: int) -> np.ndarray:
    if len(body) < count:
        raise _corrupted(f"{len(body)} bytes, expected {count}")
    if len(body) > count:
        raise _corrupted(f"{len(body) - count} trailing bytes")
    samples = np.frombuffer(body, dtype=np.uint8).astype(np.int64)
    if count and samples.max() > max_value:
        raise _corrupted(f"sample {samples.max()} outside [0, {max_value}]")
    return samples


def decode_bytes(
    data: bytes,
    expected: Optional[Encoding] = None
) -> Tuple[FormatDescriptor, Raster]:
    """Decode a complete PGM image held in memory."""
    magic, width, height, max_value, offset = _parse_header(data)
    encoding = _resolve_encoding(magic, expected)
    check_canvas(width, height)

    descriptor = FormatDescriptor(encoding, width, height, max_value)
    body = data[offset:]
    if encoding is Encoding.ASCII:
        samples = _decode_ascii(body, descriptor.sample_count, max_value)
    else:
        samples = _decode_binary(body, descriptor.sample_count, max_value)

    raster = Raster(samples.reshape(height, width)).freeze()
    logger.debug("Decoded %s %dx%d max=%d", magic, width, height, max_value)
    return descriptor, raster


def decode(
    stream: BinaryIO,
    expected: Optional[Encoding] = None
) -> Tuple[FormatDescriptor, Raster]:
    """
    Decode a PGM byte stream into its descriptor and a frozen raster.

    The stream is read to the end. When `expected` is given the magic
    must match it, otherwise the parsed encoding is adopted.
    """
    return decode_bytes(stream.read(), expected)


def encode_header(descriptor: FormatDescriptor) -> bytes:
    if descriptor.encoding is Encoding.UNKNOWN:
        raise FormatError("wrong format")
    return (
        f"{descriptor.encoding.magic}\n"
        f"{HEADER_COMMENT}\n"
        f"{descriptor.width} {descriptor.height}\n"
        f"{descriptor.max_value}\n"
    ).encode('ascii')


def encode(stream: BinaryIO, descriptor: FormatDescriptor, sample_at: SampleProvider) -> None:
    """
    Write header and body, pulling samples in row-major order.

    Binary samples are truncated to one byte without range checks.
    """
    stream.write(encode_header(descriptor))
    if descriptor.width == 0:
        return

    for row in range(descriptor.height):
        values = [sample_at(row, col) for col in range(descriptor.width)]
        if descriptor.encoding is Encoding.ASCII:
            stream.write(" ".join(str(v) for v in values).encode('ascii') + b"\n")
        else:
            stream.write(bytes(v & 0xFF for v in values))


def encode_raster(stream: BinaryIO, descriptor: FormatDescriptor, raster: Raster) -> None:
    encode(stream, descriptor, raster.at)


def read_pgm(path: str, expected: Optional[Encoding] = None) -> Tuple[FormatDescriptor, Raster]:
    with open(path, 'rb') as f:
        return decode(f, expected)


def write_pgm(path: str, descriptor: FormatDescriptor, raster: Raster) -> None:
    with open(path, 'wb') as f:
        encode_raster(f, descriptor, raster)
