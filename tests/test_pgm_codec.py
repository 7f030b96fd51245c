"""Tests for P2/P5 decoding and encoding."""

import io

import numpy as np
import pytest
from models.pgm_format import Encoding, FormatDescriptor
from models.raster import Raster
from engines.pgm_codec import decode, decode_bytes, encode, encode_raster, read_pgm, write_pgm
from utils.errors import FormatError, OutOfBoundsError
from utils.test_images import generate_ramp, generate_gradient


def p2(width, height, max_value, body, comment=b"# test"):
    return b"P2\n" + comment + b"\n" + f"{width} {height}\n{max_value}\n".encode() + body


def p5(width, height, max_value, body, comment=b"# test"):
    return b"P5\n" + comment + b"\n" + f"{width} {height}\n{max_value}\n".encode() + bytes(body)


def encode_to_bytes(descriptor, raster):
    buf = io.BytesIO()
    encode_raster(buf, descriptor, raster)
    return buf.getvalue()


def test_decode_ascii():
    descriptor, raster = decode_bytes(p2(3, 2, 9, b"1 2 3\n4 5\n6\n"))
    assert descriptor == FormatDescriptor(Encoding.ASCII, 3, 2, 9)
    assert descriptor.sample_count == 6
    assert np.array_equal(raster.array, [[1, 2, 3], [4, 5, 6]])
    assert raster.frozen


def test_decode_binary():
    descriptor, raster = decode(io.BytesIO(p5(2, 2, 255, [0, 10, 255, 32])))
    assert descriptor.encoding is Encoding.BINARY
    assert np.array_equal(raster.array, [[0, 10], [255, 32]])


def test_binary_body_may_start_with_whitespace_bytes():
    """Only the single newline after max value belongs to the header."""
    _, raster = decode_bytes(p5(3, 1, 255, [10, 32, 9]))
    assert np.array_equal(raster.array, [[10, 32, 9]])


def test_comment_contents_ignored():
    _, raster = decode_bytes(p2(1, 1, 5, b"3\n", comment=b"# 7 7 P5 anything at all"))
    assert raster.at(0, 0) == 3


def test_expected_encoding_mismatch():
    """Parsed magic must match the requested input encoding."""
    with pytest.raises(FormatError, match="wrong format"):
        decode_bytes(p2(1, 1, 5, b"3\n"), Encoding.BINARY)
    with pytest.raises(FormatError, match="wrong format"):
        decode_bytes(p5(1, 1, 5, [3]), Encoding.ASCII)


def test_unknown_magic():
    data = b"P6\n# c\n1 1\n255\n\x00\x00\x00"
    with pytest.raises(FormatError):
        decode_bytes(data)
    with pytest.raises(FormatError, match="wrong format"):
        decode_bytes(data, Encoding.ASCII)


@pytest.mark.parametrize("data", [
    b"",
    b"P2\n",
    b"P2\n# c\n",
    b"P2\n# c\n3 x\n255\n1 2 3\n",
    b"P2\n# c\n3\n255\n1 2 3\n",
    b"P2\n# c\n3 1 4\n255\n1 2 3\n",
    b"P2\n# c\n3 1\nmax\n1 2 3\n",
    b"P2\n# c\n3 1\n255",
    b"P2\n# c\n-3 1\n255\n",
])
def test_corrupted_header(data):
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(data)


def test_ascii_too_few_samples():
    """width=3 height=3 with fewer than 9 samples."""
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(p2(3, 3, 255, b"1 2 3\n4 5 6\n7 8\n"))


def test_ascii_non_numeric_sample():
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(p2(2, 1, 255, b"1 two\n"))


def test_ascii_trailing_tokens_ignored():
    _, raster = decode_bytes(p2(2, 1, 255, b"1 2\n3 4\n"))
    assert np.array_equal(raster.array, [[1, 2]])


def test_binary_trailing_bytes():
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(p5(2, 1, 255, [1, 2, 3]))


def test_binary_too_few_bytes():
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(p5(2, 2, 255, [1, 2, 3]))


def test_sample_above_max_value():
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(p2(2, 1, 10, b"5 11\n"))
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(p5(2, 1, 10, [5, 11]))


def test_negative_sample():
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(p2(2, 1, 10, b"5 -1\n"))


def test_overlong_header_integer():
    """A width too long for int() still reports corrupted input."""
    data = b"P2\n# c\n" + b"9" * 5000 + b" 1\n255\n0\n"
    with pytest.raises(FormatError, match="corrupted input"):
        decode_bytes(data)


def test_zero_padded_sample():
    """Leading zeros are ignored however many there are."""
    _, raster = decode_bytes(p2(2, 1, 255, b"0" * 5000 + b" 0007\n"))
    assert np.array_equal(raster.array, [[0, 7]])


def test_oversized_input_rejected():
    """Dimensions beyond the 512x512 canvas raise before indexing."""
    with pytest.raises(OutOfBoundsError):
        decode_bytes(p5(513, 1, 255, [0] * 513))
    with pytest.raises(OutOfBoundsError):
        decode_bytes(p2(1, 600, 255, b"0\n" * 600))


def test_encode_ascii_layout():
    """Single spaces between samples, newline after every row."""
    descriptor = FormatDescriptor(Encoding.ASCII, 3, 2, 255)
    data = encode_to_bytes(descriptor, Raster.from_array([[1, 2, 3], [40, 50, 60]]))
    assert data == b"P2\n# Generated by pnmdump.exe\n3 2\n255\n1 2 3\n40 50 60\n"


def test_encode_ascii_single_column():
    descriptor = FormatDescriptor(Encoding.ASCII, 1, 3, 9)
    data = encode_to_bytes(descriptor, Raster.from_array([[1], [2], [3]]))
    assert data.endswith(b"9\n1\n2\n3\n")


def test_encode_binary_layout():
    descriptor = FormatDescriptor(Encoding.BINARY, 2, 2, 255)
    data = encode_to_bytes(descriptor, Raster.from_array([[0, 1], [254, 255]]))
    assert data == b"P5\n# Generated by pnmdump.exe\n2 2\n255\n\x00\x01\xfe\xff"


def test_encode_binary_truncates_to_byte():
    """Samples above 255 keep only their low byte."""
    descriptor = FormatDescriptor(Encoding.BINARY, 2, 1, 1000)
    data = encode_to_bytes(descriptor, Raster.from_array([[256, 300]]))
    assert data.endswith(b"\x00\x2c")


def test_encode_pulls_samples_row_major():
    calls = []

    def provider(row, col):
        calls.append((row, col))
        return row * 10 + col

    descriptor = FormatDescriptor(Encoding.ASCII, 2, 2, 99)
    encode(io.BytesIO(), descriptor, provider)
    assert calls == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_encode_unknown_encoding():
    descriptor = FormatDescriptor(Encoding.UNKNOWN, 1, 1, 255)
    with pytest.raises(FormatError):
        encode_to_bytes(descriptor, Raster.from_array([[0]]))


def test_ascii_round_trip():
    raster = generate_gradient(17, 9, max_value=255)
    descriptor = FormatDescriptor(Encoding.ASCII, 17, 9, 255)
    decoded_descriptor, decoded = decode_bytes(encode_to_bytes(descriptor, raster))
    assert decoded_descriptor == descriptor
    assert decoded == raster


def test_cross_encoding_round_trip():
    """ASCII -> BINARY -> ASCII keeps every sample."""
    ascii_descriptor = FormatDescriptor(Encoding.ASCII, 16, 16, 255)
    _, raster = decode_bytes(encode_to_bytes(ascii_descriptor, generate_ramp(16, 16)))

    binary_descriptor = ascii_descriptor.with_encoding(Encoding.BINARY)
    _, from_binary = decode_bytes(encode_to_bytes(binary_descriptor, raster), Encoding.BINARY)

    _, final = decode_bytes(encode_to_bytes(ascii_descriptor, from_binary), Encoding.ASCII)
    assert np.array_equal(final.array, generate_ramp(16, 16).array)


def test_binary_output_readable_by_opencv(tmp_path):
    """Written P5 files load in OpenCV with identical samples."""
    cv2 = pytest.importorskip("cv2")
    raster = generate_ramp(16, 8)
    path = tmp_path / "ramp.pgm"
    write_pgm(str(path), FormatDescriptor(Encoding.BINARY, 16, 8, 255), raster)

    loaded = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    assert loaded.shape == (8, 16)
    assert np.array_equal(loaded, raster.array)

    descriptor, reread = read_pgm(str(path))
    assert descriptor.encoding is Encoding.BINARY
    assert reread == raster
