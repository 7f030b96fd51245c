"""Hex dump of a byte stream, 8 bytes per line."""

from typing import BinaryIO, TextIO

CHUNK_SIZE = 8


def _format_line(offset: int, chunk: bytes) -> str:
    cells = []
    for byte in chunk:
        char = chr(byte) if 32 <= byte <= 126 else '.'
        cells.append(f"  {byte:02X} {char}")
    return f"{offset:07x}" + "".join(cells)


def hexdump(data: bytes) -> str:
    """
    Render bytes as offset-prefixed lines of hex and printable characters.

    Each line holds up to 8 bytes; a final line carries the total length.
    """
    lines = []
    for offset in range(0, len(data), CHUNK_SIZE):
        lines.append(_format_line(offset, data[offset:offset + CHUNK_SIZE]))
    lines.append(f"{len(data):07x}")
    return "\n".join(lines) + "\n"


def write_hexdump(input_stream: BinaryIO, output_stream: TextIO) -> int:
    """Stream a hex dump; returns the number of bytes read."""
    total = 0
    while True:
        chunk = input_stream.read(CHUNK_SIZE)
        if not chunk:
            break
        output_stream.write(_format_line(total, chunk) + "\n")
        total += len(chunk)
        if len(chunk) < CHUNK_SIZE:
            break
    output_stream.write(f"{total:07x}\n")
    return total
