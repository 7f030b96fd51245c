"""PGM encodings and format descriptor."""

from dataclasses import dataclass, replace
from enum import Enum


class Encoding(Enum):
    """Body serialization of a PGM file."""

    UNKNOWN = None
    ASCII = "P2"
    BINARY = "P5"

    @classmethod
    def from_magic(cls, magic: str) -> "Encoding":
        for encoding in (cls.ASCII, cls.BINARY):
            if encoding.value == magic:
                return encoding
        return cls.UNKNOWN

    @property
    def magic(self) -> str:
        return self.value


@dataclass(frozen=True)
class FormatDescriptor:
    """Encoding, geometry and sample range of one PGM image."""

    encoding: Encoding
    width: int
    height: int
    max_value: int

    def with_dimensions(self, width: int, height: int) -> "FormatDescriptor":
        return replace(self, width=width, height=height)

    def with_encoding(self, encoding: Encoding) -> "FormatDescriptor":
        return replace(self, encoding=encoding)

    @property
    def sample_count(self) -> int:
        return self.width * self.height
