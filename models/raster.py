"""Capacity-checked grid of grayscale samples."""

import numpy as np

from utils.constants import MAX_CANVAS_WIDTH, MAX_CANVAS_HEIGHT
from utils.errors import OutOfBoundsError


def check_canvas(width: int, height: int) -> None:
    """Raise OutOfBoundsError unless width x height fits the canvas."""
    if width < 0 or height < 0:
        raise OutOfBoundsError(f"Negative raster size {width}x{height}")
    if width > MAX_CANVAS_WIDTH or height > MAX_CANVAS_HEIGHT:
        raise OutOfBoundsError(
            f"Raster {width}x{height} exceeds canvas "
            f"{MAX_CANVAS_WIDTH}x{MAX_CANVAS_HEIGHT}"
        )


class Raster:
    """
    Row-major sample grid of shape (height, width).

    Populated cell by cell while decoding, then frozen and read-only
    for the rest of a conversion.
    """

    def __init__(self, data: np.ndarray):
        if data.ndim != 2:
            raise ValueError(f"Raster data must be 2-D, got shape {data.shape}")
        check_canvas(data.shape[1], data.shape[0])
        self._data = data

    @classmethod
    def empty(cls, width: int, height: int) -> "Raster":
        check_canvas(width, height)
        return cls(np.zeros((height, width), dtype=np.int64))

    @classmethod
    def from_array(cls, array) -> "Raster":
        data = np.array(array, dtype=np.int64, copy=True)
        if data.ndim == 1 and data.size == 0:
            data = data.reshape(0, 0)
        return cls(data)

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the samples."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    @property
    def frozen(self) -> bool:
        return not self._data.flags.writeable

    def freeze(self) -> "Raster":
        self._data.flags.writeable = False
        return self

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def set(self, row: int, col: int, value: int) -> None:
        if self.frozen:
            raise ValueError("Raster is frozen")
        if not self.contains(row, col):
            raise OutOfBoundsError(f"Cell ({row}, {col}) outside {self.width}x{self.height}")
        self._data[row, col] = value

    def at(self, row: int, col: int) -> int:
        """Checked read of one sample."""
        if not self.contains(row, col):
            raise OutOfBoundsError(f"Cell ({row}, {col}) outside {self.width}x{self.height}")
        return int(self._data[row, col])

    def sample(self, row: int, col: int) -> int:
        """Canvas read: cells beyond the image edge read as 0."""
        if not self.contains(row, col):
            return 0
        return int(self._data[row, col])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height})"
