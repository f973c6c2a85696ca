"""Reading and writing 8-bit palettised BMP images."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

import numpy as np

__all__ = ["BmpError", "GrayBitmap", "read_bmp", "write_bmp"]

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
COLOR_TABLE_SIZE = 1024
_MAGIC = 0x4D42

Path = Union[str, "PathLike[str]"]


class BmpError(ValueError):
    """Raised when a file is not a usable 8-bit BMP."""


def _u16(buf: bytes, offset: int) -> int:
    return struct.unpack_from("<H", buf, offset)[0]


def _u32(buf: bytes, offset: int) -> int:
    return struct.unpack_from("<I", buf, offset)[0]


@dataclass(frozen=True)
class GrayBitmap:
    """An 8-bit BMP: its headers, colour table and padded pixel rows."""

    file_header: bytes
    info_header: bytes
    color_table: bytes
    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        for name, size in (
            ("file_header", FILE_HEADER_SIZE),
            ("info_header", INFO_HEADER_SIZE),
            ("color_table", COLOR_TABLE_SIZE),
        ):
            if len(getattr(self, name)) != size:
                raise BmpError(f"{name} must be {size} bytes")
        expected = self.padded_width() * self.height
        if len(self.data) != expected:
            raise BmpError(f"pixel data must be {expected} bytes, got {len(self.data)}")

    @property
    def width(self) -> int:
        return _u32(self.info_header, 4)

    @property
    def height(self) -> int:
        return _u32(self.info_header, 8)

    def padded_width(self) -> int:
        """Row length in bytes, rounded up to a multiple of four."""
        return (self.width + 3) // 4 * 4

    def pixels(self) -> np.ndarray:
        """Pixel values as a (height, width) uint8 array, padding removed."""
        rows = np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.padded_width())
        return rows[:, : self.width].copy()

    def with_pixels(self, pixels) -> "GrayBitmap":
        """Return a bitmap with the same headers and new pixel values.

        ``pixels`` must have shape (height, width) and values in 0..255;
        row padding is filled with zeros.
        """
        a = np.asarray(pixels)
        if a.shape != (self.height, self.width):
            raise ValueError(f"expected shape {(self.height, self.width)}, got {a.shape}")
        if a.size and (a.min() < 0 or a.max() > 255):
            raise ValueError("pixel values must lie in 0..255")
        rows = np.zeros((self.height, self.padded_width()), dtype=np.uint8)
        rows[:, : self.width] = a
        return GrayBitmap(self.file_header, self.info_header, self.color_table, rows.tobytes())


def read_bmp(path: Path) -> GrayBitmap:
    """Read an 8-bit BMP file."""
    with open(path, "rb") as f:
        file_header = f.read(FILE_HEADER_SIZE)
        info_header = f.read(INFO_HEADER_SIZE)
        if len(file_header) < FILE_HEADER_SIZE or len(info_header) < INFO_HEADER_SIZE:
            raise BmpError("file too short for BMP headers")
        if _u16(file_header, 0) != _MAGIC:
            raise BmpError("Not BMP")
        if _u16(info_header, 14) != 8:
            raise BmpError("Only 8-bit BMP")
        color_table = f.read(COLOR_TABLE_SIZE)
        if len(color_table) < COLOR_TABLE_SIZE:
            raise BmpError("file too short for colour table")
        width = _u32(info_header, 4)
        height = _u32(info_header, 8)
        size = (width + 3) // 4 * 4 * height
        f.seek(_u32(file_header, 10))
        data = f.read(size)
        if len(data) < size:
            raise BmpError(f"pixel data truncated: expected {size} bytes, got {len(data)}")
    return GrayBitmap(file_header, info_header, color_table, data)


def write_bmp(path: Path, bitmap: GrayBitmap) -> None:
    """Write headers, colour table and pixel data one after another."""
    with open(path, "wb") as f:
        f.write(bitmap.file_header)
        f.write(bitmap.info_header)
        f.write(bitmap.color_table)
        f.write(bitmap.data)