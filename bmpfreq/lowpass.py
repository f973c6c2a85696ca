"""Ideal low-pass filtering of 8-bit BMP images in the frequency domain."""

from __future__ import annotations

import argparse
import sys

import numpy as np

from .bmp import BmpError, read_bmp, write_bmp
from .fft import Direction, fft2d

__all__ = ["center", "uncenter", "ideal_lowpass", "main"]


def _signs(shape: tuple[int, ...]) -> np.ndarray:
    rows, cols = np.indices(shape)
    return np.where((rows + cols) % 2, -1.0, 1.0)


def center(pixels) -> np.ndarray:
    """Multiply each pixel by (-1)**(row + col).

    This moves the zero frequency of the transform to the middle of the grid.
    """
    a = np.asarray(pixels, dtype=np.float64)
    if a.ndim != 2:
        raise ValueError(f"expected a 2-D image, got {a.ndim} dimensions")
    return a * _signs(a.shape)


def uncenter(values) -> np.ndarray:
    """Undo :func:`center` on the real part and quantise to 0..255."""
    v = np.real(np.asarray(values))
    if v.ndim != 2:
        raise ValueError(f"expected a 2-D grid, got {v.ndim} dimensions")
    v = v * _signs(v.shape)
    v = np.nan_to_num(v, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.floor(v + 0.5), 0, 255).astype(np.uint8)


def _pad_rows(pixels) -> np.ndarray:
    a = np.asarray(pixels, dtype=np.float64)
    if a.ndim != 2:
        raise ValueError(f"expected a 2-D image, got {a.ndim} dimensions")
    height, width = a.shape
    padded = np.zeros((height, (width + 3) // 4 * 4))
    padded[:, :width] = a
    return padded


def ideal_lowpass(pixels, d0) -> np.ndarray:
    """Keep only frequencies within distance ``d0`` of the spectrum centre.

    The image rows are padded with zeros to a multiple of four; the padded
    grid's sides must be powers of two. Returns a uint8 array shaped like
    ``pixels``.
    """
    padded = _pad_rows(pixels)
    height, width = np.shape(pixels)
    spectrum = fft2d(center(padded), Direction.FORWARD)

    rows, cols = padded.shape
    u, v = np.indices((rows, cols))
    distance = np.hypot(u - rows // 2, v - cols // 2)
    spectrum[distance > d0] = 0.0

    restored = fft2d(spectrum, Direction.INVERSE)
    return uncenter(restored)[:, :width]


def main(argv=None) -> int:
    """Filter an 8-bit BMP with an ideal low-pass filter."""
    parser = argparse.ArgumentParser(
        prog="bmpfreq-lowpass",
        description="Apply an ideal low-pass filter to an 8-bit BMP image.",
    )
    parser.add_argument("input", help="input 8-bit BMP")
    parser.add_argument("output", help="output BMP")
    parser.add_argument("d0", type=int, help="cut-off distance from the spectrum centre")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    try:
        bitmap = read_bmp(args.input)
    except (OSError, BmpError) as exc:
        print(f"{args.input}: {exc}", file=sys.stderr)
        return 1

    try:
        filtered = ideal_lowpass(bitmap.pixels(), args.d0)
    except ValueError as exc:
        print(f"FFT2D failed: {exc}", file=sys.stderr)
        return 1

    try:
        write_bmp(args.output, bitmap.with_pixels(filtered))
    except OSError as exc:
        print(f"{args.output}: {exc}", file=sys.stderr)
        return 1
    return 0