"""3x3 contraharmonic mean filtering of 8-bit BMP images."""

from __future__ import annotations

import argparse
import sys

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .bmp import BmpError, read_bmp, write_bmp

__all__ = ["contraharmonic_mean", "main"]


def contraharmonic_mean(pixels, q) -> np.ndarray:
    """Apply a 3x3 contraharmonic mean filter of order ``q``.

    Each output pixel is sum(g**(q+1)) / sum(g**q) over its neighbourhood,
    with edge pixels repeated beyond the border. A zero denominator gives 0.
    Positive ``q`` removes pepper noise, negative ``q`` removes salt noise.
    """
    a = np.asarray(pixels, dtype=np.float64)
    if a.ndim != 2:
        raise ValueError(f"expected a 2-D image, got {a.ndim} dimensions")
    if a.size == 0:
        return np.zeros(a.shape, dtype=np.uint8)

    windows = sliding_window_view(np.pad(a, 1, mode="edge"), (3, 3))
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        num = np.power(windows, q + 1).sum(axis=(-2, -1))
        den = np.power(windows, q).sum(axis=(-2, -1))
        value = np.where(den == 0.0, 0.0, num / den)
    value = np.where(np.isfinite(value), value, 0.0)
    return np.clip(np.floor(value + 0.5), 0, 255).astype(np.uint8)


def main(argv=None) -> int:
    """Filter an 8-bit BMP with a contraharmonic mean filter."""
    parser = argparse.ArgumentParser(
        prog="bmpfreq-contraharmonic",
        description="Apply a 3x3 contraharmonic mean filter to an 8-bit BMP image.",
    )
    parser.add_argument("input", help="input 8-bit BMP")
    parser.add_argument("output", help="output BMP")
    parser.add_argument("q", type=float, help="filter order")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    try:
        bitmap = read_bmp(args.input)
    except (OSError, BmpError) as exc:
        print(f"{args.input}: {exc}", file=sys.stderr)
        return 1

    filtered = contraharmonic_mean(bitmap.pixels(), args.q)

    try:
        write_bmp(args.output, bitmap.with_pixels(filtered))
    except OSError as exc:
        print(f"{args.output}: {exc}", file=sys.stderr)
        return 1
    return 0