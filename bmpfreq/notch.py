"""Butterworth notch-reject filtering of 8-bit BMP images."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .bmp import BmpError, read_bmp, write_bmp
from .fft import Direction, fft2d
from .lowpass import center, uncenter

__all__ = ["Notch", "butterworth_notch_gain", "butterworth_notch", "main"]


@dataclass(frozen=True)
class Notch:
    """A notch pair at (+u, +v) and (-u, -v) from the spectrum centre."""

    u: float
    v: float


def butterworth_notch_gain(shape, d0, order, notches: Iterable[Notch]) -> np.ndarray:
    """Return the filter gain on a grid of ``shape`` (rows, columns).

    Each notch contributes two Butterworth high-pass factors of order
    ``order`` and cut-off ``d0``, centred symmetrically about the middle.
    """
    rows, cols = shape
    u, v = np.indices((rows, cols), dtype=np.float64)
    u0, v0 = rows // 2, cols // 2
    exponent = 2 * order
    gain = np.ones((rows, cols))
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for notch in notches:
            d1 = np.hypot(u - (u0 + notch.u), v - (v0 + notch.v))
            d2 = np.hypot(u - (u0 - notch.u), v - (v0 - notch.v))
            gain *= (1.0 / (1.0 + np.power(d0 / d1, exponent))) * (
                1.0 / (1.0 + np.power(d0 / d2, exponent))
            )
    return gain


def butterworth_notch(pixels, d0, order, notches: Iterable[Notch]) -> np.ndarray:
    """Filter an image with a Butterworth notch-reject filter.

    Rows are padded with zeros to a multiple of four; the padded grid's sides
    must be powers of two. Returns a uint8 array shaped like ``pixels``.
    """
    a = np.asarray(pixels, dtype=np.float64)
    if a.ndim != 2:
        raise ValueError(f"expected a 2-D image, got {a.ndim} dimensions")
    height, width = a.shape
    padded = np.zeros((height, (width + 3) // 4 * 4))
    padded[:, :width] = a

    spectrum = fft2d(center(padded), Direction.FORWARD)
    spectrum *= butterworth_notch_gain(padded.shape, d0, order, list(notches))
    restored = fft2d(spectrum, Direction.INVERSE)
    return uncenter(restored)[:, :width]


def main(argv=None) -> int:
    """Remove periodic interference from an 8-bit BMP with notch filters."""
    parser = argparse.ArgumentParser(
        prog="bmpfreq-notch",
        description="Apply a Butterworth notch-reject filter to an 8-bit BMP image.",
    )
    parser.add_argument("input", help="input 8-bit BMP")
    parser.add_argument("output", help="output BMP")
    parser.add_argument("d0", type=float, help="cut-off frequency")
    parser.add_argument("order", type=int, help="Butterworth order")
    parser.add_argument(
        "offsets",
        type=float,
        nargs="+",
        metavar="UK VK",
        help="notch offsets from the spectrum centre, in pairs",
    )
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if len(args.offsets) % 2:
        parser.error("notch offsets must come in pairs")
    notches = [Notch(u, v) for u, v in zip(args.offsets[0::2], args.offsets[1::2])]

    try:
        bitmap = read_bmp(args.input)
    except (OSError, BmpError) as exc:
        print(f"{args.input}: {exc}", file=sys.stderr)
        return 1

    try:
        filtered = butterworth_notch(bitmap.pixels(), args.d0, args.order, notches)
    except ValueError as exc:
        print(f"FFT2D failed: {exc}", file=sys.stderr)
        return 1

    try:
        write_bmp(args.output, bitmap.with_pixels(filtered))
    except OSError as exc:
        print(f"{args.output}: {exc}", file=sys.stderr)
        return 1
    return 0