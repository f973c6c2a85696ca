"""Show the spectrum of an 8-bit BMP and split it into image and noise parts.

The centred spectrum of an image is computed, a mask selects the
frequencies that carry interference, and those frequencies are moved into
a separate spectrum. Both spectra are transformed back. The magnitude and
phase of the cleaned spectrum are rendered as 8-bit images as well.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .bmp import BmpError, GrayBitmap, read_bmp, write_bmp
from .fft import Direction, fft2d
from .lowpass import center

__all__ = [
    "SpectrumResult",
    "circular_notch_mask",
    "vertical_band_mask",
    "magnitude_image",
    "phase_image",
    "separate",
    "main",
]

_PI = 3.14159

_DEFAULT_INPUTS = {
    "notch": "astronaut-interference.bmp",
    "band": "Fig0519(a).bmp",
}


@dataclass(frozen=True)
class SpectrumResult:
    """Everything produced by :func:`separate`."""

    filtered: np.ndarray
    noise: np.ndarray
    magnitude: np.ndarray
    phase: np.ndarray
    peak: float


def _check_shape(shape) -> tuple[int, int]:
    rows, cols = (int(s) for s in shape)
    if rows < 0 or cols < 0:
        raise ValueError(f"shape must not be negative, got {shape}")
    return rows, cols


def circular_notch_mask(shape, offset, radius) -> np.ndarray:
    """Mark the points within ``radius`` of centre + offset and centre - offset.

    ``shape`` is (rows, columns), ``offset`` a (row, column) pair measured
    from the centre (rows // 2, columns // 2). Distances equal to ``radius``
    are inside the notch.
    """
    rows, cols = _check_shape(shape)
    du, dv = offset
    u, v = np.indices((rows, cols))
    u0, v0 = rows // 2, cols // 2
    d1 = np.hypot(u - u0 - du, v - v0 - dv)
    d2 = np.hypot(u - u0 + du, v - v0 + dv)
    return (d1 <= radius) | (d2 <= radius)


def vertical_band_mask(shape, half_width, gap) -> np.ndarray:
    """Mark a vertical band through the centre, leaving a gap around it.

    A point is marked when its column lies strictly within ``half_width``
    of the centre column and its row lies more than ``gap`` rows from the
    centre row.
    """
    rows, cols = _check_shape(shape)
    u, v = np.indices((rows, cols))
    row_distance = np.abs(u - rows // 2)
    col_distance = np.abs(v - cols // 2)
    return (row_distance > gap) & (col_distance < half_width)


def _to_bytes(values) -> np.ndarray:
    v = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.trunc(v), 0, 255).astype(np.uint8)


def magnitude_image(spectrum) -> np.ndarray:
    """Render ``30 * log(1 + 10000 * |F| / max|F|)`` as 8-bit values."""
    magnitude = np.abs(np.asarray(spectrum, dtype=np.complex128))
    if magnitude.size == 0:
        return np.zeros(magnitude.shape, dtype=np.uint8)
    peak = magnitude.max()
    if peak == 0.0:
        return np.zeros(magnitude.shape, dtype=np.uint8)
    return _to_bytes(30.0 * np.log1p(10000.0 * magnitude / peak))


def phase_image(spectrum) -> np.ndarray:
    """Render the phase angle of each coefficient as 8-bit values, 127 for zero."""
    s = np.asarray(spectrum, dtype=np.complex128)
    return _to_bytes(127.0 * np.arctan2(s.imag, s.real) / _PI + 127.0)


def _restore(spectrum: np.ndarray) -> np.ndarray:
    values = np.real(fft2d(spectrum, Direction.INVERSE))
    return _to_bytes(center(values))


def separate(pixels, mask) -> SpectrumResult:
    """Move the masked frequencies of an image's centred spectrum out.

    ``pixels`` is a 2-D image whose sides are powers of two; ``mask`` a
    boolean array of the same shape, True where the frequency belongs to
    the noise. Returns the cleaned image, the noise image, renderings of
    the cleaned spectrum's magnitude and phase, and its largest magnitude.
    """
    a = np.asarray(pixels, dtype=np.float64)
    if a.ndim != 2:
        raise ValueError(f"expected a 2-D image, got {a.ndim} dimensions")
    m = np.asarray(mask, dtype=bool)
    if m.shape != a.shape:
        raise ValueError(f"mask shape {m.shape} does not match image shape {a.shape}")

    spectrum = fft2d(center(a), Direction.FORWARD)
    noise_spectrum = np.where(m, spectrum, 0.0)
    spectrum[m] = 0.0

    peak = float(np.abs(spectrum).max()) if spectrum.size else 0.0
    return SpectrumResult(
        filtered=_restore(spectrum),
        noise=_restore(noise_spectrum),
        magnitude=magnitude_image(spectrum),
        phase=phase_image(spectrum),
        peak=peak,
    )


def _describe(bitmap: GrayBitmap) -> None:
    fh, ih = bitmap.file_header, bitmap.info_header

    def u16(buf: bytes, off: int) -> int:
        return int.from_bytes(buf[off : off + 2], "little")

    def u32(buf: bytes, off: int) -> int:
        return int.from_bytes(buf[off : off + 4], "little")

    print("BMP file.")
    for label, value in (
        ("FileSize", u32(fh, 2)),
        ("DataOffset", u32(fh, 10)),
        ("HeaderSize", u32(ih, 0)),
        ("Width", u32(ih, 4)),
        ("Height", u32(ih, 8)),
        ("Planes", u16(ih, 12)),
        ("BitCount", u16(ih, 14)),
        ("Compression", u32(ih, 16)),
        ("ImageSize", u32(ih, 20)),
        ("XpixelsPerM", u32(ih, 24)),
        ("YpixelsPerM", u32(ih, 28)),
        ("ColorsUsed", u32(ih, 32)),
        ("ColorsImportant", u32(ih, 36)),
    ):
        print(f"{label} = {value} ")


def main(argv=None) -> int:
    """Split an 8-bit BMP into cleaned, noise, spectrum and phase images."""
    parser = argparse.ArgumentParser(
        prog="bmpfreq-spectrum",
        description="Remove periodic noise from an 8-bit BMP and show its spectrum.",
    )
    parser.add_argument(
        "--mode",
        choices=sorted(_DEFAULT_INPUTS),
        default="notch",
        help="notch: two circular notches at +-(50, 50), radius 30; "
        "band: a vertical band 10 wide with a gap of 10",
    )
    parser.add_argument("input", nargs="?", help="input 8-bit BMP")
    parser.add_argument("--output-dir", default=".", help="directory for the output files")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    infile = args.input or _DEFAULT_INPUTS[args.mode]

    try:
        bitmap = read_bmp(infile)
    except (OSError, BmpError) as exc:
        print(f"{infile}: {exc}", file=sys.stderr)
        return 1
    _describe(bitmap)

    pixels = bitmap.pixels()
    if args.mode == "notch":
        mask = circular_notch_mask(pixels.shape, (50, 50), 30)
    else:
        mask = vertical_band_mask(pixels.shape, 10, 10)

    try:
        result = separate(pixels, mask)
    except ValueError as exc:
        print(f"Stop! {exc}", file=sys.stderr)
        return 1
    print(f"max={result.peak:f}")

    out_dir = Path(args.output_dir)
    try:
        for name, image in (
            ("new4.bmp", result.filtered),
            ("noise.bmp", result.noise),
            ("spectrum.bmp", result.magnitude),
            ("phase.bmp", result.phase),
        ):
            write_bmp(out_dir / name, bitmap.with_pixels(image))
    except OSError as exc:
        print(f"Output file can't open: {exc}", file=sys.stderr)
        return 1
    return 0