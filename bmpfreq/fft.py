"""Radix-2 complex FFT in one and two dimensions.

The forward transform uses the kernel ``exp(-2j*pi*k*n/N)`` and divides the
result by ``N``; the inverse transform uses ``exp(+2j*pi*k*n/N)`` and is not
scaled. An inverse after a forward transform therefore gives back the input.
"""

from __future__ import annotations

from enum import IntEnum

import numpy as np

__all__ = ["Direction", "power_of_two", "fft", "fft2d"]


class Direction(IntEnum):
    """Direction of a transform."""

    FORWARD = 1
    INVERSE = -1


def power_of_two(n: int) -> int:
    """Return ``m`` with ``2**m == n``.

    Raises ValueError when ``n`` is not a positive power of two.
    """
    if n <= 0:
        raise ValueError(f"size must be positive, got {n}")
    m = n.bit_length() - 1
    if 1 << m != n:
        raise ValueError(f"size {n} is not a power of two")
    return m


def _bit_reversed_indices(n: int, m: int) -> np.ndarray:
    if m == 0:
        return np.zeros(1, dtype=np.intp)
    return np.array([int(format(i, f"0{m}b")[::-1], 2) for i in range(n)], dtype=np.intp)


def _transform_last_axis(a: np.ndarray, direction: Direction) -> np.ndarray:
    """Transform every vector along the last axis of ``a``."""
    n = a.shape[-1]
    m = power_of_two(n)
    batch = a.shape[:-1]
    out = a[..., _bit_reversed_indices(n, m)].astype(np.complex128)
    sign = -1.0 if direction is Direction.FORWARD else 1.0

    size = 2
    while size <= n:
        half = size // 2
        twiddle = np.exp(sign * 2j * np.pi * np.arange(half) / size)
        blocks = out.reshape(batch + (n // size, size))
        top = blocks[..., :half]
        bottom = blocks[..., half:] * twiddle
        out = np.concatenate((top + bottom, top - bottom), axis=-1).reshape(batch + (n,))
        size *= 2

    if direction is Direction.FORWARD:
        out /= n
    return out


def fft(values, direction) -> np.ndarray:
    """Return the transform of a 1-D sequence whose length is a power of two."""
    direction = Direction(direction)
    a = np.asarray(values, dtype=np.complex128)
    if a.ndim != 1:
        raise ValueError(f"expected a 1-D sequence, got {a.ndim} dimensions")
    return _transform_last_axis(a, direction)


def fft2d(grid, direction) -> np.ndarray:
    """Return the 2-D transform of a grid whose sides are powers of two."""
    direction = Direction(direction)
    a = np.asarray(grid, dtype=np.complex128)
    if a.ndim != 2:
        raise ValueError(f"expected a 2-D grid, got {a.ndim} dimensions")
    rows, cols = a.shape
    power_of_two(rows)
    power_of_two(cols)
    a = _transform_last_axis(a.T, direction).T
    return _transform_last_axis(np.ascontiguousarray(a), direction)