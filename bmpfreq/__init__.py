"""Frequency-domain and spatial filtering of 8-bit grayscale BMP images."""

__version__ = "0.1.0"

__all__ = ["bmp", "contraharmonic", "fft", "lowpass", "notch", "spectrum"]