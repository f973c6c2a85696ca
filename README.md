# bmpfreq

Filtering of 8-bit grayscale (palette) BMP images, in the frequency domain
and in the spatial domain.

Every command reads an 8-bit BMP, keeps its file header, info header and
1024-byte colour table, processes the pixels and writes a new BMP with the
same headers. Row padding to a multiple of four bytes is filled with zeros
on output.

Frequency-domain work uses a radix-2 FFT. For `bmpfreq-lowpass` and
`bmpfreq-notch` the image height and the row width rounded up to a multiple
of four must both be powers of two; for `bmpfreq-spectrum` the image height
and width themselves must be. The contraharmonic filter has no such limit.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Commands

Each command prints a message to standard error and exits with status 1 when
the input cannot be read, is not a BMP, is not 8-bit, when the image size is
not usable by the FFT, or when an output file cannot be written.

### Ideal low-pass filter

```
bmpfreq-lowpass input.bmp output.bmp D0
```

Multiplies the pixels by (-1)^(row+col) to centre the spectrum, zeroes every
frequency further than `D0` (an integer) from the centre, transforms back and
rounds the result to 0..255.

### Butterworth notch-reject filter

```
bmpfreq-notch input.bmp output.bmp D0 n uk vk [uk2 vk2 ...]
```

`D0` is the cut-off radius and `n` the filter order. Each `uk vk` pair is a
notch centre given as a (row, column) offset from the centre of the
spectrum; the symmetric notch at `-uk -vk` is applied as well. Several pairs
may be given to remove several interference frequencies, such as moiré
patterns. An odd number of offsets is an error.

### Contraharmonic mean filter

```
bmpfreq-contraharmonic input.bmp output.bmp Q
```

Applies a 3×3 contraharmonic mean of order `Q`,
sum(g^(Q+1)) / sum(g^Q), repeating the nearest edge pixel at the borders.
A zero denominator gives 0. Positive `Q` removes pepper noise, negative `Q`
removes salt noise.

### Spectrum display and periodic-noise removal

```
bmpfreq-spectrum [--mode {band,notch}] [--output-dir DIR] [input.bmp]
```

Prints the BMP header fields, computes the centred spectrum, moves the
frequencies selected by the mode into a separate noise spectrum and prints
the largest remaining magnitude as `max=...`.

- `--mode notch` (the default): two circular notches of radius 30 at
  offsets (50, 50) and (-50, -50) from the centre. Without an input file,
  `astronaut-interference.bmp` is read.
- `--mode band`: a vertical band of columns less than 10 from the centre
  column, on rows more than 10 from the centre row. Without an input file,
  `Fig0519(a).bmp` is read.

Four files are written into `--output-dir` (default: the current
directory):

- `new4.bmp` – the image with the selected frequencies removed
- `noise.bmp` – the image made from the removed frequencies alone
- `spectrum.bmp` – `30·log(1 + 10000·|F|/max|F|)` of the cleaned spectrum
- `phase.bmp` – the phase of the cleaned spectrum, 127 for zero

The masks are fixed; other notch positions or band sizes are available
through the library functions below, not through command options.

## Library use

```python
from bmpfreq.bmp import read_bmp, write_bmp
from bmpfreq.lowpass import ideal_lowpass
from bmpfreq.notch import Notch, butterworth_notch
from bmpfreq.contraharmonic import contraharmonic_mean

image = read_bmp("input.bmp")
smoothed = ideal_lowpass(image.pixels(), 30)
write_bmp("smoothed.bmp", image.with_pixels(smoothed))

unmoired = butterworth_notch(image.pixels(), 10.0, 2, [Notch(30, 40)])
write_bmp("unmoired.bmp", image.with_pixels(unmoired))

cleaned = contraharmonic_mean(image.pixels(), 1.5)
write_bmp("cleaned.bmp", image.with_pixels(cleaned))
```

- `bmpfreq.bmp`: `read_bmp` returns a `GrayBitmap` with `width`, `height`,
  `padded_width()`, `pixels()` (a `(height, width)` uint8 array) and
  `with_pixels()` (same headers, new pixels in 0..255). Files that are not
  BMP, not 8-bit or truncated raise `BmpError`.
- `bmpfreq.fft`: `fft` and `fft2d` take a `Direction` (`FORWARD` is scaled
  by 1/N, `INVERSE` is not); `power_of_two` returns the exponent of a size
  or raises `ValueError`.
- `bmpfreq.lowpass`: `center`, `uncenter` and `ideal_lowpass`.
- `bmpfreq.notch`: `Notch`, `butterworth_notch_gain` and `butterworth_notch`.
- `bmpfreq.spectrum`: `circular_notch_mask`, `vertical_band_mask`,
  `magnitude_image`, `phase_image`, and `separate`, which returns a
  `SpectrumResult` with `filtered`, `noise`, `magnitude`, `phase` and `peak`.

## Limits

Only uncompressed 8-bit palette BMPs are handled; colour images, other bit
depths and other image formats are not read. The headers of the input are
written out unchanged, and there is no image viewer: results are files.