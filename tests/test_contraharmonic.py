import struct

import numpy as np
import pytest

from bmpfreq.bmp import GrayBitmap, read_bmp, write_bmp
from bmpfreq.contraharmonic import contraharmonic_mean, main


def make_bitmap(pixels):
    pixels = np.asarray(pixels, dtype=np.uint8)
    height, width = pixels.shape
    padw = (width + 3) // 4 * 4
    offset = 14 + 40 + 1024
    file_header = struct.pack("<2sIHHI", b"BM", offset + padw * height, 0, 0, offset)
    info_header = struct.pack("<IIIHHIIIIII", 40, width, height, 1, 8, 0, padw * height, 0, 0, 256, 0)
    table = b"".join(bytes((i, i, i, 0)) for i in range(256))
    blank = GrayBitmap(file_header, info_header, table, bytes(padw * height))
    return blank.with_pixels(pixels)


@pytest.mark.parametrize("q", [1.5, 0.0, -1.5])
def test_constant_image_unchanged(q):
    pixels = np.full((5, 6), 90, dtype=np.uint8)
    assert np.array_equal(contraharmonic_mean(pixels, q), pixels)


def test_order_zero_is_arithmetic_mean():
    pixels = np.zeros((5, 5), dtype=np.uint8)
    pixels[2, 2] = 90
    out = contraharmonic_mean(pixels, 0.0)
    assert out[1, 1] == 10
    assert out[2, 2] == 10
    assert out[0, 0] == 0


def test_positive_order_removes_pepper():
    pixels = np.full((5, 5), 200, dtype=np.uint8)
    pixels[2, 2] = 0
    out = contraharmonic_mean(pixels, 1.5)
    assert np.array_equal(out, np.full((5, 5), 200, dtype=np.uint8))


def test_negative_order_suppresses_salt():
    pixels = np.full((5, 5), 100, dtype=np.uint8)
    pixels[2, 2] = 255
    out = contraharmonic_mean(pixels, -1.5)
    centre = int(out[2, 2])
    assert int(out[0, 0]) == 100
    assert centre < 255
    assert abs(centre - 100) <= 10
    assert int(contraharmonic_mean(pixels, 1.5)[2, 2]) > centre


def test_all_zero_image_with_zero_denominator():
    pixels = np.zeros((4, 4), dtype=np.uint8)
    assert np.array_equal(contraharmonic_mean(pixels, 1.0), pixels)


def test_single_pixel_uses_replicated_edges():
    assert contraharmonic_mean(np.array([[37]]), 2.0).tolist() == [[37]]


def test_shape_and_range_preserved():
    rng = np.random.default_rng(6)
    pixels = rng.integers(0, 256, size=(7, 9), dtype=np.uint8)
    out = contraharmonic_mean(pixels, 1.0)
    assert out.shape == pixels.shape
    assert out.dtype == np.uint8


def test_rejects_non_2d():
    with pytest.raises(ValueError):
        contraharmonic_mean(np.zeros(5), 1.0)


def test_main_writes_filtered_image_with_zero_padding(tmp_path):
    pixels = np.full((3, 3), 200, dtype=np.uint8)
    pixels[1, 1] = 0
    src = tmp_path / "in.bmp"
    dst = tmp_path / "out.bmp"
    bitmap = make_bitmap(pixels)
    write_bmp(src, bitmap)
    assert main([str(src), str(dst), "1.5"]) == 0
    result = read_bmp(dst)
    assert result.color_table == bitmap.color_table
    assert np.array_equal(result.pixels(), np.full((3, 3), 200, dtype=np.uint8))
    rows = np.frombuffer(result.data, dtype=np.uint8).reshape(3, 4)
    assert rows[:, 3].tolist() == [0, 0, 0]


def test_main_rejects_non_bmp(tmp_path):
    src = tmp_path / "in.bmp"
    src.write_bytes(b"XX" + bytes(2000))
    assert main([str(src), str(tmp_path / "out.bmp"), "1"]) == 1


def test_main_wrong_argument_count():
    with pytest.raises(SystemExit):
        main(["a.bmp", "b.bmp"])