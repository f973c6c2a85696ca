import numpy as np
import pytest

from bmpfreq.fft import Direction, fft, fft2d, power_of_two


@pytest.mark.parametrize("n, m", [(1, 0), (2, 1), (8, 3), (512, 9)])
def test_power_of_two_exponent(n, m):
    assert power_of_two(n) == m
    assert 2**m == n


@pytest.mark.parametrize("n", [0, -4, 3, 6, 100])
def test_power_of_two_rejects(n):
    with pytest.raises(ValueError):
        power_of_two(n)


def test_forward_matches_reference_scaled():
    rng = np.random.default_rng(1)
    x = rng.normal(size=16) + 1j * rng.normal(size=16)
    result = fft(x, Direction.FORWARD)
    np.testing.assert_allclose(result, np.fft.fft(x) / 16, atol=1e-12)


def test_inverse_matches_reference_unscaled():
    rng = np.random.default_rng(2)
    x = rng.normal(size=8) + 1j * rng.normal(size=8)
    result = fft(x, Direction.INVERSE)
    np.testing.assert_allclose(result, np.fft.ifft(x) * 8, atol=1e-12)


def test_round_trip_1d():
    rng = np.random.default_rng(3)
    x = rng.normal(size=32) + 1j * rng.normal(size=32)
    back = fft(fft(x, Direction.FORWARD), Direction.INVERSE)
    np.testing.assert_allclose(back, x, atol=1e-12)


def test_constant_gives_dc_only():
    result = fft([5.0] * 8, 1)
    assert result[0] == pytest.approx(5.0)
    np.testing.assert_allclose(result[1:], 0, atol=1e-12)


def test_does_not_modify_input():
    x = np.arange(4, dtype=np.complex128)
    fft(x, Direction.FORWARD)
    np.testing.assert_array_equal(x, np.arange(4))


def test_single_point_is_identity():
    np.testing.assert_allclose(fft([3 + 2j], Direction.FORWARD), [3 + 2j])


def test_fft_rejects_bad_length():
    with pytest.raises(ValueError):
        fft([1, 2, 3], Direction.FORWARD)


def test_fft_rejects_bad_direction():
    with pytest.raises(ValueError):
        fft([1, 2], 0)


def test_fft2d_matches_reference():
    rng = np.random.default_rng(4)
    grid = rng.normal(size=(8, 16))
    result = fft2d(grid, Direction.FORWARD)
    np.testing.assert_allclose(result, np.fft.fft2(grid) / (8 * 16), atol=1e-12)


def test_fft2d_round_trip():
    rng = np.random.default_rng(5)
    grid = rng.normal(size=(16, 4)) + 1j * rng.normal(size=(16, 4))
    back = fft2d(fft2d(grid, Direction.FORWARD), Direction.INVERSE)
    np.testing.assert_allclose(back, grid, atol=1e-12)


def test_fft2d_rejects_non_power_of_two_side():
    with pytest.raises(ValueError):
        fft2d(np.zeros((8, 12)), Direction.FORWARD)


def test_fft2d_rejects_wrong_dimensions():
    with pytest.raises(ValueError):
        fft2d(np.zeros(8), Direction.FORWARD)