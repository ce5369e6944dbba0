"""
Preset generator tests
"""

import math

import numpy as np
import pytest
from scipy import signal

from filter_explorer.complex_number import Complex
from filter_explorer.exceptions import UnsupportedFilterOrderError
from filter_explorer.filters.digital_filter import DigitalFilter
from filter_explorer.filters.design import presets
from tests.helpers import assert_complex_close, unit_circle

CUTOFFS = [0.05, 0.4, math.pi / 2, 2.5, 3.1]


def magnitude_at(engine: DigitalFilter, omega: float) -> float:
    return engine.evaluate(unit_circle(omega)).modulus()


class TestBilinearTransform:
    """Test the s-plane to z-plane mapping"""

    def test_origin_maps_to_one(self):
        assert_complex_close(presets.bilinear_transform(Complex(0.0), 0.5), 1.0)

    def test_prewarped_cutoff(self):
        """s = i maps to exp(i * cutoff)"""
        for cutoff in CUTOFFS:
            z = presets.bilinear_transform(Complex(0.0, 1.0), cutoff)
            assert_complex_close(z, unit_circle(cutoff))

    def test_left_half_plane_maps_inside_unit_circle(self):
        for s in [Complex(-0.1, 3.0), Complex(-2.0), Complex(-1e-3, -0.5)]:
            assert presets.bilinear_transform(s, 1.0).modulus() < 1.0

    def test_highpass_transform_negates(self):
        roots = presets.highpass_transform([Complex(0.5, 0.1), Complex(-1.0)])
        assert_complex_close(roots[0], Complex(-0.5, -0.1))
        assert_complex_close(roots[1], 1.0)


class TestDirectPresets:
    """Test presets placed directly in the z-plane"""

    def test_moving_average_zeros_are_roots_of_unity(self):
        descriptor = presets.moving_average(6)
        assert len(descriptor.zeros) == 5
        assert descriptor.poles == []
        for zero in descriptor.zeros:
            assert zero.modulus() == pytest.approx(1.0)
            assert not Complex.are_equal(zero, Complex(1.0))

    def test_moving_average_of_one_is_identity(self):
        descriptor = presets.moving_average(1)
        assert descriptor.zeros == []
        assert descriptor.poles == []

    def test_leaky_integrator(self):
        descriptor = presets.leaky_integrator(0.8)
        assert descriptor.zeros == []
        assert len(descriptor.poles) == 1
        assert_complex_close(descriptor.poles[0], 0.8)

    @pytest.mark.parametrize("alpha", [0.5, -0.9])
    def test_feedforward_comb(self, alpha):
        descriptor = presets.comb(alpha, 4, feedforward=True)
        assert len(descriptor.zeros) == 4
        assert len(descriptor.poles) == 4
        for zero in descriptor.zeros:
            z2 = Complex.multiply(zero, zero)
            assert_complex_close(Complex.multiply(z2, z2), alpha)
        for pole in descriptor.poles:
            assert_complex_close(pole, 0.0)

    def test_feedback_comb(self):
        descriptor = presets.comb(0.5, 3, feedforward=False)
        for pole in descriptor.poles:
            assert_complex_close(Complex.multiply(Complex.multiply(pole, pole), pole), -0.5)
            assert pole.modulus() < 1.0
        for zero in descriptor.zeros:
            assert_complex_close(zero, 0.0)

    def test_comb_normalization_frequency(self):
        assert presets.comb(0.5, 8).normalize.frequency == pytest.approx(math.pi / 8)
        assert presets.comb(-0.5, 8).normalize.frequency == 0.0

    def test_feedforward_comb_taps(self):
        """Only the first and the delayed tap are non-zero; z^k = alpha gives b[k] = -alpha b[0]"""
        engine = DigitalFilter(presets.comb(0.5, 4))
        b = engine.coefficients.numerator_array().real
        np.testing.assert_allclose(b[1:4], 0.0, atol=1e-12)
        assert b[4] / b[0] == pytest.approx(-0.5)


class TestButterworth:
    """Test Butterworth designs"""

    @pytest.mark.parametrize("n", [2, 4, 6])
    @pytest.mark.parametrize("cutoff", CUTOFFS)
    def test_poles_strictly_inside_unit_circle(self, n, cutoff):
        descriptor = presets.butterworth(cutoff, n)
        assert len(descriptor.poles) == n
        for pole in descriptor.poles:
            assert pole.modulus() < 1.0 - Complex.EPSILON

    def test_lowpass_zeros_at_nyquist(self):
        descriptor = presets.butterworth(0.8, 3)
        for zero in descriptor.zeros:
            assert_complex_close(zero, -1.0)

    def test_half_power_at_cutoff(self):
        engine = DigitalFilter(presets.butterworth(0.6, 5))
        assert magnitude_at(engine, 0.0) == pytest.approx(1.0)
        assert magnitude_at(engine, 0.6) == pytest.approx(1.0 / math.sqrt(2))

    @pytest.mark.parametrize("n", [1, 3, 6])
    @pytest.mark.parametrize("lowpass", [True, False])
    def test_matches_scipy_butter(self, n, lowpass):
        cutoff = 0.9
        engine = DigitalFilter(presets.butterworth(cutoff, n, lowpass))
        b, a = signal.butter(n, cutoff / math.pi, btype='low' if lowpass else 'high')

        frequencies = np.linspace(0.05, math.pi - 0.05, 25)
        _, expected = signal.freqz(b, a, worN=frequencies)
        actual = [magnitude_at(engine, omega) for omega in frequencies]
        np.testing.assert_allclose(actual, np.abs(expected), rtol=1e-6, atol=1e-9)

    def test_highpass_normalized_at_nyquist(self):
        descriptor = presets.butterworth(1.0, 4, lowpass=False)
        assert descriptor.normalize.frequency == pytest.approx(math.pi)
        for zero in descriptor.zeros:
            assert_complex_close(zero, 1.0)
        engine = DigitalFilter(descriptor)
        assert magnitude_at(engine, math.pi) == pytest.approx(1.0)
        assert magnitude_at(engine, 1.0) == pytest.approx(1.0 / math.sqrt(2))


class TestChebyshevTypeI:
    """Test Chebyshev type I designs"""

    @pytest.mark.parametrize("n", [2, 3, 5])
    def test_gain_at_cutoff(self, n):
        ripple = 0.5
        engine = DigitalFilter(presets.chebyshev_type_i(0.7, n, ripple))
        assert magnitude_at(engine, 0.7) == pytest.approx(1.0 / math.sqrt(1.0 + ripple ** 2))
        assert engine.is_stable()

    @pytest.mark.parametrize("n", [2, 3, 4])
    def test_matches_scipy_cheby1(self, n):
        ripple = 0.5
        cutoff = 1.1
        ripple_db = 10 * math.log10(1 + ripple ** 2)
        engine = DigitalFilter(presets.chebyshev_type_i(cutoff, n, ripple))
        b, a = signal.cheby1(n, ripple_db, cutoff / math.pi)

        frequencies = np.linspace(0.05, math.pi - 0.05, 25)
        _, expected = signal.freqz(b, a, worN=frequencies)
        actual = [magnitude_at(engine, omega) for omega in frequencies]
        np.testing.assert_allclose(actual, np.abs(expected), rtol=1e-6, atol=1e-9)

    def test_highpass(self):
        ripple = 0.3
        descriptor = presets.chebyshev_type_i(1.0, 4, ripple, lowpass=False)
        assert descriptor.normalize.frequency == pytest.approx(math.pi)
        assert descriptor.normalize.gain == pytest.approx(1.0 / math.sqrt(1.0 + ripple ** 2))
        engine = DigitalFilter(descriptor)
        assert magnitude_at(engine, 0.0) == pytest.approx(0.0, abs=1e-9)


class TestBessel:
    """Test Bessel designs"""

    @pytest.mark.parametrize("n", range(1, presets.MAX_BESSEL_ORDER + 1))
    def test_supported_orders(self, n):
        descriptor = presets.bessel(0.5, n)
        assert len(descriptor.poles) == n
        assert len(descriptor.zeros) == n
        engine = DigitalFilter(descriptor)
        assert engine.is_stable()
        assert magnitude_at(engine, 0.0) == pytest.approx(1.0)

    def test_real_coefficients(self):
        engine = DigitalFilter(presets.bessel(1.2, 5))
        np.testing.assert_allclose(engine.coefficients.denominator_array().imag, 0.0, atol=1e-12)

    @pytest.mark.parametrize("n", [0, 7, 12])
    def test_unsupported_orders(self, n):
        with pytest.raises(UnsupportedFilterOrderError):
            presets.bessel(0.5, n)

    def test_highpass_blocks_dc(self):
        engine = DigitalFilter(presets.bessel(0.5, 3, lowpass=False))
        assert magnitude_at(engine, 0.0) == pytest.approx(0.0, abs=1e-9)
        assert magnitude_at(engine, math.pi) == pytest.approx(1.0)
