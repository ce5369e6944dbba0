"""
Pole/zero driven IIR filter engine.

This module turns a pole/zero geometry into normalized transfer-function
coefficients and runs the resulting difference equation sample by sample on
a stereo signal. One ``DigitalFilter`` instance is owned per session and
shared by reference between the audio callback and the editing surface.
"""

import logging
import math
from typing import List, Optional, Tuple

import numpy as np
from scipy import signal

from filter_explorer.complex_number import Complex
from filter_explorer.interfaces import (
    ChannelHistory, CoefficientPair, FilterDescriptor, FrequencyResponse,
    NormalizationSpec, StereoHistory
)
from filter_explorer.filters.polynomial import descending_coefficients

logger = logging.getLogger('filter_explorer.filters.digital_filter')

DEFAULT_NORMALIZATION = NormalizationSpec(frequency=0.0, gain=1.0)

class DigitalFilter:
    """
    Stateful IIR filter defined by its zeros and poles.

    Coefficients, history and roots are plain mutable state. The engine does
    no locking: ``compute``/``recompute`` must not run while ``process`` is
    running on another thread.
    """

    def __init__(self, descriptor: Optional[FilterDescriptor] = None):
        """
        Initialize the engine.

        Args:
            descriptor: Initial design; the identity filter when omitted
        """
        self.zeros: List[Complex] = []
        self.poles: List[Complex] = []
        self.normalize: NormalizationSpec = DEFAULT_NORMALIZATION
        self._coefficients: Optional[CoefficientPair] = None
        self._history: Optional[StereoHistory] = None
        self._b_taps: Tuple[float, ...] = ()
        self._a_taps: Tuple[float, ...] = ()

        self.compute(descriptor if descriptor is not None else FilterDescriptor.identity())

    def compute(self, descriptor: FilterDescriptor) -> CoefficientPair:
        """
        Build normalized coefficients from a filter descriptor.

        The numerator is scaled so that the magnitude response equals
        ``normalize.gain`` at ``normalize.frequency``. Processing history is
        reset.

        Args:
            descriptor: Zeros, poles and optional normalization target

        Returns:
            The new coefficient pair
        """
        self.zeros = list(descriptor.zeros)
        self.poles = list(descriptor.poles)
        self.normalize = descriptor.normalize or DEFAULT_NORMALIZATION

        b = descending_coefficients(self.zeros)
        a = descending_coefficients(self.poles)
        self._coefficients = CoefficientPair(b=b, a=a)

        reference = self.evaluate(Complex.exp(Complex(0.0, self.normalize.frequency)))
        scale = Complex(self._scale_factor(reference.modulus()))
        self._coefficients = CoefficientPair(
            b=[Complex.multiply(coefficient, scale) for coefficient in b],
            a=a
        )

        if not self._coefficients.is_finite():
            logger.warning(f"Degenerate normalization at frequency {self.normalize.frequency:.4f}: "
                           f"coefficients are not finite")

        unstable = self.unstable_poles()
        if unstable:
            logger.warning(f"Filter has {len(unstable)} pole(s) on or outside the unit circle")

        self._b_taps = tuple(c.real for c in self._coefficients.b)
        self._a_taps = tuple(c.real for c in self._coefficients.a[1:])
        self._history = StereoHistory.zeros(len(self._b_taps), len(self._a_taps))

        logger.debug(f"Computed filter with {len(self.zeros)} zero(s), {len(self.poles)} pole(s), "
                     f"normalized to {self.normalize.gain} at {self.normalize.frequency:.4f}")

        return self._coefficients

    def recompute(self) -> CoefficientPair:
        """Recompute coefficients after the stored zeros or poles were edited in place"""
        return self.compute(FilterDescriptor(
            zeros=self.zeros,
            poles=self.poles,
            normalize=self.normalize
        ))

    def evaluate(self, z: Complex) -> Complex:
        """
        Evaluate the transfer function H(z).

        On the unit circle, ``z = exp(i omega)``, this is the frequency
        response at omega. ``z = 0`` yields non-finite values.
        """
        b = self._coefficients.b
        a = self._coefficients.a

        z_inverse = z.reciprocal()
        z_inverse_powers = [Complex(1.0)]
        for _ in range(1, max(len(a), len(b))):
            z_inverse_powers.append(Complex.multiply(z_inverse_powers[-1], z_inverse))

        numerator = Complex(0.0)
        for coefficient, power in zip(b, z_inverse_powers):
            numerator = Complex.add(numerator, Complex.multiply(coefficient, power))

        denominator = Complex(0.0)
        for coefficient, power in zip(a, z_inverse_powers):
            denominator = Complex.add(denominator, Complex.multiply(coefficient, power))

        return Complex.divide(numerator, denominator)

    def process(self, in_left: float, in_right: float) -> Tuple[float, float]:
        """
        Filter one stereo sample frame.

        Output depends on every previous call since the last ``compute``.
        """
        return (
            self._process_channel(in_left, self._history.left),
            self._process_channel(in_right, self._history.right)
        )

    def frequency_response(self, num_points: int = 196) -> FrequencyResponse:
        """
        Sample H(exp(i omega)) for omega from -pi to +pi.

        Args:
            num_points: Number of evenly spaced frequencies

        Returns:
            Frequencies and complex response for plotting
        """
        frequencies = np.linspace(-math.pi, math.pi, num_points)
        with np.errstate(divide='ignore', invalid='ignore'):
            _, response = signal.freqz(
                self._coefficients.numerator_array(),
                self._coefficients.denominator_array(),
                worN=frequencies
            )
        return FrequencyResponse(frequencies=frequencies, response=response)

    def unstable_poles(self, margin: float = 1.0) -> List[Complex]:
        """Poles whose modulus is at least ``margin``"""
        return [pole for pole in self.poles if not pole.modulus() < margin]

    def is_stable(self) -> bool:
        return not self.unstable_poles()

    def reset_state(self) -> None:
        """Clear processing history without touching coefficients"""
        self._history = StereoHistory.zeros(len(self._b_taps), len(self._a_taps))
        logger.debug("Filter state reset")

    @property
    def coefficients(self) -> CoefficientPair:
        return self._coefficients

    @property
    def history(self) -> StereoHistory:
        return self._history

    def _process_channel(self, sample: float, history: ChannelHistory) -> float:
        x = history.x
        y = history.y
        x.appendleft(sample)

        feedforward = 0.0
        for b, x_i in zip(self._b_taps, x):
            feedforward += b * x_i

        feedback = 0.0
        for a, y_i in zip(self._a_taps, y):
            feedback += a * y_i

        output = feedforward - feedback
        y.appendleft(output)
        return output

    def _scale_factor(self, reference_modulus: float) -> float:
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.normalize.gain) / np.float64(reference_modulus))
