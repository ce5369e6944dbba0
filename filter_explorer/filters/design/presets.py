"""
Preset filter generators.

The moving average, leaky integrator and comb filters are placed directly in
the z-plane. The Butterworth, Chebyshev type I and Bessel filters are designed
as analog prototypes with cutoff Omega_c = 1 rad/s and mapped to the digital
domain with a frequency-prewarped bilinear transform, which puts the analog
cutoff exactly on the requested digital cutoff.

Every generator is a pure function returning a fresh ``FilterDescriptor``.
"""

import logging
import math
from typing import List, Sequence

from filter_explorer.complex_number import Complex
from filter_explorer.exceptions import UnsupportedFilterOrderError
from filter_explorer.interfaces import FilterDescriptor, NormalizationSpec

logger = logging.getLogger('filter_explorer.filters.design.presets')

# Roots of the reverse Bessel polynomials theta_n(s) for n = 1..6, computed
# offline with a polynomial root finder.
REVERSE_BESSEL_ROOTS: List[List[Complex]] = [
    [
        Complex(-1.00000000000000),
    ],
    [
        Complex(-1.50000000000000, 0.866025403784439),
        Complex(-1.50000000000000, -0.866025403784439),
    ],
    [
        Complex(-2.32218535462609),
        Complex(-1.83890732268696, 1.754380959783720),
        Complex(-1.83890732268696, -1.754380959783720),
    ],
    [
        Complex(-2.10378939717963, 2.657418041856750),
        Complex(-2.10378939717963, -2.657418041856750),
        Complex(-2.89621060282037, 0.867234128934507),
        Complex(-2.89621060282037, -0.867234128934507),
    ],
    [
        Complex(-3.64673859532965),
        Complex(-2.32467430318165, 3.57102292033798),
        Complex(-2.32467430318165, -3.57102292033798),
        Complex(-3.35195639915353, 1.74266141618320),
        Complex(-3.35195639915353, -1.74266141618320),
    ],
    [
        Complex(-2.51593224781083, 4.49267295365395),
        Complex(-2.51593224781083, -4.49267295365395),
        Complex(-3.73570835632581, 2.62627231144713),
        Complex(-3.73570835632581, -2.62627231144713),
        Complex(-4.24835939586337, 0.86750967323136),
        Complex(-4.24835939586337, -0.86750967323136),
    ],
]

MAX_BESSEL_ORDER = len(REVERSE_BESSEL_ROOTS)


def bilinear_transform(s: Complex, prewarp_frequency: float) -> Complex:
    """
    Map an s-plane point to the z-plane.

    Uses ``s -> (1 + s/c) / (1 - s/c)`` with ``c = cot(prewarp_frequency / 2)``,
    which sends the analog frequency Omega = 1 to the digital frequency
    ``prewarp_frequency``.
    """
    c = Complex(1.0 / math.tan(prewarp_frequency / 2))
    sc = Complex.divide(s, c)
    one = Complex(1.0)
    return Complex.divide(Complex.add(one, sc), Complex.subtract(one, sc))


def highpass_transform(roots: Sequence[Complex]) -> List[Complex]:
    """Negate roots, mirroring the frequency response around pi/2"""
    return [z.negation() for z in roots]


def moving_average(k: int) -> FilterDescriptor:
    """
    Average of ``k`` consecutive samples.

    H(z) = (1 + z + ... + z^(k-1)) / z^(k-1); the zeros are the k-th roots of
    unity except z = 1. The poles at the origin only add delay and are left
    out.
    """
    zeros = [Complex.exp(Complex(0.0, i * 2 * math.pi / k)) for i in range(1, k)]
    return FilterDescriptor(zeros=zeros, poles=[])


def leaky_integrator(lambda_: float) -> FilterDescriptor:
    """Recursive smoother H(z) = (1 - lambda) / (1 - lambda z^-1)"""
    return FilterDescriptor(zeros=[], poles=[Complex(lambda_)])


def _analog_to_digital(analog_poles: Sequence[Complex], cutoff: float,
                       lowpass: bool) -> FilterDescriptor:
    """Bilinear-transform analog poles; every zero sits at z = -1 (s = inf)"""
    prewarp = cutoff if lowpass else math.pi - cutoff

    poles = [bilinear_transform(s, prewarp) for s in analog_poles]
    zeros = [Complex(-1.0) for _ in analog_poles]

    if not lowpass:
        zeros = highpass_transform(zeros)
        poles = highpass_transform(poles)

    return FilterDescriptor(zeros=zeros, poles=poles)


def butterworth(cutoff: float, n: int, lowpass: bool = True) -> FilterDescriptor:
    """
    Butterworth filter: maximally flat passband, monotonic roll-off.

    The analog poles lie on the left half of the unit circle at
    ``exp(-i theta_k)`` with ``theta_k = pi/2 + pi (2k + 1) / (2n)``.
    """
    analog_poles = []
    for k in range(n):
        theta = math.pi / 2 + math.pi * (2 * k + 1) / (2 * n)
        analog_poles.append(Complex.exp(Complex(0.0, -theta)))

    descriptor = _analog_to_digital(analog_poles, cutoff, lowpass)
    descriptor.normalize = NormalizationSpec(frequency=0.0 if lowpass else math.pi, gain=1.0)

    logger.debug(f"Butterworth {'lowpass' if lowpass else 'highpass'} n={n}, cutoff={cutoff:.4f}")
    return descriptor


def chebyshev_type_i(cutoff: float, n: int, ripple: float,
                     lowpass: bool = True) -> FilterDescriptor:
    """
    Chebyshev type I filter: steeper roll-off at the cost of passband ripple.

    With ``x = arsinh(1/ripple) / n`` the analog poles lie on an ellipse at
    ``-sinh(x) sin(theta_m) + i cosh(x) cos(theta_m)``,
    ``theta_m = (pi/2)(2m - 1)/n`` for m = 1..n. The response is normalized to
    the bottom of the ripple band, ``1 / sqrt(1 + ripple^2)``.
    """
    x = math.asinh(1.0 / ripple) / n
    sinh_x = math.sinh(x)
    cosh_x = math.cosh(x)

    analog_poles = []
    for m in range(1, n + 1):
        theta_m = (math.pi / 2) * (2 * m - 1) / n
        analog_poles.append(Complex(-sinh_x * math.sin(theta_m), cosh_x * math.cos(theta_m)))

    descriptor = _analog_to_digital(analog_poles, cutoff, lowpass)
    descriptor.normalize = NormalizationSpec(
        frequency=cutoff if lowpass else math.pi,
        gain=1.0 / math.sqrt(1.0 + ripple * ripple)
    )

    logger.debug(f"Chebyshev I {'lowpass' if lowpass else 'highpass'} n={n}, "
                 f"cutoff={cutoff:.4f}, ripple={ripple}")
    return descriptor


def bessel(cutoff: float, n: int, lowpass: bool = True) -> FilterDescriptor:
    """
    Bessel filter: maximally linear analog phase response.

    Only orders with tabulated reverse Bessel roots are available.

    Raises:
        UnsupportedFilterOrderError: If ``n`` is outside 1..MAX_BESSEL_ORDER
    """
    if not 1 <= n <= MAX_BESSEL_ORDER:
        raise UnsupportedFilterOrderError(
            f"Bessel filters are available for orders 1 to {MAX_BESSEL_ORDER}, got {n}"
        )

    descriptor = _analog_to_digital(REVERSE_BESSEL_ROOTS[n - 1], cutoff, lowpass)
    descriptor.normalize = NormalizationSpec(frequency=0.0 if lowpass else math.pi, gain=1.0)

    logger.debug(f"Bessel {'lowpass' if lowpass else 'highpass'} n={n}, cutoff={cutoff:.4f}")
    return descriptor


def comb(alpha: float, delay: int, feedforward: bool = True) -> FilterDescriptor:
    """
    Comb filter with ``delay`` equally spaced notches or peaks.

    The roots are the ``delay``-th roots of ``alpha`` (feedforward) or of
    ``-alpha`` (feedback), placed as zeros with all poles at the origin, or
    as poles with all zeros at the origin.
    """
    k = delay
    alpha_kth_root = Complex(alpha if feedforward else -alpha).root(k)

    zeros, poles = [], []
    for i in range(k):
        z = Complex.multiply(alpha_kth_root, Complex.exp(Complex(0.0, i * 2 * math.pi / k)))
        zeros.append(z if feedforward else Complex(0.0))
        poles.append(Complex(0.0) if feedforward else z)

    return FilterDescriptor(
        zeros=zeros,
        poles=poles,
        normalize=NormalizationSpec(frequency=math.pi / k if alpha > 0 else 0.0, gain=1.0)
    )
