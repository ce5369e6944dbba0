"""
Filter Explorer Interfaces

Value objects shared by the design engine, the preset generators, the
pole/zero editor and the block processor. Preset parameters are modelled as
one frozen dataclass per filter family so that every family validates its own
parameters and can be used as a cache key.
"""

import math
import numbers
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

import numpy as np

from filter_explorer.complex_number import Complex
from filter_explorer.exceptions import (
    InvalidFilterSpecificationError, NonMonicDenominatorError
)

class FilterFamily(Enum):
    """Supported parametric filter families"""
    MOVING_AVERAGE = "moving_average"
    LEAKY_INTEGRATOR = "leaky_integrator"
    BUTTERWORTH = "butterworth"
    CHEBYSHEV_I = "chebyshev1"
    BESSEL = "bessel"
    COMB = "comb"

class RootKind(Enum):
    """Which polynomial of the transfer function a root belongs to"""
    ZERO = "zero"
    POLE = "pole"

@dataclass(frozen=True)
class NormalizationSpec:
    """
    Gain normalization target.

    The numerator is scaled so that ``|H(e^{i*frequency})| == gain``.
    """
    frequency: float = 0.0
    gain: float = 1.0

@dataclass
class FilterDescriptor:
    """
    Pole/zero geometry of a filter, as produced by presets or editing.

    Roots are kept in insertion order; repeated roots express multiplicity.
    """
    zeros: List[Complex] = field(default_factory=list)
    poles: List[Complex] = field(default_factory=list)
    normalize: Optional[NormalizationSpec] = None

    @classmethod
    def identity(cls) -> 'FilterDescriptor':
        """Filter that passes its input through unchanged"""
        return cls(zeros=[], poles=[])

    def copy(self) -> 'FilterDescriptor':
        return FilterDescriptor(
            zeros=[z.copy() for z in self.zeros],
            poles=[p.copy() for p in self.poles],
            normalize=self.normalize
        )

@dataclass(frozen=True)
class CoefficientPair:
    """
    Numerator (``b``) and denominator (``a``) coefficients of H(z).

    Both are stored in descending power order, so that
    ``H(z) = sum(b[i] z^-i) / sum(a[i] z^-i)``. The denominator is monic.
    """
    b: Tuple[Complex, ...]
    a: Tuple[Complex, ...]

    def __post_init__(self):
        """Freeze coefficient sequences and check the monic denominator"""
        object.__setattr__(self, 'b', tuple(self.b))
        object.__setattr__(self, 'a', tuple(self.a))

        if len(self.b) == 0 or len(self.a) == 0:
            raise ValueError("Filter coefficients cannot be empty")

        if not Complex.are_equal(self.a[0], Complex(1.0)):
            raise NonMonicDenominatorError(
                f"Denominator must start with 1, got {self.a[0]}"
            )

    @property
    def order(self) -> int:
        return max(len(self.b), len(self.a)) - 1

    def numerator_array(self) -> np.ndarray:
        return np.array([complex(c) for c in self.b], dtype=np.complex128)

    def denominator_array(self) -> np.ndarray:
        return np.array([complex(c) for c in self.a], dtype=np.complex128)

    def is_finite(self) -> bool:
        """False when normalization was degenerate or a root was non-finite"""
        return bool(np.all(np.isfinite(self.numerator_array())) and
                    np.all(np.isfinite(self.denominator_array())))

@dataclass
class ChannelHistory:
    """Sliding input/output windows of one channel, newest sample first"""
    x: deque
    y: deque

    @classmethod
    def zeros(cls, x_length: int, y_length: int) -> 'ChannelHistory':
        return cls(
            x=deque([0.0] * x_length, maxlen=x_length),
            y=deque([0.0] * y_length, maxlen=y_length)
        )

@dataclass
class StereoHistory:
    left: ChannelHistory
    right: ChannelHistory

    @classmethod
    def zeros(cls, x_length: int, y_length: int) -> 'StereoHistory':
        return cls(
            left=ChannelHistory.zeros(x_length, y_length),
            right=ChannelHistory.zeros(x_length, y_length)
        )

@dataclass(frozen=True)
class FrequencyResponse:
    """
    Transfer function sampled on the unit circle.

    ``frequencies`` are angular frequencies in radians per sample, from
    -pi to +pi.
    """
    frequencies: np.ndarray
    response: np.ndarray

    @property
    def magnitude(self) -> np.ndarray:
        return np.abs(self.response)

    @property
    def phase(self) -> np.ndarray:
        return np.angle(self.response)


def _require_positive_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidFilterSpecificationError(f"{name} must be a positive integer, got {value!r}")

def _require_real(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise InvalidFilterSpecificationError(f"{name} must be a finite real number, got {value!r}")

def _require_cutoff(value) -> None:
    _require_real("cutoff", value)
    if not 0.0 < value < math.pi:
        raise InvalidFilterSpecificationError(
            f"cutoff must be between 0 and pi rad/sample, got {value}"
        )

@dataclass(frozen=True)
class FilterPreset:
    """Base class of the per-family preset parameter objects"""
    family: ClassVar[FilterFamily]

@dataclass(frozen=True)
class MovingAverage(FilterPreset):
    """Average of the last ``order`` input samples"""
    family: ClassVar[FilterFamily] = FilterFamily.MOVING_AVERAGE
    order: int

    def __post_init__(self):
        _require_positive_int("order", self.order)

@dataclass(frozen=True)
class LeakyIntegrator(FilterPreset):
    """y[n] = lambda * y[n-1] + (1 - lambda) * x[n]"""
    family: ClassVar[FilterFamily] = FilterFamily.LEAKY_INTEGRATOR
    lambda_: float

    def __post_init__(self):
        _require_real("lambda", self.lambda_)

@dataclass(frozen=True)
class Butterworth(FilterPreset):
    family: ClassVar[FilterFamily] = FilterFamily.BUTTERWORTH
    cutoff: float
    order: int
    lowpass: bool = True

    def __post_init__(self):
        _require_cutoff(self.cutoff)
        _require_positive_int("order", self.order)

@dataclass(frozen=True)
class ChebyshevI(FilterPreset):
    """Chebyshev type I; ``ripple`` is the epsilon of the passband ripple"""
    family: ClassVar[FilterFamily] = FilterFamily.CHEBYSHEV_I
    cutoff: float
    order: int
    ripple: float
    lowpass: bool = True

    def __post_init__(self):
        _require_cutoff(self.cutoff)
        _require_positive_int("order", self.order)
        _require_real("ripple", self.ripple)
        if self.ripple <= 0:
            raise InvalidFilterSpecificationError(f"ripple must be positive, got {self.ripple}")

@dataclass(frozen=True)
class Bessel(FilterPreset):
    family: ClassVar[FilterFamily] = FilterFamily.BESSEL
    cutoff: float
    order: int
    lowpass: bool = True

    def __post_init__(self):
        _require_cutoff(self.cutoff)
        _require_positive_int("order", self.order)

@dataclass(frozen=True)
class Comb(FilterPreset):
    """Feedforward (``x[n] + alpha x[n-delay]``) or feedback comb filter"""
    family: ClassVar[FilterFamily] = FilterFamily.COMB
    alpha: float
    delay: int
    feedforward: bool = True

    def __post_init__(self):
        _require_real("alpha", self.alpha)
        _require_positive_int("delay", self.delay)
