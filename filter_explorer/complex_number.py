"""
Complex number value type for pole/zero filter design.

Binary operations are exposed as static methods (``Complex.add(z, w)``) with
the usual Python operators delegating to them. Division by zero never raises:
like every other arithmetic edge case in the filter pipeline it produces
non-finite parts, so a malformed design degrades instead of crashing the
audio path.
"""

import math
import numbers
from typing import Optional, Union

import numpy as np

Operand = Union['Complex', int, float]


class InvalidOperandError(TypeError):
    """Raised when a complex number is built from non-numeric components"""
    pass


def _ieee_divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE semantics (inf/nan instead of ZeroDivisionError)"""
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(numerator) / np.float64(denominator))


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class Complex:
    """
    Mutable complex number with real and imaginary float parts.

    Equality between complex numbers is only meaningful up to ``EPSILON``;
    use ``Complex.are_equal`` rather than exact comparison.
    """

    __slots__ = ('real', 'imaginary')

    EPSILON = 1e-10

    def __init__(self, real: float, imaginary: float = 0.0):
        if not _is_number(real) or not _is_number(imaginary):
            raise InvalidOperandError(
                f"Complex parts must be real numbers, got {real!r} and {imaginary!r}"
            )
        self.real = float(real)
        self.imaginary = float(imaginary)

    @classmethod
    def from_polar(cls, r: float, phi: float) -> 'Complex':
        """Build a complex number from modulus ``r`` and argument ``phi``"""
        return cls(r * math.cos(phi), r * math.sin(phi))

    @classmethod
    def from_builtin(cls, value: complex) -> 'Complex':
        return cls(value.real, value.imag)

    @staticmethod
    def coerce(value: Operand) -> 'Complex':
        """Promote plain numbers to ``Complex``; complex values pass through"""
        if isinstance(value, Complex):
            return value
        if isinstance(value, complex):
            return Complex.from_builtin(value)
        return Complex(value)

    def is_real(self) -> bool:
        return abs(self.imaginary) < Complex.EPSILON

    def modulus(self) -> float:
        return math.sqrt(self.modulus_squared())

    def modulus_squared(self) -> float:
        return self.real * self.real + self.imaginary * self.imaginary

    def argument(self) -> float:
        """Phase angle in radians, ``atan2(imaginary, real)``"""
        return math.atan2(self.imaginary, self.real)

    def conjugate(self) -> 'Complex':
        return Complex(self.real, -self.imaginary)

    def negation(self) -> 'Complex':
        return Complex(-self.real, -self.imaginary)

    def reciprocal(self) -> 'Complex':
        """Multiplicative inverse; non-finite at zero"""
        modulus_squared = self.modulus_squared()
        return Complex(
            _ieee_divide(self.real, modulus_squared),
            _ieee_divide(-self.imaginary, modulus_squared)
        )

    def root(self, n: int) -> 'Complex':
        """Principal ``n``-th root"""
        r = math.pow(self.modulus(), 1.0 / n)
        phi = self.argument() / n
        return Complex.from_polar(r, phi)

    def scale_modulus_to(self, x: float) -> None:
        """Rescale in place so that the modulus becomes ``x``"""
        scale_factor = _ieee_divide(x, self.modulus())
        self.real *= scale_factor
        self.imaginary *= scale_factor

    def copy(self) -> 'Complex':
        return Complex(self.real, self.imaginary)

    @staticmethod
    def add(lhs: 'Complex', rhs: 'Complex') -> 'Complex':
        return Complex(lhs.real + rhs.real, lhs.imaginary + rhs.imaginary)

    @staticmethod
    def subtract(lhs: 'Complex', rhs: 'Complex') -> 'Complex':
        return Complex(lhs.real - rhs.real, lhs.imaginary - rhs.imaginary)

    @staticmethod
    def multiply(lhs: 'Complex', rhs: 'Complex') -> 'Complex':
        real = lhs.real * rhs.real - lhs.imaginary * rhs.imaginary
        imaginary = lhs.real * rhs.imaginary + lhs.imaginary * rhs.real
        return Complex(real, imaginary)

    @staticmethod
    def divide(lhs: 'Complex', rhs: 'Complex') -> 'Complex':
        modulus_squared = rhs.real * rhs.real + rhs.imaginary * rhs.imaginary
        real = lhs.real * rhs.real + lhs.imaginary * rhs.imaginary
        imaginary = lhs.imaginary * rhs.real - lhs.real * rhs.imaginary
        return Complex(
            _ieee_divide(real, modulus_squared),
            _ieee_divide(imaginary, modulus_squared)
        )

    @staticmethod
    def exp(z: 'Complex') -> 'Complex':
        """Complex exponential ``e^z``"""
        with np.errstate(over='ignore'):
            magnitude = float(np.exp(np.float64(z.real)))
        return Complex.multiply(
            Complex(magnitude),
            Complex(math.cos(z.imaginary), math.sin(z.imaginary))
        )

    @staticmethod
    def are_equal(lhs: Optional['Complex'], rhs: Optional['Complex']) -> bool:
        """Componentwise equality within ``EPSILON``; ``None`` never matches"""
        if lhs is rhs:
            return lhs is not None
        if lhs is None or rhs is None:
            return False
        return (abs(lhs.real - rhs.real) < Complex.EPSILON and
                abs(lhs.imaginary - rhs.imaginary) < Complex.EPSILON)

    def __add__(self, other: Operand) -> 'Complex':
        return Complex.add(self, Complex.coerce(other))

    def __radd__(self, other: Operand) -> 'Complex':
        return Complex.add(Complex.coerce(other), self)

    def __sub__(self, other: Operand) -> 'Complex':
        return Complex.subtract(self, Complex.coerce(other))

    def __rsub__(self, other: Operand) -> 'Complex':
        return Complex.subtract(Complex.coerce(other), self)

    def __mul__(self, other: Operand) -> 'Complex':
        return Complex.multiply(self, Complex.coerce(other))

    def __rmul__(self, other: Operand) -> 'Complex':
        return Complex.multiply(Complex.coerce(other), self)

    def __truediv__(self, other: Operand) -> 'Complex':
        return Complex.divide(self, Complex.coerce(other))

    def __rtruediv__(self, other: Operand) -> 'Complex':
        return Complex.divide(Complex.coerce(other), self)

    def __neg__(self) -> 'Complex':
        return self.negation()

    def __abs__(self) -> float:
        return self.modulus()

    def __complex__(self) -> complex:
        return complex(self.real, self.imaginary)

    def __repr__(self) -> str:
        return f"Complex({self.real!r}, {self.imaginary!r})"

    def __str__(self) -> str:
        if self.is_real():
            return str(self.real)
        return f"{self.real} + {self.imaginary}i"
