"""
Assertion helpers shared by the test modules
"""

from filter_explorer.complex_number import Complex


def assert_complex_close(actual: Complex, expected, tol: float = 1e-9):
    expected = Complex.coerce(expected)
    assert abs(actual.real - expected.real) < tol, f"{actual} != {expected}"
    assert abs(actual.imaginary - expected.imaginary) < tol, f"{actual} != {expected}"


def unit_circle(omega: float) -> Complex:
    return Complex.exp(Complex(0.0, omega))
