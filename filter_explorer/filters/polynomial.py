"""
Polynomial construction from a set of roots.

Given roots r_0 ... r_{n-1}, the coefficients a_0 ... a_n of

    P(z) = (z - r_0)(z - r_1)...(z - r_{n-1}) = sum(a_i z^i)

are built one root at a time. Multiplying the partial product of degree k-1
by (z - r) gives the recurrence

    new[0] = -r * old[0]
    new[k] = old[k-1]
    new[i] = old[i-1] - r * old[i]     for 0 < i < k

so the total cost is O(n^2) and the leading coefficient stays exactly 1.
"""

from typing import Iterable, List

from filter_explorer.complex_number import Complex


def polynomial_from_roots(roots: Iterable[Complex]) -> List[Complex]:
    """
    Coefficients of the monic polynomial with the given roots.

    Args:
        roots: Roots in any order; repeated values express multiplicity

    Returns:
        Coefficients in ascending power order, ``len(roots) + 1`` long
    """
    coefficients = [Complex(1.0)]

    for root in roots:
        negated_root = root.negation()
        k = len(coefficients)
        extended = [Complex.multiply(negated_root, coefficients[0])]
        for i in range(1, k):
            extended.append(Complex.subtract(coefficients[i - 1],
                                             Complex.multiply(root, coefficients[i])))
        extended.append(coefficients[k - 1])
        coefficients = extended

    return coefficients


def descending_coefficients(roots: Iterable[Complex]) -> List[Complex]:
    """Coefficients of the monic polynomial, highest power first"""
    return list(reversed(polynomial_from_roots(roots)))
