"""Conversions between the evaluation table and the monomial coefficients of a multilinear polynomial.

Both tables are indexed by hypercube vertices with little-endian bits. For 3 variables:

    index   evaluation slot paired with     coefficient slot
    0b000   (1-X₀)(1-X₁)(1-X₂)              1
    0b001     X₀  (1-X₁)(1-X₂)              X₀
    0b010   (1-X₀)  X₁  (1-X₂)              X₁
    0b011     X₀    X₁  (1-X₂)              X₀X₁
    0b100   (1-X₀)(1-X₁)  X₂                X₂
    0b101     X₀  (1-X₁)  X₂                X₀X₂
    0b110   (1-X₀)  X₁    X₂                X₁X₂
    0b111     X₀    X₁    X₂                X₀X₁X₂

Going from evaluations to coefficients is the Möbius transform over the subset lattice (finite differences,
one variable per pass); the way back is its inverse, the zeta transform (subset sums). Each direction makes
n passes of N/2 updates, so both run in O(N log N) for N = 2ⁿ.
"""

import logging
from collections.abc import Sequence
from typing import TypeVar

from mle_models.finite_fields.finite_field import FiniteFieldElem
from mle_models.utils.utils import is_power_of_two

F = TypeVar("F", bound=FiniteFieldElem)

logger = logging.getLogger(__name__)


def compute_coeffs_from_evals(evals: Sequence[F]) -> list[F]:
    """Interpolates an evaluation table over the hypercube into monomial coefficients.

    :param evals: the 2ⁿ evaluations; left untouched
    :return: the 2ⁿ coefficients
    """
    length = len(evals)
    if not is_power_of_two(length):
        raise ValueError(f"evaluation table length must be a power of two, got {length}")
    coeffs = list(evals)

    half = length >> 1
    while half:
        # blocks of size `half` come in pairs (lower, upper) which differ only in the bit of weight `half`
        for j in range(0, length // half, 2):
            for k in range(half):
                coeffs[(j + 1) * half + k] -= coeffs[j * half + k]
        half >>= 1
    logger.debug("interpolated %d evaluations into coefficients", length)
    return coeffs


def compute_evals_from_coeffs(field: type[F], num_var: int, coeffs: Sequence[F]) -> list[F]:
    """Evaluates a multilinear polynomial, given by monomial coefficients, over the whole hypercube.

    :param field: the field
    :param num_var: number of variables n
    :param coeffs: at most 2ⁿ coefficients; missing high coefficients are zero
    :return: the 2ⁿ evaluations
    """
    length = 1 << num_var
    if len(coeffs) > length:
        raise ValueError(f"{len(coeffs)} coefficients do not fit a {num_var}-variate multilinear polynomial")
    evals = list(coeffs) + [field.zero()] * (length - len(coeffs))

    blocks = length >> 1
    while blocks:
        size = length // blocks
        for j in range(blocks):
            for k in range(size // 2):
                evals[j * size + k + size // 2] += evals[j * size + k]
        blocks >>= 1
    logger.debug("evaluated %d coefficients over the %d-dimensional hypercube", len(coeffs), num_var)
    return evals
