import logging
from collections.abc import Iterator, Sequence
from typing import Generic, Self, TypeVar

from mle_models.finite_fields.finite_field import FiniteFieldElem
from mle_models.utils.utils import log2_exact, next_power_of_two

from .coefficients import compute_coeffs_from_evals, compute_evals_from_coeffs
from .equality import EqPolynomial

F = TypeVar("F", bound=FiniteFieldElem)

logger = logging.getLogger(__name__)


def linearly_interpolate(points: tuple[F, F], r: F) -> F:
    # (1 - r) ⋅ p₀ + r ⋅ p₁, with one multiplication
    return points[0] + (points[1] - points[0]) * r


class MLEPolynomial(Generic[F]):
    """A multilinear polynomial in `num_var` variables, given by its values on the boolean hypercube.

    Slot i of `evals` holds the value at the vertex whose coordinates are the little-endian bits of i, ie. X₀ is
    the least significant bit. The table always has exactly 2^num_var entries.
    """

    def __init__(self, field: type[F], values: Sequence[F]) -> None:
        """Builds the multilinear extension of `values`, padded with zeros up to the next power of two.

        An empty or single-element sequence gives a constant polynomial in 0 variables.
        """
        self.field = field
        self.evals = list(values)
        self.evals.extend([field.zero()] * (next_power_of_two(len(self.evals)) - len(self.evals)))
        self.num_var = log2_exact(len(self.evals))

    @classmethod
    def from_coeffs(cls, field: type[F], num_var: int, coeffs: Sequence[F]) -> Self:
        """Builds the polynomial Σᵢ coeffs[i] ⋅ ∏_{j : bit j of i is set} Xⱼ in `num_var` variables."""
        return cls(field, compute_evals_from_coeffs(field, num_var, coeffs))

    def coeffs(self) -> list[F]:
        """Returns the coefficients in the monomial basis, indexed like `from_coeffs` expects them."""
        return compute_coeffs_from_evals(self.evals)

    def len(self) -> int:
        return len(self.evals)

    def __len__(self) -> int:
        return len(self.evals)

    def __getitem__(self, index: int) -> F:
        if index not in range(len(self.evals)):
            raise IndexError(f"index {index} out of range for {len(self.evals)} evaluations")
        return self.evals[index]

    def __iter__(self) -> Iterator[F]:
        return iter(self.evals)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MLEPolynomial):
            return NotImplemented
        return self.num_var == other.num_var and self.evals == other.evals

    def __repr__(self) -> str:
        return f"MLEPolynomial(num_var={self.num_var}, evals={self.evals!r})"

    def fold_into_half(self, rho: F) -> None:
        """Binds the last variable X_{num_var - 1} to rho, in place.

        Slots i and i + half differ exactly in that variable, so each pair collapses onto the line through them.
        Doing this num_var times with challenges r₀, r₁, … evaluates the polynomial at (…, r₁, r₀).
        """
        if self.num_var == 0:
            raise ValueError("cannot fold a polynomial in 0 variables")
        half = len(self.evals) >> 1
        for i in range(half):
            self.evals[i] = linearly_interpolate((self.evals[i], self.evals[i + half]), rho)
        del self.evals[half:]
        self.num_var -= 1
        logger.debug("folded multilinear into %d variables", self.num_var)

    def evaluate(self, point: Sequence[F]) -> F:
        """Evaluates at an arbitrary point, in O(2^num_var).

        Same result as folding with point[num_var - 1], …, point[0] in turn, without the intermediate tables.
        """
        if len(point) != self.num_var:
            raise ValueError(f"point has {len(point)} coordinates, polynomial has {self.num_var} variables")
        # the Lagrange basis evaluated at `point`
        chi = EqPolynomial(self.field, point).evals_over_hypercube()
        assert len(chi) == len(self.evals)
        logger.debug("evaluating multilinear in %d variables", self.num_var)
        return sum((chi[i] * self.evals[i] for i in range(len(self.evals))), self.field.zero())

    def partially_evaluate(self, point: Sequence[F]) -> Self:
        """Binds the last len(point) variables, X_{num_var - k + m} = point[m], returning a new polynomial.

        Equivalent to folding with point[k - 1], …, point[0]; the receiver is left untouched.
        """
        k = len(point)
        if k > self.num_var:
            raise ValueError(f"cannot bind {k} variables of a polynomial in {self.num_var} variables")
        chi = EqPolynomial(self.field, point).evals_over_hypercube()
        b = self.num_var - k
        return self.__class__(
            self.field,
            [
                sum((self.evals[j << b | i] * chi[j] for j in range(1 << k)), self.field.zero())
                for i in range(1 << b)
            ],
        )

    def sum_over_hypercube(self) -> F:
        return sum(self.evals, self.field.zero())
