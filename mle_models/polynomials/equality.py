from collections.abc import Sequence
from typing import Generic, TypeVar

from mle_models.finite_fields.finite_field import FiniteFieldElem
from mle_models.utils.utils import int_to_bits

F = TypeVar("F", bound=FiniteFieldElem)


def eq(field: type[F], x: F, y: F) -> F:
    """
    Evaluation of the multilinear polynomial which indicates the condition x == y.
    """
    return x * y + (field.one() - x) * (field.one() - y)


class EqPolynomial(Generic[F]):
    """The equality indicator polynomial with its first argument fixed.

    For a point x = (x₀, …, xₙ₋₁), typically sampled by a verifier, this is the function

        eq_x(Y) = ∏ⱼ ((1 - xⱼ)(1 - Yⱼ) + xⱼ ⋅ Yⱼ).

    On a hypercube vertex i the Y coordinates are the little-endian bits of i, so e.g. for n = 3 and
    i = 0b011 the value is x₀ ⋅ x₁ ⋅ (1 - x₂). On the hypercube, eq_x is the Lagrange basis evaluated at x:
    the vector of all 2ⁿ values is what an MLE's evaluation table gets dotted with.
    """

    def __init__(self, field: type[F], x_vec: Sequence[F]) -> None:
        """Constructs the indicator for a fixed point.

        :param field: the field
        :param x_vec: the coordinates of the point; copied
        """
        self.field = field
        self.x_vec = tuple(x_vec)

    @property
    def num_var(self) -> int:
        return len(self.x_vec)

    def eval(self, i: int) -> F:
        """Evaluates at hypercube vertex i, in O(n)."""
        if i not in range(1 << self.num_var):
            raise IndexError(f"vertex {i} is outside of the {self.num_var}-dimensional hypercube")
        value = self.field.one()
        for x, bit in zip(self.x_vec, int_to_bits(i, self.num_var)):
            value *= x if bit else self.field.one() - x
        return value

    def evaluate(self, r_vec: Sequence[F]) -> F:
        """Evaluates eq(x, r) at an arbitrary point r, in O(n)."""
        if len(r_vec) != self.num_var:
            raise ValueError(f"point has {len(r_vec)} coordinates, expected {self.num_var}")
        value = self.field.one()
        for x, r in zip(self.x_vec, r_vec):
            value *= eq(self.field, x, r)
        return value

    def evals_over_hypercube(self) -> list[F]:
        """Evaluates at every vertex of the hypercube, in O(2ⁿ).

        The table is built by doubling: after handling coordinate k it holds the 2ᵏ⁺¹ products over the first
        k + 1 coordinates, the lower half for bit k clear and the upper half for bit k set. Since
        e ⋅ (1 - xₖ) = e - e ⋅ xₖ, each new pair costs a single multiplication.
        """
        array = [self.field.one()] * (1 << self.num_var)
        for k, x in enumerate(self.x_vec):
            for j in range(1 << k):
                array[1 << k | j] = array[j] * x
                array[j] -= array[1 << k | j]
        return array

    def evals_over_hypercube_slow(self) -> list[F]:
        """Reference version of evals_over_hypercube, in O(n ⋅ 2ⁿ). Only meant for testing."""
        array = []
        for i in range(1 << self.num_var):
            bits = [self.field.from_int(bit) for bit in int_to_bits(i, self.num_var)]
            array.append(self.evaluate(bits))
        return array
