from __future__ import annotations

import random
from typing import ClassVar

from mle_models.finite_fields.finite_field import FiniteField, FiniteFieldElem
from mle_models.utils.utils import bits_mask


class FanPaarTowerField(FiniteField[int]):
    """
    Binary tower field of degree 2^height. The polynomial modulus for step n of the tower is Xₙ² + Xₙ₋₁ ⋅ Xₙ + 1.

    Characteristic 2: addition and subtraction are both XOR, so 1 - x == 1 + x. Useful for checking that the
    polynomial code never assumes a characteristic.
    """

    subfield: FanPaarTowerField | None

    def __init__(self, height: int) -> None:
        self._degree = 1 << height
        hexlen = (self._degree + 3) // 4
        self.fmt = f"FanPaarTowerField({{:#0{hexlen + 2:d}x}})"
        self.subfield = None if height == 0 else FanPaarTowerField(height - 1)

    @property
    def characteristic(self) -> int:
        return 2

    @property
    def dimension(self) -> int:
        return self._degree

    def random(self) -> int:
        return random.randrange(1 << self.dimension)

    def add(self, left: int, right: int) -> int:
        return left ^ right

    def subtract(self, left: int, right: int) -> int:
        return left ^ right

    def negate(self, operand: int) -> int:
        return operand

    def from_int(self, val: int) -> int:
        return val & 1

    def format_str(self, elem: int) -> str:
        return self.fmt.format(elem)

    def format_repr(self, elem: int) -> str:
        return self.fmt.format(elem)

    def to_subfield_pair(self, elem: int) -> tuple[int, int]:
        assert self.subfield is not None
        m = self.subfield.degree
        return elem & bits_mask(m), elem >> m

    def from_subfield_pair(self, lo: int, hi: int) -> int:
        assert self.subfield is not None
        return lo | hi << self.subfield.degree

    def _is_valid(self, val: int) -> bool:
        return val >> self.degree == 0

    def multiply(self, a: int, b: int) -> int:
        # recursive tower mult; 2×2 Karatsuba at each step
        if self.subfield is None:
            return a & b
        sub = self.subfield
        a0, a1 = self.to_subfield_pair(a)
        b0, b1 = self.to_subfield_pair(b)
        z0 = sub.multiply(a0, b0)
        z2 = sub.multiply(a1, b1)
        z1 = sub.multiply(a0 ^ a1, b0 ^ b1) ^ z0 ^ z2
        return self.from_subfield_pair(z0 ^ z2, z1 ^ sub._multiply_alpha(z2))

    def _multiply_alpha(self, a: int) -> int:
        if self.subfield is None:
            return a
        a0, a1 = self.to_subfield_pair(a)
        return self.from_subfield_pair(a1, a0 ^ self.subfield._multiply_alpha(a1))

    def square(self, a: int) -> int:
        if self.subfield is None:
            return a
        sub = self.subfield
        a0, a1 = self.to_subfield_pair(a)
        z0 = sub.square(a0)
        z2 = sub.square(a1)
        return self.from_subfield_pair(z0 ^ z2, sub._multiply_alpha(z2))

    def inverse(self, a: int) -> int:
        # Fan and Paar. On Efficient Inversion in Tower Fields of Characteristic Two
        if a == 0:
            raise ValueError("inverting zero")
        if self.subfield is None:
            return a
        sub = self.subfield
        if sub._is_valid(a):
            return sub.inverse(a)
        a0, a1 = self.to_subfield_pair(a)
        intermediate = a0 ^ sub._multiply_alpha(a1)
        delta = sub.multiply(a0, intermediate) ^ sub.square(a1)
        delta_inv = sub.inverse(delta)
        return self.from_subfield_pair(sub.multiply(delta_inv, intermediate), sub.multiply(delta_inv, a1))


class BinaryTowerFieldElem(FiniteFieldElem[int]):
    field: ClassVar[FanPaarTowerField]
