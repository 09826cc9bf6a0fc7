# (C) 2024 Irreducible Inc.

from __future__ import annotations

from abc import ABC, abstractmethod
from random import randrange
from typing import ClassVar, Self

from galois import GF

from .finite_field import FiniteField, FiniteFieldElem

# scalar field of the BN254 (alt_bn128) curve
BN254_SCALAR_PRIME = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001
GOLDILOCKS_PRIME = 2**64 - 2**32 + 1


class PrimeFieldElem(FiniteFieldElem[int]):
    field: ClassVar[PrimeField]

    @classmethod
    def max(cls) -> Self:
        return cls(cls.field.max())

    def to_int(self) -> int:
        return self.field.to_int(self.value)

    def __int__(self) -> int:
        return self.to_int()


class PrimeField(FiniteField[int], ABC):
    """A field of prime order, with elements represented by their canonical integer in [0, p)."""

    def __init__(self, prime: int):
        self.p = prime
        self.bitlen = self.p.bit_length()
        hexlen = (self.bitlen + 3) // 4
        self.fmt = f"{{:#0{hexlen + 2:d}x}}"

    @property
    def characteristic(self) -> int:
        return self.p

    @property
    def dimension(self) -> int:
        return 1

    @property
    def prime(self) -> int:
        return self.p

    def max(self) -> int:
        return self.from_int(self.p - 1)

    def random(self) -> int:
        return randrange(0, self.p)

    def add(self, left: int, right: int) -> int:
        return (left + right) % self.p

    def subtract(self, left: int, right: int) -> int:
        return (left - right) % self.p

    def negate(self, operand: int) -> int:
        return -operand % self.p

    def from_int(self, val: int) -> int:
        return val % self.p

    def to_int(self, elem: int) -> int:
        return elem

    def format_str(self, elem: int) -> str:
        return str(elem)

    def format_repr(self, elem: int) -> str:
        return self.fmt.format(elem)

    @abstractmethod
    def multiply(self, left: int, right: int) -> int:
        pass

    @abstractmethod
    def inverse(self, operand: int) -> int:
        pass


class PrimeFieldNative(PrimeField):
    """Prime field arithmetic on Python integers."""

    def multiply(self, left: int, right: int) -> int:
        return (left * right) % self.p

    def pow(self, base: int, exponent: int) -> int:
        if exponent < 0:
            return pow(self.inverse(base), -exponent, self.p)
        return pow(base, exponent, self.p)

    def inverse(self, operand: int) -> int:
        if operand == 0:
            raise ValueError("inverting zero")
        return pow(operand, -1, self.p)


class GaloisPrimeField(PrimeField):
    """Prime field whose multiplicative operations delegate to a `galois` field class.

    Additive operations stay on plain integers; they are cheaper than a round trip through a FieldArray.
    `primitive_element` is passed through so galois does not have to factor p - 1 when building the class.
    """

    def __init__(self, prime: int, primitive_element: int):
        super().__init__(prime)
        self.gf = GF(prime, primitive_element=primitive_element, verify=False)

    def multiply(self, left: int, right: int) -> int:
        return int(self.gf(left) * self.gf(right))

    def square(self, operand: int) -> int:
        return int(self.gf(operand) ** 2)

    def inverse(self, operand: int) -> int:
        if operand == 0:
            raise ValueError("inverting zero")
        return int(self.gf(1) / self.gf(operand))


class Fr(PrimeFieldElem):
    field = PrimeFieldNative(BN254_SCALAR_PRIME)


class Goldilocks(PrimeFieldElem):
    field = GaloisPrimeField(GOLDILOCKS_PRIME, 7)


class F97(PrimeFieldElem):
    field = PrimeFieldNative(97)
