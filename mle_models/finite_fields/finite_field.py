# (C) 2024 Irreducible Inc.

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar, Generic, Self, TypeVar

R = TypeVar("R")


@dataclass(frozen=True)
class FiniteFieldElem(Generic[R]):
    """A finite field element.

    This is the only capability the polynomial algorithms rely on: `+`, `-`, `*` and the two identities
    `zero()` and `one()`. Each concrete field subclasses this and sets the `field` class variable to an instance
    of FiniteField, which holds the representation and the arithmetic. Elements are immutable values.
    """

    value: R
    field: ClassVar[FiniteField]

    def __add__(self, other: Self) -> Self:
        return self.__class__(self.field.add(self.value, other.value))

    def __sub__(self, other: Self) -> Self:
        return self.__class__(self.field.subtract(self.value, other.value))

    def __mul__(self, other: Self) -> Self:
        return self.__class__(self.field.multiply(self.value, other.value))

    def __truediv__(self, other: Self) -> Self:
        return self.__class__(self.field.multiply(self.value, self.field.inverse(other.value)))

    def __neg__(self) -> Self:
        return self.__class__(self.field.negate(self.value))

    def __pow__(self, exponent: int) -> Self:
        return self.__class__(self.field.pow(self.value, exponent))

    def inverse(self) -> Self:
        return self.__class__(self.field.inverse(self.value))

    def square(self) -> Self:
        return self.__class__(self.field.square(self.value))

    def __eq__(self, other) -> bool:
        if not isinstance(other, FiniteFieldElem):
            return NotImplemented
        return self.field is other.field and bool(self.value == other.value)

    def __hash__(self) -> int:
        return hash((id(self.field), self.value))

    def __str__(self) -> str:
        return self.field.format_str(self.value)

    def __repr__(self) -> str:
        return self.field.format_repr(self.value)

    def is_zero(self) -> bool:
        return bool(self.value == self.field.zero())

    def __bool__(self) -> bool:
        return not self.is_zero()

    @classmethod
    def zero(cls) -> Self:
        return cls(cls.field.zero())

    @classmethod
    def one(cls) -> Self:
        return cls(cls.field.one())

    @classmethod
    def random(cls) -> Self:
        return cls(cls.field.random())

    @classmethod
    def from_int(cls, val: int) -> Self:
        return cls(cls.field.from_int(val))

    @classmethod
    def from_ints(cls, vals: Iterable[int]) -> list[Self]:
        """Lifts a sequence of small integers into the field, e.g. for test vectors."""
        return [cls.from_int(val) for val in vals]


class FiniteField(ABC, Generic[R]):
    """A finite field implementation.

    All finite fields have order p^n, where p is a prime number. p is the field characteristic and n is the degree
    of the extension GF(p^n) over the base field GF(p). An instance of FiniteField encapsulates the representation
    of field elements and the logic for the basic field operations.
    """

    @property
    @abstractmethod
    def characteristic(self) -> int:
        """The field characteristic, ie. the order of the base field."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """The dimension of the field as a vector space over its base field."""
        pass

    @property
    def degree(self) -> int:
        """Alias of dimension property."""
        return self.dimension

    @property
    def order(self) -> int:
        return self.characteristic**self.dimension

    def zero(self) -> R:
        return self.from_int(0)

    def one(self) -> R:
        return self.from_int(1)

    @abstractmethod
    def random(self) -> R:
        pass

    @abstractmethod
    def add(self, left: R, right: R) -> R:
        pass

    @abstractmethod
    def subtract(self, left: R, right: R) -> R:
        pass

    @abstractmethod
    def negate(self, operand: R) -> R:
        pass

    @abstractmethod
    def multiply(self, left: R, right: R) -> R:
        pass

    def square(self, operand: R) -> R:
        return self.multiply(operand, operand)

    def pow(self, base: R, exponent: int) -> R:
        if exponent < 0:
            base = self.inverse(base)
            exponent = -exponent
        acc = self.one()
        val = base

        while exponent:
            if exponent % 2:
                acc = self.multiply(acc, val)
            val = self.square(val)
            exponent >>= 1

        return acc

    @abstractmethod
    def inverse(self, operand: R) -> R:
        pass

    @abstractmethod
    def format_str(self, elem: R) -> str:
        pass

    @abstractmethod
    def format_repr(self, elem: R) -> str:
        pass

    @abstractmethod
    def from_int(self, val: int) -> R:
        """Creates a field element from an integer.

        The integer is mapped through the canonical ring homomorphism Z -> F, ie. reduced mod the characteristic.
        """
        pass
