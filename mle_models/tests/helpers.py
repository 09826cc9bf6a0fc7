# (C) 2024 Irreducible Inc.

from typing import TypeVar

from hypothesis import strategies as st

from mle_models.finite_fields.finite_field import FiniteFieldElem

F = TypeVar("F", bound=FiniteFieldElem)


def random_integers_strategy(
    min_value: int,
    max_value: int,
) -> st.SearchStrategy[int]:
    return st.builds(lambda rng: rng.randint(min_value, max_value), st.randoms(use_true_random=True))


def field_elements(field: type[F]) -> st.SearchStrategy[F]:
    """Any element of the field; the representation is the canonical integer in [0, order)."""
    return st.integers(0, field.field.order - 1).map(field)


def field_vectors(field: type[F], min_size: int = 0, max_size: int = 5) -> st.SearchStrategy[list[F]]:
    return st.lists(field_elements(field), min_size=min_size, max_size=max_size)


def hypercube_tables(field: type[F], max_num_var: int = 5) -> st.SearchStrategy[list[F]]:
    """Evaluation tables of power-of-two length, from 1 up to 2^max_num_var entries."""
    return st.integers(0, max_num_var).flatmap(
        lambda v: st.lists(field_elements(field), min_size=1 << v, max_size=1 << v)
    )
