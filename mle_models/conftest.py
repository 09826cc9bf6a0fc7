# (C) 2024 Irreducible Inc.

import functools
import os
import pathlib
import types
from typing import Callable

import pytest
from hypothesis import settings

settings.register_profile("ci", max_examples=500, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


def pytest_pycollect_makemodule(module_path: pathlib.Path, parent) -> pytest.Module:
    """
    Collects a test module, expanding every function marked with @pytest.mark.parametrize_hypothesis.

    Usage:

        @pytest.mark.parametrize_hypothesis(
            slow=(settings(...), given(...)),
            fast=(settings(...), given(...)),
        )
        def test_something(...): ...

    yields `test_something_slow` marked with @pytest.mark.slow and `test_something_fast` marked with
    @pytest.mark.fast, each wrapped in its own list of hypothesis decorators. The original function is removed.
    """
    mod: pytest.Module = pytest.Module.from_parent(parent, path=module_path)
    expand_parametrize_hypothesis(mod)
    return mod


def expand_parametrize_hypothesis(mod: pytest.Module) -> None:
    marked: dict[str, Callable] = {
        name: obj
        for name, obj in getattr(mod.obj, "__dict__", {}).items()
        if callable(obj) and any(mark.name == "parametrize_hypothesis" for mark in getattr(obj, "pytestmark", []))
    }

    for name, test_func in marked.items():
        delattr(mod.obj, name)
        mark = next(m for m in test_func.pytestmark if m.name == "parametrize_hypothesis")
        if mark.args:
            raise ValueError(f"@pytest.mark.parametrize_hypothesis on '{mod.name}.{name}' takes keyword arguments only")

        for variant, decorators in mark.kwargs.items():
            if not isinstance(decorators, (list, tuple)) or not all(callable(d) for d in decorators):
                raise ValueError(
                    f"@pytest.mark.parametrize_hypothesis on '{mod.name}.{name}': "
                    + f"value for '{variant}' must be a list of decorators, got {decorators!r}"
                )
            new_name = f"{name}_{variant}"
            new_func = clone_with_decorators(test_func, new_name, decorators)
            setattr(mod.obj, new_name, getattr(pytest.mark, variant)(new_func))


def clone_with_decorators(test_func: Callable, new_name: str, decorators: list | tuple) -> Callable:
    """Copies a test function under a new name and applies the given decorators to the copy, in order."""
    clone = types.FunctionType(
        code=test_func.__code__,
        globals=test_func.__globals__,
        name=new_name,
        argdefs=test_func.__defaults__,
        closure=test_func.__closure__,
    )
    clone = functools.update_wrapper(clone, test_func)
    # update_wrapper copies __name__ and the marks from the original; restore the new name and drop our own mark
    clone.__name__ = clone.__qualname__ = new_name
    clone.pytestmark = [m for m in getattr(test_func, "pytestmark", []) if m.name != "parametrize_hypothesis"]
    for decorator in decorators:
        clone = decorator(clone)
    return clone
