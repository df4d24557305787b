"""Shared fixtures for bindgen-ts tests."""

import sys

import pytest

from bindgen_ts.core.registry import ExportRegistry, default_exports
from bindgen_ts.core.type_registry import TypeRegistry


@pytest.fixture
def types() -> TypeRegistry:
    """Fresh type registry with the builtin entries only."""
    return TypeRegistry()


@pytest.fixture
def exports(types: TypeRegistry) -> ExportRegistry:
    """Isolated export registry backed by the fresh type registry."""
    return ExportRegistry(types=types)


@pytest.fixture
def clean_default_exports():
    """Reset the global export registry and forget modules imported by a test."""
    before = set(sys.modules)
    default_exports.clear()
    yield default_exports
    default_exports.clear()
    for name in set(sys.modules) - before:
        if name.startswith("bindgen_sample_"):
            del sys.modules[name]
