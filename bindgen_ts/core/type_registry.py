"""
bindgen-ts Type Name Resolution

Maps backend-native Python types to their TypeScript names through an
explicit registry populated once at startup. Only simple owned types are
accepted: a plain class or a dotted path naming one. Generics, optionals,
unions, tuples and forward references are rejected before lookup.
"""

import uuid
import typing
import inspect
from pathlib import Path
from decimal import Decimal
from datetime import datetime, date, time
from typing import Any, Dict, Optional, get_origin

from bindgen_ts.core.constants import COMMON_TYPE_MAP
from bindgen_ts.core.errors import UnsupportedShapeError, UnresolvableTypeError

_NON_SIMPLE_MARKERS = ("[", "]", "<", ">", "&", "(", ")", ",", "|", " ")


def qualified_name(py_type: type) -> str:
    """Dotted path of a class, e.g. 'builtins.str' or 'app.models.User'."""
    return f"{py_type.__module__}.{py_type.__qualname__}"


class TypeRegistry:
    """
    Registry of native type -> TypeScript type name.

    Entries are keyed by type object and by dotted path, so descriptors may
    reference a type either way. A class may also declare its own
    TypeScript name through a ``__ts_name__`` attribute.
    """

    def __init__(self, include_defaults: bool = True):
        self._by_type: Dict[type, str] = {}
        self._by_path: Dict[str, str] = {}
        self._entities: Dict[str, type] = {}
        if include_defaults:
            self._register_defaults()

    def _register_defaults(self):
        self.register(str, "string")
        self.register(int, "number")
        self.register(float, "number")
        self.register(bool, "boolean")
        for py_type in (uuid.UUID, Decimal, datetime, date, time, Path):
            self.register(py_type, COMMON_TYPE_MAP[py_type.__name__])

    def register(self, py_type: type, ts_name: str):
        """Declare the TypeScript equivalent of a native type."""
        self._by_type[py_type] = ts_name
        self._by_path[qualified_name(py_type)] = ts_name

    def register_entity(self, py_type: type, ts_name: Optional[str] = None):
        """Register an exported structure; it also gets a bare-name entry."""
        ts_name = ts_name or py_type.__name__
        self.register(py_type, ts_name)
        self._by_path.setdefault(ts_name, ts_name)
        self._entities[ts_name] = py_type

    def unregister_entity(self, py_type: type):
        """Forget an exported structure and the entries register_entity added."""
        for ts_name, registered in list(self._entities.items()):
            if registered is not py_type:
                continue
            del self._entities[ts_name]
            if self._by_path.get(ts_name) == ts_name:
                del self._by_path[ts_name]
        self._by_type.pop(py_type, None)
        self._by_path.pop(qualified_name(py_type), None)

    def is_entity_name(self, ts_name: str) -> bool:
        """Whether a resolved name refers to an exported structure."""
        return ts_name in self._entities

    def __contains__(self, type_ref: Any) -> bool:
        try:
            return self._lookup(type_ref) is not None
        except TypeError:
            return False

    def resolve(self, type_ref: Any, entity: str = "<anonymous>", member: str = "<unknown>") -> str:
        """
        Resolve a type reference to its TypeScript name.

        Args:
            type_ref: Python type object or dotted path string
            entity: Owning command/structure name, for error messages
            member: Owning parameter/field name, for error messages

        Returns:
            TypeScript type name

        Raises:
            UnsupportedShapeError: type_ref is not a simple owned type
            UnresolvableTypeError: no TypeScript equivalent is declared
        """
        _check_simple_shape(type_ref, entity, member)

        ts_name = self._lookup(type_ref)
        if ts_name is None:
            raise UnresolvableTypeError.for_member(entity, member, _display_name(type_ref))
        return ts_name

    def _lookup(self, type_ref: Any) -> Optional[str]:
        if isinstance(type_ref, str):
            return self._by_path.get(type_ref)

        ts_name = self._by_type.get(type_ref)
        if ts_name is not None:
            return ts_name

        declared = getattr(type_ref, "__ts_name__", None)
        if isinstance(declared, str) and declared:
            return declared
        return None


def _check_simple_shape(type_ref: Any, entity: str, member: str):
    """Reject anything that is not a plain class or a plain dotted path."""
    if isinstance(type_ref, str):
        if not type_ref or any(marker in type_ref for marker in _NON_SIMPLE_MARKERS):
            raise UnsupportedShapeError.for_member(entity, member, f"'{type_ref}' is not a plain type path")
        return

    if type_ref is None or type_ref is type(None):
        raise UnsupportedShapeError.for_member(entity, member, "None")

    if type_ref is typing.Any:
        raise UnsupportedShapeError.for_member(entity, member, "Any")

    if isinstance(type_ref, typing.ForwardRef):
        raise UnsupportedShapeError.for_member(entity, member, f"unresolved forward reference {type_ref.__forward_arg__!r}")

    if get_origin(type_ref) is not None:
        raise UnsupportedShapeError.for_member(entity, member, f"generic type {type_ref!r}")

    if not inspect.isclass(type_ref):
        raise UnsupportedShapeError.for_member(entity, member, f"{type_ref!r} is not a class")


def _display_name(type_ref: Any) -> str:
    if isinstance(type_ref, str):
        return type_ref
    return getattr(type_ref, "__qualname__", repr(type_ref))


default_registry = TypeRegistry()
