"""
Structure Introspection

Converts Pydantic models and dataclasses marked with @entity into
StructureDescriptor objects. Field names are the serialized names, so the
emitted interface matches the JSON the backend produces.
"""

import inspect
import typing
import dataclasses
from typing import Optional

from pydantic import BaseModel

from bindgen_ts.core.errors import UnresolvableTypeError
from bindgen_ts.core.schema import StructureDescriptor, StructField


def model_to_descriptor(cls: type, out_dir: Optional[str] = None) -> StructureDescriptor:
    """
    Extract a StructureDescriptor from a Pydantic model or dataclass.

    Raises:
        TypeError: cls is neither a BaseModel subclass nor a dataclass
        UnresolvableTypeError: a dataclass annotation cannot be evaluated
    """
    if inspect.isclass(cls) and issubclass(cls, BaseModel):
        fields = _pydantic_fields(cls)
    elif dataclasses.is_dataclass(cls):
        fields = _dataclass_fields(cls)
    else:
        raise TypeError(f"Cannot introspect {cls!r}: expected a pydantic BaseModel or a dataclass")

    return StructureDescriptor(
        name=cls.__name__,
        fields=fields,
        out_dir=out_dir,
        docstring=_own_docstring(cls),
    )


def _pydantic_fields(model: type) -> list:
    """Read model_fields in definition order."""
    fields = []
    for field_name, field_info in model.model_fields.items():
        serialized_name = field_info.serialization_alias or field_info.alias or field_name
        fields.append(StructField(
            name=serialized_name,
            annotation=field_info.annotation,
            description=field_info.description,
        ))
    return fields


def _dataclass_fields(cls: type) -> list:
    try:
        type_hints = typing.get_type_hints(cls)
    except NameError as e:
        raise UnresolvableTypeError(f"'{cls.__name__}': cannot evaluate annotation: {e}", entity=cls.__name__) from e

    return [
        StructField(name=f.name, annotation=type_hints.get(f.name, f.type))
        for f in dataclasses.fields(cls)
    ]


def _own_docstring(cls: type) -> Optional[str]:
    """Docstring written on the class itself, not inherited or auto-generated."""
    doc = cls.__dict__.get("__doc__")
    if not doc:
        return None
    if dataclasses.is_dataclass(cls) and doc.startswith(f"{cls.__name__}("):
        return None
    return inspect.cleandoc(doc)
