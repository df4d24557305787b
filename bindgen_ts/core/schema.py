"""
bindgen-ts Descriptors

Plain data structures describing exported commands and structures,
independent of source syntax. Built once per exported entity by the
introspection layer and consumed immediately by the TypeScript emitters.
"""

import re
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from bindgen_ts.core.errors import UnsupportedShapeError
from bindgen_ts.core.constants import TYPESCRIPT_RESERVED_WORDS

# A Python type object (str, User, ...) or a dotted path string ("builtins.str").
TypeReference = Union[type, str, Any]

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _check_identifier(entity: str, name: str, what: str):
    if not _IDENTIFIER.match(name):
        raise UnsupportedShapeError.for_member(entity, name, f"{what} is not a plain identifier")
    if name in TYPESCRIPT_RESERVED_WORDS:
        raise UnsupportedShapeError.for_member(entity, name, f"{what} is a TypeScript reserved word")


def _check_unique(entity: str, names: List[str], what: str):
    seen = set()
    for name in names:
        if name in seen:
            raise UnsupportedShapeError.for_member(entity, name, f"duplicate {what} name")
        seen.add(name)


# === COMMANDS === #

@dataclass
class Parameter:
    """One named command parameter."""
    name: str
    annotation: TypeReference


@dataclass
class FunctionDescriptor:
    """
    Exported backend command.

    Parameters keep declaration order; that order is reproduced verbatim in
    both the TypeScript signature and the named-argument object.
    """
    name: str
    parameters: List[Parameter] = field(default_factory=list)
    out_dir: Optional[str] = None          # Raw directory argument from the decorator
    docstring: Optional[str] = None

    def __post_init__(self):
        _check_identifier(self.name, self.name, "command name")
        for param in self.parameters:
            _check_identifier(self.name, param.name, "parameter name")
        _check_unique(self.name, self.parameter_names, "parameter")

    @property
    def parameter_names(self) -> List[str]:
        return [param.name for param in self.parameters]


# === STRUCTURES === #

@dataclass
class StructField:
    """One named structure field, using its serialized name."""
    name: str
    annotation: TypeReference
    description: Optional[str] = None


@dataclass
class StructureDescriptor:
    """Exported data structure rendered as a TypeScript interface."""
    name: str
    fields: List[StructField] = field(default_factory=list)
    out_dir: Optional[str] = None
    docstring: Optional[str] = None

    def __post_init__(self):
        _check_identifier(self.name, self.name, "structure name")
        _check_unique(self.name, self.field_names, "field")

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


# === OUTPUT === #

@dataclass
class GeneratedFile:
    """Fully rendered binding file, not yet written."""
    entity: str
    path: Path
    content: str


@dataclass
class GenerationFailure:
    """An entity whose generation aborted."""
    entity: str
    error: Exception


@dataclass
class GenerationReport:
    """Per-entity outcome of one generation run."""
    written: List[GeneratedFile] = field(default_factory=list)
    failures: List[GenerationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def get_written_paths(self) -> List[str]:
        return [str(generated.path) for generated in self.written]
