"""
bindgen-ts Interface Generator

Generates a TypeScript interface for an exported structure, followed by a
companion constant describing the runtime shape of its serialized form.
"""

import re
import json
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Tuple

from bindgen_ts.core.config import resolve_output_dir
from bindgen_ts.core.schema import StructureDescriptor, StructField
from bindgen_ts.core.writer import write_generated_file
from bindgen_ts.core.constants import GENERATED_FILE_HEADER, SHAPE_SUFFIX
from bindgen_ts.core.type_registry import TypeRegistry, default_registry
from .imports import generate_imports
from .functions import get_binding_path

_PLAIN_PROPERTY = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def generate_structure_binding(
    structure: StructureDescriptor,
    registry: TypeRegistry = default_registry,
    output_dir: Optional[str] = None,
    entity_dirs: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Generate the complete TypeScript file content for one structure.

    Raises:
        UnsupportedShapeError: a field is not a simple owned type
        UnresolvableTypeError: a field type has no TypeScript equivalent
    """
    typed_fields = [
        (f, registry.resolve(f.annotation, entity=structure.name, member=f.name))
        for f in structure.fields
    ]

    lines = [GENERATED_FILE_HEADER]

    imports = generate_imports(
        referenced_types=[ts_type for _, ts_type in typed_fields],
        registry=registry,
        self_name=structure.name,
        output_dir=resolve_output_dir(output_dir),
        entity_dirs=entity_dirs,
    )
    if imports:
        lines.extend(imports)
        lines.append("")

    lines.extend(_generate_interface(structure, typed_fields))
    lines.append("")
    lines.append(_generate_shape_constant(structure, typed_fields))

    return "\n".join(lines) + "\n"


def _generate_interface(structure: StructureDescriptor, typed_fields: List[Tuple[StructField, str]]) -> List[str]:
    lines = []

    if structure.docstring:
        lines.extend(_wrap_jsdoc(structure.docstring.splitlines()))

    lines.append(f"export interface {structure.name} {{")
    for f, ts_type in typed_fields:
        if f.description:
            lines.extend(_wrap_jsdoc(f.description.splitlines(), indent="  "))
        lines.append(f"  {_property_key(f.name)}: {ts_type};")
    lines.append("}")
    return lines


def _generate_shape_constant(structure: StructureDescriptor, typed_fields: List[Tuple[StructField, str]]) -> str:
    """export const UserShape = { id: "number", name: "string" } as const;"""
    const_name = f"{structure.name}{SHAPE_SUFFIX}"
    if not typed_fields:
        return f"export const {const_name} = {{}} as const;"

    entries = ", ".join(f"{_property_key(f.name)}: {json.dumps(ts_type)}" for f, ts_type in typed_fields)
    return f"export const {const_name} = {{ {entries} }} as const;"


def _property_key(name: str) -> str:
    """Quote property names that are not plain identifiers."""
    if _PLAIN_PROPERTY.match(name):
        return name
    return json.dumps(name)


def _wrap_jsdoc(parts: List[str], indent: str = "") -> List[str]:
    # "*/" inside the text would close the comment early
    parts = [part.replace("*/", "*\\/") for part in parts]
    if len(parts) == 1:
        return [f"{indent}/** {parts[0]} */"]

    lines = [f"{indent}/**"]
    for part in parts:
        lines.append(f"{indent} * {part}" if part.strip() else f"{indent} *")
    lines.append(f"{indent} */")
    return lines


def emit_structure_binding(
    structure: StructureDescriptor,
    output_dir: Optional[str] = None,
    registry: TypeRegistry = default_registry,
    writer: Callable[..., Path] = write_generated_file,
    entity_dirs: Optional[Mapping[str, str]] = None,
) -> Path:
    """Generate and write the binding for one structure."""
    content = generate_structure_binding(structure, registry, output_dir, entity_dirs)
    path = get_binding_path(structure.name, output_dir)
    return writer(path, content, entity=structure.name)
