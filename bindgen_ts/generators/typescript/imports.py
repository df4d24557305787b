# generators/typescript/imports.py
"""
bindgen-ts Import Generator

Builds the import block of a generated binding: the fixed invocation
primitive import for command wrappers, and type-only imports of exported
structures. A structure's module path is relative to the directory the
binding is written to, so entities and commands may live in different
output directories.
"""

import os
from pathlib import PurePath
from typing import Iterable, List, Mapping, Optional

from bindgen_ts.core.constants import InvokeRuntime
from bindgen_ts.core.type_registry import TypeRegistry


def generate_imports(
    referenced_types: Iterable[str],
    registry: TypeRegistry,
    needs_runtime: bool = False,
    self_name: str = "",
    output_dir: Optional[str] = None,
    entity_dirs: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """
    Generate import lines for a binding file.

    Args:
        referenced_types: Resolved TypeScript names used by the declaration
        registry: Registry used to tell exported structures from primitives
        needs_runtime: Whether to import the invocation primitive
        self_name: Name declared in this file, never imported
        output_dir: Resolved directory of the binding being generated
        entity_dirs: Resolved directory per structure name; structures missing
            here are assumed to share the binding's directory

    Returns:
        Import statements in a stable order, runtime import first
    """
    lines = []
    if needs_runtime:
        lines.append(InvokeRuntime.get_import_statement())

    entity_names = sorted({
        name for name in referenced_types
        if name != self_name and registry.is_entity_name(name)
    })
    entity_dirs = entity_dirs or {}
    for name in entity_names:
        module_path = get_module_path(output_dir, entity_dirs.get(name), name)
        lines.append(f'import type {{ {name} }} from "{module_path}";')

    return lines


def get_module_path(from_dir: Optional[str], to_dir: Optional[str], name: str) -> str:
    """
    Relative module specifier from one output directory to a binding in another.

    get_module_path("./commands", "./models", "User") -> "../models/User"
    """
    if from_dir is None or to_dir is None:
        return f"./{name}"

    relative = PurePath(os.path.relpath(to_dir, from_dir)).as_posix()
    if relative == ".":
        return f"./{name}"
    if relative != ".." and not relative.startswith("../"):
        relative = f"./{relative}"
    return f"{relative}/{name}"
