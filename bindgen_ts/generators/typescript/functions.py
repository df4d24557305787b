"""
Command wrapper generation.

Generates one TypeScript async function per backend command. The wrapper
calls the invocation primitive with the command name and a shorthand
named-argument object, keeping parameters in declaration order.
"""

import logging
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Tuple

from bindgen_ts.core.config import resolve_output_dir
from bindgen_ts.core.schema import FunctionDescriptor
from bindgen_ts.core.writer import write_generated_file
from bindgen_ts.core.type_registry import TypeRegistry, default_registry
from bindgen_ts.core.constants import GENERATED_FILE_HEADER, GenerationPaths, InvokeRuntime
from .imports import generate_imports


logger = logging.getLogger(__name__)


def resolve_parameter_types(
    descriptor: FunctionDescriptor,
    registry: TypeRegistry = default_registry,
) -> List[Tuple[str, str]]:
    """Resolve (name, TypeScript type) for each parameter in declaration order."""
    return [
        (param.name, registry.resolve(param.annotation, entity=descriptor.name, member=param.name))
        for param in descriptor.parameters
    ]


def generate_function_signature(typed_params: List[Tuple[str, str]]) -> str:
    """'a: number, b: number' or an empty string."""
    return ", ".join(f"{name}: {ts_type}" for name, ts_type in typed_params)


def generate_argument_object(typed_params: List[Tuple[str, str]]) -> str:
    """'{ a, b }' shorthand object, '{}' when there are no parameters."""
    if not typed_params:
        return "{}"
    return "{ " + ", ".join(name for name, _ in typed_params) + " }"


def generate_function_binding(
    descriptor: FunctionDescriptor,
    registry: TypeRegistry = default_registry,
    output_dir: Optional[str] = None,
    entity_dirs: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Generate the complete TypeScript file content for one command.

    Layout: header comment, import block, blank line, wrapper declaration.
    ``output_dir`` and ``entity_dirs`` place structure imports relative to
    the wrapper; without them structures are imported from "./".

    Raises:
        UnsupportedShapeError: a parameter is not a simple owned type
        UnresolvableTypeError: a parameter type has no TypeScript equivalent
    """
    typed_params = resolve_parameter_types(descriptor, registry)

    imports = generate_imports(
        referenced_types=[ts_type for _, ts_type in typed_params],
        registry=registry,
        needs_runtime=True,
        output_dir=resolve_output_dir(output_dir),
        entity_dirs=entity_dirs,
    )

    name = descriptor.name
    signature = generate_function_signature(typed_params)
    arguments = generate_argument_object(typed_params)
    binding = (
        f"export async function {name}({signature}) "
        f"{{ return await {InvokeRuntime.INVOKE_FN}('{name}', {arguments}); }}"
    )

    lines = [GENERATED_FILE_HEADER, *imports, "", binding]
    return "\n".join(lines) + "\n"


def get_binding_path(name: str, output_dir: Optional[str]) -> Path:
    """{output_dir}/{name}.ts"""
    return Path(resolve_output_dir(output_dir)) / f"{name}{GenerationPaths.TYPESCRIPT_SUFFIX}"


def emit_function_binding(
    descriptor: FunctionDescriptor,
    output_dir: Optional[str] = None,
    registry: TypeRegistry = default_registry,
    writer: Callable[..., Path] = write_generated_file,
    entity_dirs: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Generate and write the binding for one command.

    Content is fully built before anything touches the filesystem, so a type
    failure leaves no file behind.

    Returns:
        Path of the written file
    """
    content = generate_function_binding(descriptor, registry, output_dir, entity_dirs)
    path = get_binding_path(descriptor.name, output_dir)
    return writer(path, content, entity=descriptor.name)
