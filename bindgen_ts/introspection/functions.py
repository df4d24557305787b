"""
Command Function Introspection

Converts a marked backend function into a FunctionDescriptor using its
signature and resolved type hints. Only plain named parameters with an
annotation and no default are representable.
"""

import inspect
import typing
from typing import Callable, Optional, Sequence, Iterable

from bindgen_ts.core.errors import UnsupportedShapeError, UnresolvableTypeError
from bindgen_ts.core.schema import FunctionDescriptor, Parameter


_UNSUPPORTED_KINDS = {
    inspect.Parameter.VAR_POSITIONAL: "*args",
    inspect.Parameter.VAR_KEYWORD: "**kwargs",
}


def function_to_descriptor(
    func: Callable,
    out_dir: Optional[str] = None,
    skip: Sequence[str] = (),
    include: Optional[Iterable[str]] = None,
) -> FunctionDescriptor:
    """
    Extract a FunctionDescriptor from a Python function.

    Args:
        func: Backend command function
        out_dir: Raw directory argument to carry on the descriptor
        skip: Parameter names the backend injects itself
        include: When given, only these parameter names are kept

    Returns:
        FunctionDescriptor with parameters in declaration order

    Raises:
        UnsupportedShapeError: variadic, defaulted or unannotated parameter
        UnresolvableTypeError: an annotation cannot be evaluated
    """
    name = func.__name__
    signature = inspect.signature(func)
    type_hints = _get_type_hints(func, name)
    keep = set(include) if include is not None else None

    parameters = []
    for param in signature.parameters.values():
        if param.name in skip:
            continue
        if keep is not None and param.name not in keep:
            continue

        if param.kind in _UNSUPPORTED_KINDS:
            raise UnsupportedShapeError.for_member(name, param.name, _UNSUPPORTED_KINDS[param.kind])

        if param.default is not inspect.Parameter.empty:
            raise UnsupportedShapeError.for_member(
                name, param.name,
                "default values are not supported; remove the default or list the parameter in skip=",
            )

        if param.name not in type_hints:
            raise UnsupportedShapeError.for_member(name, param.name, "missing type annotation")

        parameters.append(Parameter(name=param.name, annotation=type_hints[param.name]))

    return FunctionDescriptor(
        name=name,
        parameters=parameters,
        out_dir=out_dir,
        docstring=inspect.getdoc(func),
    )


def _get_type_hints(func: Callable, name: str) -> dict:
    """Resolve string annotations; failures name the command."""
    try:
        return typing.get_type_hints(func)
    except NameError as e:
        raise UnresolvableTypeError(f"'{name}': cannot evaluate annotation: {e}", entity=name) from e
