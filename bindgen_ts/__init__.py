"""
bindgen-ts - TypeScript bindings for desktop-application backend commands
"""

def _check_dependencies():
    """Check for required dependencies"""
    missing = []

    try:
        import pydantic
    except ImportError:
        missing.append("pydantic")

    try:
        import fastapi
    except ImportError:
        missing.append("fastapi")

    if missing:
        deps = " and ".join(missing)
        raise ImportError(
            f"bindgen-ts requires {deps} to be installed.\n"
            f"Install with: pip install {' '.join(missing)}"
        )

# Check dependencies on import
_check_dependencies()

# Import main API only after dependency check
from .core.config import get_version, resolve_output_dir
from .core.registry import command, entity, dump_entity, load_entity, ExportRegistry
from .core.type_registry import TypeRegistry, default_registry
from .core.integrator import generate, generate_only
from .core.errors import (
    BindgenError,
    UnsupportedShapeError,
    UnresolvableTypeError,
    BindingWriteError,
    ConfigError,
)

__version__ = get_version()

__all__ = [
    # Decorators
    'command',
    'entity',

    # Main functions
    'generate',
    'generate_only',
    'resolve_output_dir',
    'dump_entity',
    'load_entity',

    # Registries
    'ExportRegistry',
    'TypeRegistry',
    'default_registry',

    # Errors
    'BindgenError',
    'UnsupportedShapeError',
    'UnresolvableTypeError',
    'BindingWriteError',
    'ConfigError',

    # Version
    '__version__'
]
