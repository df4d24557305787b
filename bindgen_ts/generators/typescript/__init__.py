"""
TypeScript code generation for bindgen-ts
"""

# Command wrappers
from .functions import generate_function_binding, emit_function_binding

# Structure interfaces
from .interfaces import generate_structure_binding, emit_structure_binding

# Utilities
from .imports import generate_imports

__all__ = [
    'generate_function_binding',
    'emit_function_binding',
    'generate_structure_binding',
    'emit_structure_binding',
    'generate_imports',
]
