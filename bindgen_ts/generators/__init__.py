"""
bindgen-ts code generators - language-specific generation utilities
"""

from .typescript import (
    generate_function_binding as ts_function,
    generate_structure_binding as ts_structure,
    emit_function_binding as emit_ts_function,
    emit_structure_binding as emit_ts_structure,
)

__all__ = [
    'ts_function',
    'ts_structure',
    'emit_ts_function',
    'emit_ts_structure',
]
