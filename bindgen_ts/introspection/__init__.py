"""
bindgen-ts introspection utilities - turn marked source objects into descriptors
"""

from .routes import commands_from_app, route_to_command
from .models import model_to_descriptor
from .functions import function_to_descriptor


__all__ = [
    'function_to_descriptor',
    'model_to_descriptor',
    'commands_from_app',
    'route_to_command',
]
