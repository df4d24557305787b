"""
FastAPI Route Introspection

Backends that serve their commands from a local FastAPI app can export
every user-defined route endpoint as a command. FastAPI's dependant
analysis decides which parameters the caller supplies: path, query and
body parameters are kept, while requests, background tasks, headers,
cookies and dependencies are left to the backend.
"""

import logging
from typing import List

from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.dependencies.utils import get_dependant

from bindgen_ts.core.registry import ExportedCommand


logger = logging.getLogger(__name__)

_SYSTEM_PREFIXES = ('fastapi.', 'starlette.')


def commands_from_app(app: FastAPI) -> List[ExportedCommand]:
    """
    Collect user-defined API routes of a FastAPI app as exported commands.

    Returns:
        ExportedCommand per route endpoint, in route registration order
    """
    commands = []
    for route in app.routes:
        if isinstance(route, APIRoute) and _is_user_defined_route(route):
            commands.append(route_to_command(route))

    logger.debug(f"Collected {len(commands)} commands from FastAPI app")
    return commands


def route_to_command(route: APIRoute) -> ExportedCommand:
    """Convert one APIRoute to an ExportedCommand limited to client parameters."""
    dependant = get_dependant(path=route.path_format, call=route.endpoint)

    client_params = []
    for model_field in dependant.path_params + dependant.query_params + dependant.body_params:
        client_params.append(model_field.name)

    return ExportedCommand(func=route.endpoint, include=client_params)


def _is_user_defined_route(route: APIRoute) -> bool:
    """Determine if route is user-defined using module-based filtering."""
    endpoint = route.endpoint

    if (not endpoint or not callable(endpoint) or
        not hasattr(endpoint, '__name__') or endpoint.__name__ == '<lambda>' or
        not hasattr(endpoint, '__module__') or not route.methods):
        return False

    if any(endpoint.__module__.startswith(prefix) for prefix in _SYSTEM_PREFIXES):
        return False

    return True
