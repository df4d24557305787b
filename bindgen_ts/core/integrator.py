"""
bindgen-ts Generation Integrator

Runs the two generation pipelines over every exported structure and
command. Emitters abort per entity; this is the calling context that
records each failure and carries on with the remaining entities, unless
asked to stop at the first one.
"""

import sys
import logging
import importlib
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from fastapi import FastAPI

from bindgen_ts.core.errors import BindgenError, ConfigError
from bindgen_ts.core.config import pick_output_dir
from bindgen_ts.core.writer import write_generated_file
from bindgen_ts.core.registry import ExportRegistry, ExportedCommand, default_exports
from bindgen_ts.core.schema import GeneratedFile, GenerationFailure, GenerationReport
from bindgen_ts.introspection.routes import commands_from_app
from bindgen_ts.introspection.models import model_to_descriptor
from bindgen_ts.introspection.functions import function_to_descriptor
from bindgen_ts.generators.typescript.functions import emit_function_binding
from bindgen_ts.generators.typescript.interfaces import emit_structure_binding


logger = logging.getLogger(__name__)


def generate(
    exports: Optional[ExportRegistry] = None,
    out: Optional[str] = None,
    extra_commands: Iterable[ExportedCommand] = (),
    write: bool = True,
    fail_fast: bool = False,
    verbose: bool = False,
) -> GenerationReport:
    """
    Generate TypeScript bindings for all exported entities.

    Args:
        exports: Registry of marked commands and entities (defaults to the global one)
        out: Run-level raw output directory; entity decorators take precedence
        extra_commands: Additional commands, e.g. collected from a FastAPI app
        write: Write files to disk; False only renders them
        fail_fast: Re-raise the first entity failure instead of recording it
        verbose: Enable detailed logging output

    Returns:
        GenerationReport listing rendered files and failed entities
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

    exports = exports if exports is not None else default_exports
    report = GenerationReport()
    writer = _recording_writer(report, write)

    entities = list(exports.entities.values())
    entity_dirs = {exported.name: pick_output_dir(exported.out_dir, out) for exported in entities}

    for exported in entities:
        def emit_entity(exported=exported):
            structure = model_to_descriptor(exported.cls, out_dir=exported.out_dir)
            output_dir = pick_output_dir(structure.out_dir, out)
            emit_structure_binding(
                structure, output_dir, registry=exports.types, writer=writer, entity_dirs=entity_dirs,
            )

        _run_entity(exported.name, emit_entity, report, fail_fast)

    for exported in [*exports.commands.values(), *extra_commands]:
        def emit_command(exported=exported):
            descriptor = function_to_descriptor(
                exported.func,
                out_dir=exported.out_dir,
                skip=exported.skip,
                include=exported.include,
            )
            output_dir = pick_output_dir(descriptor.out_dir, out)
            emit_function_binding(
                descriptor, output_dir, registry=exports.types, writer=writer, entity_dirs=entity_dirs,
            )

        _run_entity(exported.name, emit_command, report, fail_fast)

    logger.info(f"Generation complete: {len(report.written)} files, {len(report.failures)} failures")
    return report


def generate_only(exports: Optional[ExportRegistry] = None, out: Optional[str] = None, **options) -> GenerationReport:
    """Convenience function to render bindings without writing to disk."""
    return generate(exports=exports, out=out, write=False, **options)


def _run_entity(name: str, emit: Callable[[], None], report: GenerationReport, fail_fast: bool):
    try:
        emit()
    except BindgenError as e:
        if fail_fast:
            raise
        logger.error(str(e))
        report.failures.append(GenerationFailure(entity=name, error=e))


def _recording_writer(report: GenerationReport, write: bool) -> Callable[..., Path]:
    """File Writer that also records what was rendered."""
    def writer(path, content: str, entity: Optional[str] = None) -> Path:
        if write:
            path = write_generated_file(path, content, entity=entity)
        report.written.append(GeneratedFile(entity=entity or "", path=Path(path), content=content))
        return Path(path)
    return writer


# === SOURCE LOADING === #

def import_modules(modules: Iterable[str], project_root: Optional[str] = None) -> List[str]:
    """
    Import modules so their @command / @entity decorators register exports.

    The project root is put on sys.path first, as an application server does
    for its app directory.

    Raises:
        ConfigError: a module cannot be imported or fails while executing
    """
    _ensure_on_path(project_root)
    importlib.invalidate_caches()

    imported = []
    for module_name in modules:
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigError(f"Cannot import module '{module_name}': {e}") from e
        except Exception as e:
            # SyntaxError, or a decorator rejecting a marked object
            raise ConfigError(f"Error while importing module '{module_name}': {type(e).__name__}: {e}") from e
        imported.append(module_name)
        logger.debug(f"Imported {module_name}")
    return imported


def load_app_commands(app_path: str, project_root: Optional[str] = None) -> List[ExportedCommand]:
    """
    Load a FastAPI app from 'package.module:attribute' and collect its route commands.

    Raises:
        ConfigError: the path is malformed, missing, or not a FastAPI app
    """
    module_name, _, attribute = app_path.partition(":")
    if not module_name or not attribute:
        raise ConfigError(f"App path must look like 'package.module:attribute', got '{app_path}'")

    import_modules([module_name], project_root)
    module = sys.modules[module_name]

    app = getattr(module, attribute, None)
    if not isinstance(app, FastAPI):
        raise ConfigError(f"'{app_path}' is not a FastAPI application")

    return commands_from_app(app)


def _ensure_on_path(project_root: Optional[str]):
    root = str(Path(project_root or Path.cwd()).resolve())
    if root not in sys.path:
        sys.path.insert(0, root)
