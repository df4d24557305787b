# core/config.py
"""
bindgen-ts Configuration Management

Resolves the output directory argument and loads the optional
bindgen.config.json project file.
"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List

from bindgen_ts.core.errors import ConfigError
from bindgen_ts.core.constants import GenerationPaths


__version__ = "0.3.0"

logger = logging.getLogger(__name__)


def get_version() -> str:
    return __version__


def resolve_output_dir(raw_argument: Optional[str]) -> str:
    """
    Normalize a raw output directory argument.

    Surrounding quote characters are stripped; an empty or missing argument
    falls back to "../src-gen". The result is not validated as a path, so a
    malformed directory surfaces later as a write failure.
    """
    if raw_argument is None:
        return GenerationPaths.DEFAULT_OUTPUT_DIR

    directory = raw_argument.strip().strip("\"'")
    if not directory:
        return GenerationPaths.DEFAULT_OUTPUT_DIR
    return directory


def pick_output_dir(entity_dir: Optional[str], run_dir: Optional[str]) -> str:
    """Entity-level directory wins over the run-level one, then the default."""
    if entity_dir is not None and entity_dir.strip().strip("\"'"):
        return resolve_output_dir(entity_dir)
    return resolve_output_dir(run_dir)


@dataclass
class OutputConfig:
    """Output configuration for generated files."""
    location: Optional[str] = None


@dataclass
class BindgenConfig:
    """Complete bindgen-ts configuration."""
    output: OutputConfig = field(default_factory=OutputConfig)
    modules: List[str] = field(default_factory=list)
    app: Optional[str] = None

    @property
    def output_dir(self) -> str:
        return resolve_output_dir(self.output.location)


def load_bindgen_config(project_root: Optional[str] = None, config_path: Optional[str] = None) -> BindgenConfig:
    """
    Load bindgen-ts configuration from bindgen.config.json.

    Args:
        project_root: Project root directory (defaults to current directory)
        config_path: Explicit config file; must exist when given

    Returns:
        BindgenConfig with loaded values, or defaults when no file exists

    Raises:
        ConfigError: explicit file missing, invalid JSON or invalid values
    """
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return _load_config_from_file(path)

    if project_root is None:
        project_root = str(Path.cwd())

    path = Path(project_root) / GenerationPaths.CONFIG_FILE
    if path.exists():
        return _load_config_from_file(path)

    logger.debug(f"No {GenerationPaths.CONFIG_FILE} in {project_root}, using defaults")
    return BindgenConfig()


def _load_config_from_file(config_path: Path) -> BindgenConfig:
    """Load configuration from existing file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config from {config_path}: {e}") from e

    config = _validate_and_convert_config(config_data, config_path)
    logger.info(f"Loaded bindgen-ts config from {config_path}")
    return config


def _validate_and_convert_config(config_data: Dict[str, Any], source: Path) -> BindgenConfig:
    """Validate and convert raw config data to BindgenConfig object."""
    if not isinstance(config_data, dict):
        raise ConfigError(f"{source}: top level must be an object")

    output_data = config_data.get("output", {})
    if not isinstance(output_data, dict):
        raise ConfigError(f"{source}: 'output' must be an object")

    location = output_data.get("location")
    if location is not None and not isinstance(location, str):
        raise ConfigError(f"{source}: 'output.location' must be a string")

    modules = config_data.get("modules", [])
    if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
        raise ConfigError(f"{source}: 'modules' must be a list of module paths")

    app = config_data.get("app")
    if app is not None and (not isinstance(app, str) or ":" not in app):
        raise ConfigError(f"{source}: 'app' must look like 'package.module:attribute'")

    return BindgenConfig(
        output=OutputConfig(location=location),
        modules=modules,
        app=app,
    )
