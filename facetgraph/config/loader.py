"""Layered TOML configuration for facetgraph.

Layers are read in order and merged table by table:

1. config/default.toml (required)
2. config/{FACETGRAPH_ENV}.toml (optional)

The [engine] and [service] tables of each layer are validated on their own,
so a bad threshold is reported against the file that set it instead of
surfacing later as an anonymous settings error.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from facetgraph.config.models.engine import EngineConfig
from facetgraph.config.models.service import ServiceConfig
from facetgraph.exceptions import ConfigurationError

CONFIG_DIR_VAR = "FACETGRAPH_CONFIG_DIR"
ENVIRONMENT_VAR = "FACETGRAPH_ENV"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_LAYER = "default.toml"

# Tables checked per layer; partial tables are fine, every field has a default
SECTION_MODELS: dict[str, type[BaseModel]] = {
    "engine": EngineConfig,
    "service": ServiceConfig,
}


def find_config_dir(start: Path | None = None) -> Path:
    """Locate the directory holding default.toml.

    FACETGRAPH_CONFIG_DIR wins when set. Otherwise walks up from `start`
    (default: the working directory) to the first `config/default.toml`.

    Raises:
        ConfigurationError: If FACETGRAPH_CONFIG_DIR is not a directory
    """
    override = os.environ.get(CONFIG_DIR_VAR)
    if override:
        path = Path(override)
        if not path.is_dir():
            raise ConfigurationError(f"{CONFIG_DIR_VAR} is not a directory: {override}", path)
        return path

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "config"
        if (candidate / DEFAULT_LAYER).is_file():
            return candidate
    return Path("config")


def environment_name() -> str:
    """Environment layer to apply, from FACETGRAPH_ENV."""
    return os.environ.get(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)


def read_layer(path: Path) -> dict[str, Any]:
    """Parse one TOML layer and validate its known tables.

    Raises:
        ConfigurationError: If the file is not valid TOML or a known table
            holds a value its model rejects
    """
    try:
        with path.open("rb") as f:
            values = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"{path.name}: {exc}", path) from exc

    for section, model in SECTION_MODELS.items():
        if section not in values:
            continue
        try:
            model.model_validate(values[section])
        except ValidationError as exc:
            error = exc.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ConfigurationError(
                f"{path.name} [{section}] {field}: {error['msg']}", path
            ) from exc
    return values


def merge_layers(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge a later layer over an earlier one.

    Tables merge recursively; any other value, facet lists included, is
    replaced wholesale. Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge_layers(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> dict[str, Any]:
    """Read and merge the configuration layers.

    Args:
        config_dir: Directory holding the layers (default: find_config_dir())
        environment: Environment layer name (default: environment_name())

    Returns:
        Merged configuration, ready for the Settings TOML source

    Raises:
        ConfigurationError: If default.toml is missing or a layer is invalid
    """
    config_dir = config_dir or find_config_dir()
    environment = environment or environment_name()

    default_path = config_dir / DEFAULT_LAYER
    if not default_path.is_file():
        raise ConfigurationError(
            f"{DEFAULT_LAYER} not found in {config_dir}; set {CONFIG_DIR_VAR}", default_path
        )

    config = read_layer(default_path)
    env_path = config_dir / f"{environment}.toml"
    if env_path.is_file():
        config = merge_layers(config, read_layer(env_path))
    return config
