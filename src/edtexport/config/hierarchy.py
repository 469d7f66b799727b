"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.edtexport/config.yaml)
  3. Project config   (./edtexport.yaml)
  4. Environment variables (EDTEXPORT_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from edtexport.config.defaults import get_defaults
from edtexport.config.schema import ExportConfig
from edtexport.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".edtexport" / "config.yaml"
_PROJECT_CONFIG_NAME = "edtexport.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "EDTEXPORT_URL": "url_template",
    "EDTEXPORT_TOKEN": "token",
    "EDTEXPORT_TIMEOUT": "timeout_seconds",
    "EDTEXPORT_CACHE_DIR": "cache_dir",
    "EDTEXPORT_CACHE_FOLDER": "cache_folder",
    "EDTEXPORT_CACHE_FILE": "cache_file",
    "EDTEXPORT_EXPIRATION_SECONDS": "expiration_seconds",
    "EDTEXPORT_IDENTITY_HEADER": "identity_header",
    "EDTEXPORT_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "timeout_seconds": float,
    "expiration_seconds": float,
    "cache_dir": Path,
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments (highest priority)
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def load_export_config(**runtime_overrides: Any) -> ExportConfig:
    """Resolve the hierarchy and validate it into an ExportConfig."""
    merged = load_config_hierarchy(**runtime_overrides)
    known = {k: v for k, v in merged.items() if k in ExportConfig.model_fields}
    unknown = sorted(set(merged) - set(known))
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    try:
        return ExportConfig(**known)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except Exception as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for edtexport.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read EDTEXPORT_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value
