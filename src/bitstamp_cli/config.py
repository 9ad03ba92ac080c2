from __future__ import annotations

# Re-export loader helpers
from .config_loader import (
    CONFIG_ENV_VAR,
    ConfigError,
    get_config_dir,
    load_config,
    parse_config,
    resolve_config_path,
)

# Re-export config models
from .config_models import DEFAULT_API_VERSION, ApiConfig

__all__ = [
    # models
    "ApiConfig",
    "DEFAULT_API_VERSION",
    # loader
    "CONFIG_ENV_VAR",
    "ConfigError",
    "get_config_dir",
    "load_config",
    "parse_config",
    "resolve_config_path",
]
