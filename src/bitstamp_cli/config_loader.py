from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import appdirs  # type: ignore[import-untyped]
import yaml  # type: ignore[import-untyped]

from bitstamp_cli.config_models import DEFAULT_API_VERSION, ApiConfig

CONFIG_ENV_VAR = "BITSTAMP_CLI_CONFIG"
CONFIG_FILENAME = "config.json"
UINT16_MAX = 65535

_KNOWN_KEYS = {
    "base_url",
    "api_version",
    "rate_limit_sec",
    "rate_limit_min",
    "timeout_ms",
    "client_id",
    "client_secret",
}

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the configuration file cannot be loaded or is invalid."""


def get_config_dir() -> Path:
    """
    Returns the OS-specific configuration directory for the CLI using appdirs.
    """
    return Path(appdirs.user_config_dir("bitstamp_cli"))


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """
    Picks the config file: explicit path, then $BITSTAMP_CLI_CONFIG, then
    ./config.json when present, then config.json in the user config directory.
    """
    if config_path is not None:
        return Path(config_path).expanduser()

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    local_path = Path.cwd() / CONFIG_FILENAME
    if local_path.exists():
        return local_path

    return get_config_dir() / CONFIG_FILENAME


def _read_document(path: Path) -> Any:
    try:
        with open(path, "r") as f:
            if path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f)
            return json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Could not read configuration file {path}: {e}") from e
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Configuration file {path} is not valid: {e}") from e


def _validated_url(value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError("base_url must be a string")
    try:
        parsed = urlparse(value)
        # port is parsed lazily and raises on a malformed or out-of-range value
        parsed.port
    except ValueError as e:
        raise ConfigError(f"base_url is not a valid URL: {value!r} ({e})") from e
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        raise ConfigError(f"base_url is not an absolute http(s) URL: {value!r}")
    if any(ch.isspace() for ch in parsed.hostname):
        raise ConfigError(f"base_url host contains whitespace: {value!r}")
    return value


def _validated_uint16(raw: Dict[str, Any], key: str, min_value: int = 0) -> int:
    if key not in raw:
        raise ConfigError(f"{key} is required")
    value = raw[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer")
    if not min_value <= value <= UINT16_MAX:
        raise ConfigError(f"{key} must be between {min_value} and {UINT16_MAX}")
    return value


def _optional_str(raw: Dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{key} must be a string")
    return value


def parse_config(raw: Any) -> ApiConfig:
    """
    Validates a parsed configuration document and builds an ApiConfig.
    """
    if not isinstance(raw, dict):
        raise ConfigError("Configuration document must be a mapping")

    if "base_url" not in raw:
        raise ConfigError("base_url is required")

    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        logger.warning(
            "Ignoring unknown configuration keys: %s",
            ", ".join(str(k) for k in unknown),
            extra={"event": "config_unknown_keys"},
        )

    api_version = raw.get("api_version", DEFAULT_API_VERSION)
    if not isinstance(api_version, str) or not api_version.strip():
        raise ConfigError("api_version must be a non-empty string")

    return ApiConfig(
        base_url=_validated_url(raw["base_url"]),
        api_version=api_version.strip(),
        rate_limit_sec=_validated_uint16(raw, "rate_limit_sec"),
        rate_limit_min=_validated_uint16(raw, "rate_limit_min"),
        # requests rejects a zero timeout
        timeout_ms=_validated_uint16(raw, "timeout_ms", min_value=1),
        client_id=_optional_str(raw, "client_id"),
        client_secret=_optional_str(raw, "client_secret"),
    )


def load_config(config_path: Optional[Path] = None) -> ApiConfig:
    """
    Loads the API configuration from the resolved location. Any problem is fatal
    and reported as ConfigError.
    """
    path = resolve_config_path(config_path)
    config = parse_config(_read_document(path))

    logger.info(
        "Loaded configuration",
        extra={
            "event": "config_loaded",
            "config_path": str(path),
            "base_url": config.base_url,
            "api_version": config.api_version,
        },
    )
    return config
