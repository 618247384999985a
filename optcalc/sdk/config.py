"""Configuration management for Option Calc.

Configuration is split into two files:

1. settings.json - Machine-specific, ephemeral settings
   - grant: path to grant.yaml (optional, if not colocated)
   - http_timeout_sec: per-request timeout for quote lookups

2. grant.yaml - The option grant being tracked
   - grant: stockSymbol, optionsCount, strikePrice, vestingPeriods,
     startDate, taxRate
   - fallbackPrice: price used when no quote can be fetched (optional)

Config directory resolution:
1. OPTION_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/option-calc/ (XDG_CONFIG_HOME fallback)

Grant file resolution:
1. settings.json "grant" key (if set via CLI)
2. grant.yaml in same config directory
"""

import json
import math
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .quotes import DEFAULT_TIMEOUT_SEC
from .schemas import GrantConfig


APP_NAME = "option-calc"
SETTINGS_FILENAME = "settings.json"
GRANT_FILENAME = "grant.yaml"

# Written by `option-calc config init`
DEFAULT_GRANT = {
    "grant": {
        "stockSymbol": "0700",
        "optionsCount": 50000,
        "strikePrice": 20,
        "vestingPeriods": 5,
        "startDate": "2022-09-01",
        "taxRate": 0.20,
    },
}


class ConfigError(Exception):
    """Base class for configuration problems."""
    pass


class ConfigNotFoundError(ConfigError):
    """Raised when no grant file is found."""
    pass


class GrantConfigError(ConfigError):
    """Raised when a grant file exists but its values are invalid."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. OPTION_CALC_CONFIG_PATH environment variable
    2. ~/.config/option-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("OPTION_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If the file is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {settings_file}: {e}") from e


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_http_timeout() -> float:
    """Per-request timeout for quote lookups, in seconds."""
    value = get_setting("http_timeout_sec", DEFAULT_TIMEOUT_SEC)
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"http_timeout_sec must be a number, got {value!r}")
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"http_timeout_sec must be positive, got {timeout}")
    return timeout


def get_grant_path(require_exists: bool = False) -> Path:
    """Get the path to the grant.yaml file.

    Resolution order:
    1. settings.json "grant" key (if set)
    2. grant.yaml in config directory

    Args:
        require_exists: If True, raises ConfigNotFoundError if not found

    Returns:
        Path to grant.yaml

    Raises:
        ConfigNotFoundError: If require_exists=True and no grant file found
    """
    config_dir = get_config_dir()

    custom_grant = get_setting("grant")
    if custom_grant:
        grant_path = Path(custom_grant).expanduser()
        if require_exists and not grant_path.exists():
            raise ConfigNotFoundError(
                f"Grant file not found at configured path: {grant_path}\n\n"
                f"Update with: option-calc config set-grant /path/to/grant.yaml"
            )
        return grant_path

    grant_path = config_dir / GRANT_FILENAME
    if require_exists and not grant_path.exists():
        raise ConfigNotFoundError(
            f"No grant file found. Checked:\n"
            f"  1. settings.json 'grant' key (not set)\n"
            f"  2. {grant_path} (not found)\n\n"
            f"Create one with: option-calc config init\n"
            f"Or set a custom path: option-calc config set-grant /path/to/grant.yaml"
        )

    return grant_path


def load_grant_file(path: Optional[Path] = None) -> dict:
    """Load the raw grant file as a dictionary.

    Args:
        path: Explicit grant file (resolved via get_grant_path() if omitted)

    Raises:
        ConfigNotFoundError: If the file does not exist
        GrantConfigError: If the file is not a YAML mapping
    """
    if path is None:
        path = get_grant_path(require_exists=True)
    else:
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigNotFoundError(f"Grant file not found: {path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise GrantConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise GrantConfigError(f"Grant file must be a YAML dictionary, got {type(data).__name__}")

    return data


def save_grant_file(data: dict, path: Optional[Path] = None) -> Path:
    """Save a grant file.

    Args:
        data: Grant file contents
        path: Optional custom path (uses default if not specified)

    Returns:
        Path to the saved grant file
    """
    if path is None:
        path = get_grant_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    return path


def _format_validation_error(e: ValidationError) -> str:
    lines = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "grant"
        lines.append(f"  {loc}: {err['msg']}")
    return "\n".join(lines)


def grant_from_dict(data: dict) -> GrantConfig:
    """Build a GrantConfig from the `grant` mapping of a grant file.

    Raises:
        GrantConfigError: If a value is missing or out of bounds
    """
    if not isinstance(data, dict):
        raise GrantConfigError(f"grant must be a mapping, got {type(data).__name__}")

    try:
        return GrantConfig.model_validate(data)
    except ValidationError as e:
        raise GrantConfigError(f"Invalid grant configuration:\n{_format_validation_error(e)}") from e


def load_grant_config(path: Optional[Path] = None) -> GrantConfig:
    """Load and validate the configured grant.

    Raises:
        ConfigNotFoundError: If no grant file exists
        GrantConfigError: If the grant section is missing or invalid
    """
    data = load_grant_file(path)
    if "grant" not in data:
        raise GrantConfigError("Grant file has no 'grant' section")
    return grant_from_dict(data["grant"])


def get_fallback_price(path: Optional[Path] = None) -> Optional[float]:
    """Return the grant file's fallbackPrice, or None when unset.

    Raises:
        GrantConfigError: If fallbackPrice is present but not a positive number
    """
    data = load_grant_file(path)
    value = data.get("fallbackPrice")
    if value is None:
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise GrantConfigError(f"fallbackPrice must be a number, got {value!r}")
    if not math.isfinite(price) or price <= 0:
        raise GrantConfigError(f"fallbackPrice must be positive, got {price}")
    return price
