# modal_router/config.py
# Description: Configuration management for modal_router.
#
# Imports
import copy
import os
import sys
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
#
# Third-Party Imports
import toml
from loguru import logger
#
#######################################################################################################################
#
# Functions:

# --- Path to the configuration file ---
CONFIG_PATH_ENV_VAR = "MODAL_ROUTER_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "modal_router" / "config.toml"

CONFIG_TOML_CONTENT = """
# Configuration for modal_router
[outlets]
# Modal outlet names are minted as <name_prefix><counter>. The activation
# guard only watches outlets whose name starts with this prefix.
name_prefix = "modal_"

[navigation]
skip_location_change = false
# When non-empty, primary-outlet parameter lookups read this fixed query
# parameter instead of the requested name.
primary_fallback_parameter = ""

[session]
# "memory" or "json"
backend = "memory"
path = ""

[logging]
level = "INFO"
file = ""
console = true
"""

DEFAULT_CONFIG_FROM_TOML: Dict[str, Any] = tomllib.loads(CONFIG_TOML_CONTENT)


def deep_merge_dicts(base: Dict, update: Dict) -> Dict:
    """Recursively merges update_dict into base_dict."""
    merged = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = deep_merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config_path() -> Path:
    """Return the config file path, honouring the MODAL_ROUTER_CONFIG override."""
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


# --- Primary Configuration Loading Logic ---
_CONFIG_CACHE: Optional[Dict[str, Any]] = None


def load_settings(config_path: Optional[Path] = None, force_reload: bool = False) -> Dict[str, Any]:
    """
    Loads settings from the TOML config file merged over the built-in defaults.

    A missing file is not an error: the defaults are returned. A file that
    cannot be decoded is logged and ignored.

    Args:
        config_path: Explicit path to read. Defaults to get_config_path().
        force_reload: If True, bypasses the cache and reloads from disk.

    Returns:
        Dictionary containing all configuration settings.
    """
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None and not force_reload and config_path is None:
        logger.debug("load_settings: Returning cached configuration (cache hit)")
        return _CONFIG_CACHE

    path = Path(config_path) if config_path is not None else get_config_path()
    loaded_config = copy.deepcopy(DEFAULT_CONFIG_FROM_TOML)

    if not path.exists():
        logger.info(f"Config file not found at {path}. Using internal defaults.")
    else:
        logger.info(f"Attempting to load config from: {path}")
        try:
            with open(path, "rb") as f:
                user_config_from_file = tomllib.load(f)
            loaded_config = deep_merge_dicts(loaded_config, user_config_from_file)
            logger.info(f"Successfully loaded and merged config from {path}")
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error decoding TOML config file {path}: {e}. Using internal defaults.")
        except OSError as e:
            logger.error(f"Could not read config file {path}: {e}. Using internal defaults.")

    if config_path is None:
        _CONFIG_CACHE = loaded_config
    logger.debug(f"load_settings returning config with top-level keys: {list(loaded_config.keys())}")
    return loaded_config


def get_setting(section: str, key: str, default: Any = None) -> Any:
    """Helper to get a specific setting from the loaded configuration."""
    config = load_settings()
    section_data = config.get(section)
    if isinstance(section_data, dict):
        return section_data.get(key, default)
    return default


def save_setting(section: str, key: str, value: Any, config_path: Optional[Path] = None) -> bool:
    """
    Saves a single setting to the user's TOML configuration file.

    Reads the file (or starts from an empty document), updates ``section.key``
    and writes the whole document back, then forces a reload of the cache.

    Returns:
        True on success, False if the file could not be written.
    """
    path = Path(config_path) if config_path is not None else get_config_path()
    current: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "rb") as f:
                current = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Refusing to overwrite undecodable config {path}: {e}")
            return False

    current.setdefault(section, {})[key] = value
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            toml.dump(current, f)
    except OSError as e:
        logger.error(f"Could not write setting {section}.{key} to {path}: {e}")
        return False

    logger.info(f"Saved setting {section}.{key} to {path}")
    load_settings(force_reload=True)
    return True


def _get_typed_value(data_dict: Dict, key: str, default: Any, target_type: type = str) -> Any:
    """Helper to get value from dict and cast to type, with logging for type errors."""
    value = data_dict.get(key, default)
    if value is None:
        return None
    try:
        if target_type == bool:
            if isinstance(value, bool):
                return value
            return str(value).lower() in ['true', '1', 't', 'y', 'yes']
        return target_type(value)
    except (ValueError, TypeError) as e:
        logger.warning(f"Config key '{key}' has value '{value}' which could not be converted to {target_type}. Using default: '{default}'. Error: {e}")
        return default


@dataclass
class RouterSettings:
    """Typed view over the loaded configuration."""

    outlet_prefix: str = "modal_"
    skip_location_change: bool = False
    primary_fallback_parameter: Optional[str] = None
    session_backend: str = "memory"
    session_path: Optional[Path] = None
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    log_console: bool = True

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'RouterSettings':
        """Build settings from a config dictionary (defaults to load_settings())."""
        if config is None:
            config = load_settings()
        outlets = config.get("outlets", {})
        navigation = config.get("navigation", {})
        session = config.get("session", {})
        logging_section = config.get("logging", {})

        prefix = _get_typed_value(outlets, "name_prefix", "modal_")
        if not prefix:
            logger.warning("Empty outlets.name_prefix in config; falling back to 'modal_'")
            prefix = "modal_"

        fallback = _get_typed_value(navigation, "primary_fallback_parameter", "")
        session_path = _get_typed_value(session, "path", "")
        log_file = _get_typed_value(logging_section, "file", "")

        return cls(
            outlet_prefix=prefix,
            skip_location_change=_get_typed_value(navigation, "skip_location_change", False, bool),
            primary_fallback_parameter=fallback or None,
            session_backend=_get_typed_value(session, "backend", "memory").lower(),
            session_path=Path(session_path).expanduser() if session_path else None,
            log_level=_get_typed_value(logging_section, "level", "INFO").upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
            log_console=_get_typed_value(logging_section, "console", True, bool),
        )

#
# End of config.py
#######################################################################################################################
