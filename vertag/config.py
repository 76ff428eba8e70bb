#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import toml
import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("vertag")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
ENV_PREFIX = "VERTAG_"
CONFIG_ENV = "VERTAG_CONFIG"


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. VERTAG_CONFIG environment variable
    2. ~/.vertag/ directory
    """
    # Check for environment variable override
    if CONFIG_ENV in os.environ:
        path = Path(os.environ[CONFIG_ENV]).expanduser()
        if path.exists():
            return path

    vertag_dir = Path.home() / '.vertag'
    for filename in CONFIG_FILENAMES:
        path = vertag_dir / filename
        if path.exists() and path.stat().st_size > 0:
            return path

    # If no file exists, return default path for saving
    return vertag_dir / 'config.json'


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                # Default to JSON format
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            # Merge file config with defaults
            config = merge_configs(config, file_config)
        except Exception as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def save_config(config, config_path=None):
    """Save configuration to file, in the format its suffix names.

    Raises:
        ConfigError: If the file cannot be written
    """
    config_path = Path(config_path) if config_path else get_config_path()
    suffix = config_path.suffix.lower()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            if suffix == '.toml':
                # tomllib is read-only
                toml.dump(config, f)
            elif suffix in ('.yaml', '.yml'):
                yaml.safe_dump(config, f, default_flow_style=False)
            else:
                json.dump(config, f, indent=2)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot write configuration to {config_path}: {e}") from e

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def get_default_config():
    """Get default configuration."""
    return {
        "general": {
            "repository": ".",        # Repository the tags are read from and written to
            "interactive": True,      # Prompt for missing module/channel/commit
            "history_limit": 10,      # Commits offered by the commit picker
        },
        "versioning": {
            "policy": "capped",       # capped (1.2.9 -> 1.3.0) or unbounded (1.2.9 -> 1.2.10)
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        },
    }


def configure_logging(config, debug=False):
    """Apply the logging section of the configuration."""
    settings = config.get("logging", {})
    level_name = "DEBUG" if debug else str(settings.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    fmt = settings.get("format")
    if fmt:
        for handler in root.handlers:
            handler.setFormatter(logging.Formatter(fmt))


def merge_configs(base_config, override_config):
    """Merge ``override_config`` into a copy of ``base_config``, section by section."""
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = merge_configs(current, value)
        merged[key] = value
    return merged


def _env_value(value):
    lowered = value.lower()
    if lowered in ('true', 'yes', 'on'):
        return True
    if lowered in ('false', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config):
    """
    Override single settings from VERTAG_<SECTION>_<KEY> variables.

    Section names never contain underscores, so the first one splits
    section from key: VERTAG_GENERAL_HISTORY_LIMIT=20 sets
    general.history_limit. Only existing keys are overridden.
    """
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX) or env_key == CONFIG_ENV:
            continue

        section, _, key = env_key[len(ENV_PREFIX):].lower().partition('_')
        settings = config.get(section)
        if isinstance(settings, dict) and key in settings:
            settings[key] = _env_value(value)
        else:
            logger.debug(f"Ignoring unknown setting {env_key}")

    return config
