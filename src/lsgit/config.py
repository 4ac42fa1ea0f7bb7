"""Configuration management for lsgit."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import COLOR_MODES, CONFIG_FILENAME

DEFAULT_CONFIG: Dict[str, Any] = {
    "time_format": "%d-%m-%Y %H:%M",
    "color": "auto",
    "icons": True,
    "ignore_patterns": [],
}


def validate_config(config: Dict) -> bool:
    """Basic structural check for configuration.
    
    Args:
        config: Configuration dictionary to validate
        
    Returns:
        True if config has valid structure, False otherwise
    """
    if not isinstance(config, dict):
        return False

    if "time_format" in config and not isinstance(config["time_format"], str):
        return False

    if "color" in config and config["color"] not in COLOR_MODES:
        return False

    if "icons" in config and not isinstance(config["icons"], bool):
        return False

    patterns = config.get("ignore_patterns", [])
    if not isinstance(patterns, list):
        return False
    if not all(isinstance(p, str) for p in patterns):
        return False

    return True


def config_search_paths(root_path: Path) -> List[Path]:
    """Return the candidate config file locations, most specific first."""
    return [root_path / CONFIG_FILENAME, Path.home() / CONFIG_FILENAME]


def load_config(
    root_path: Path,
    logger: Optional[logging.Logger] = None
) -> Dict[str, Any]:
    """Load the configuration file merged over the defaults.

    The first existing file from :func:`config_search_paths` is used. The
    file is never created or rewritten.

    Args:
        root_path: Directory being listed; searched before the home directory.
        logger: Optional logger instance.

    Returns:
        The merged configuration dictionary.
    """
    config = DEFAULT_CONFIG.copy()
    config["ignore_patterns"] = list(DEFAULT_CONFIG["ignore_patterns"])

    if not root_path.is_dir():
        root_path = root_path.parent

    for config_path in config_search_paths(root_path):
        if not config_path.is_file():
            continue

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)
        except (OSError, ValueError) as e:
            if logger:
                logger.warning(f"Failed to read config {config_path}: {e}")
            return config

        if not validate_config(loaded_config):
            if logger:
                logger.warning(f"Config file {config_path} has invalid structure, using defaults")
            return config

        config.update(loaded_config)
        if logger and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Loaded config from {config_path}")
        return config

    return config
