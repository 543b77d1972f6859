#!/usr/bin/env python3
import logging
import yaml
from pathlib import Path
from dataclasses import dataclass, fields
from typing import Dict, Optional

# local
from config.constants import DEFAULT_CONFIG, USER_CONFIG, DEFAULT_SETTINGS


@dataclass(frozen=True)
class Settings:
    icons: bool = True
    image: Optional[Path] = None
    art: Optional[Path] = None
    figlet: Optional[str] = None
    figlet_font: str = DEFAULT_SETTINGS["figlet_font"]
    image_fallback: bool = False
    debug: bool = False


def load_yaml_config(config_path: Path, logger: logging.Logger = None) -> Dict:
    """
    Loads a YAML configuration file and returns the contents as a dictionary.
    If the file doesn't exist or fails to load, logs an error and returns an empty dict.

    :param config_path: The path to the YAML configuration file.
    :param logger: An optional logger to use for logging messages.
    :return: The configuration as a dict, or {} on failure.
    """
    if logger is None:
        logger = logging.getLogger("config_utils:load_yaml_config")
    if not config_path.exists():
        logger.critical(f"Config file NOT FOUND at {config_path}")
        return {}
    try:
        with open(config_path, "r") as f:
            loaded_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.critical(f"Failed to load config: {config_path}: {e}")
        return {}
    if not isinstance(loaded_data, dict):
        logger.critical(f"Config {config_path} is not a mapping, ignoring it")
        return {}
    logger.info(f"Successfully loaded config: {config_path}")
    return loaded_data


def resolve_config_path(explicit: Optional[Path] = None) -> Path:
    """
    Picks the config file for this run: an explicit --config path wins,
    then the per-user file, then the packaged default.
    """
    if explicit is not None:
        return Path(explicit).expanduser()
    if USER_CONFIG.exists():
        return USER_CONFIG
    return DEFAULT_CONFIG


def _as_path(value) -> Optional[Path]:
    if value in (None, ""):
        return None
    return Path(str(value)).expanduser()


def _as_bool(key: str, value, logger: logging.Logger) -> bool:
    if isinstance(value, bool):
        return value
    logger.warning(f"Config key {key} expects true or false, got {value!r}; using {DEFAULT_SETTINGS[key]}")
    return DEFAULT_SETTINGS[key]


def build_settings(file_config: Dict, overrides: Optional[Dict] = None) -> Settings:
    """
    Merges defaults, the YAML file and command line overrides (in that
    order) into a Settings object. Override values of None are ignored so
    unset CLI flags never mask the file.

    :param file_config: Mapping loaded from the YAML file.
    :param overrides: Mapping of CLI values keyed like the YAML file.
    :return: Settings for the run.
    """
    logger = logging.getLogger("config_utils:build_settings")
    merged = dict(DEFAULT_SETTINGS)
    known = {f.name for f in fields(Settings)}
    for key, value in file_config.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        merged[key] = value
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    settings = Settings(
        icons=_as_bool("icons", merged["icons"], logger),
        image=_as_path(merged["image"]),
        art=_as_path(merged["art"]),
        figlet=merged["figlet"] or None,
        figlet_font=merged["figlet_font"] or DEFAULT_SETTINGS["figlet_font"],
        image_fallback=_as_bool("image_fallback", merged["image_fallback"], logger),
        debug=_as_bool("debug", merged["debug"], logger),
    )
    logger.debug(f"Resolved settings: {settings}")
    return settings


def load_settings(config_path: Optional[Path] = None, overrides: Optional[Dict] = None) -> Settings:
    path = resolve_config_path(config_path)
    return build_settings(load_yaml_config(path), overrides)
