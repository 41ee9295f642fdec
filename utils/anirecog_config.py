"""
Configuration utilities for loading, parsing, and writing AniRecog config files.
"""
import configparser
import logging
from pathlib import Path
from typing import Dict, Any, Union
from utils.config.config_normalizer import ConfigNormalizer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./config/anirecog_config.ini"

ConfigType = Union[configparser.ConfigParser, Dict[str, Dict[str, Any]]]


def load_configuration(path: str, normalize: bool = True) -> ConfigType:
    """
    Load the configuration file with optional normalization.

    A missing file is not an error: every setting has a default, so an
    empty configuration is returned.

    Args:
        path (str): Path to the configuration file.
        normalize (bool): Whether to apply configuration normalization and environment overrides.

    Returns:
        Union[configparser.ConfigParser, Dict]: Loaded configuration parser or normalized dict.
    """
    parser = configparser.ConfigParser()
    read_files = parser.read(path, encoding="utf-8")
    if not read_files:
        logger.info(f"Configuration file not found, using defaults: {path}")

    if normalize:
        normalized_config = ConfigNormalizer().normalize_and_override(parser)
        logger.debug(f"Configuration loaded and normalized from: {path}")
        return normalized_config
    return parser


def write_temp_config(config_dict: dict, tmp_path: str) -> Path:
    """
    Write a temporary config.ini file from a dictionary of config sections.

    Args:
        config_dict (dict): Dictionary of config sections and values.
        tmp_path (str): Path to temporary directory.

    Returns:
        Path: Path to the written config file.
    """
    config = configparser.ConfigParser()
    for section, values in config_dict.items():
        config[section] = values

    config_path = Path(tmp_path) / "test_anirecog_config.ini"
    with open(config_path, "w") as f:
        config.write(f)

    return config_path


def get_config_section(config: ConfigType, section_name: str) -> Dict[str, Any]:
    """
    Get a configuration section with case-insensitive lookup.

    Args:
        config: Configuration object (ConfigParser or normalized dict)
        section_name: Configuration section name

    Returns:
        Dict[str, Any]: Copy of the section data, keys lowercased

    Raises:
        ValueError: If the section is not found
        TypeError: If config is not a supported type
    """
    if config is None:
        raise ValueError("Configuration object cannot be None")
    if not isinstance(section_name, str) or not section_name.strip():
        raise ValueError("Section name must be a non-empty string")

    canonical_name = ConfigNormalizer().canonical_section(section_name.strip())

    if isinstance(config, dict):
        sections = config
    elif isinstance(config, configparser.ConfigParser):
        sections = {name.lower(): dict(config[name]) for name in config.sections()}
    else:
        raise TypeError(f"Unsupported configuration type: {type(config)}")

    if canonical_name in sections:
        return {key.lower(): value for key, value in sections[canonical_name].items()}
    available_sections = sorted(sections.keys())
    raise ValueError(
        f"Configuration section '{section_name}' not found. "
        f"Available sections: {available_sections}"
    )


def get_config_value(
    config: ConfigType,
    section: str,
    key: str,
    fallback: Any = None,
    value_type: type = str
) -> Any:
    """
    Get a configuration value with case-insensitive lookup and type conversion.

    Args:
        config: Configuration object (ConfigParser or normalized dict)
        section: Configuration section name
        key: Configuration key name
        fallback: Default value if not found
        value_type: Type to convert the value to (str, int, float, bool)

    Returns:
        Configuration value converted to specified type or fallback

    Raises:
        ValueError: If the value cannot be converted and there is no fallback
    """
    if config is None:
        return fallback
    if not isinstance(key, str) or not key.strip():
        raise ValueError("Key name must be a non-empty string")

    try:
        section_data = get_config_section(config, section)
    except ValueError:
        return fallback

    value = section_data.get(key.strip().lower())
    if value is None or (isinstance(value, str) and not value.strip()):
        return fallback

    try:
        if value_type == bool and isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on', 'enabled')
        return value_type(value)
    except (ValueError, TypeError) as e:
        if fallback is not None:
            logger.warning(
                f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}. "
                f"Using fallback: {fallback}"
            )
            return fallback
        raise ValueError(
            f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}"
        ) from e
