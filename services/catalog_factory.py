"""
This module provides a factory for creating catalog providers based on configuration.
"""
import logging
from typing import Dict, Any
from services.catalog_implementations.catalog_interface import CatalogInterface
from services.catalog_implementations.memory_catalog import MemoryCatalog
from services.catalog_implementations.json_catalog import JsonCatalog
from utils.anirecog_config import get_config_value

logger = logging.getLogger(__name__)


def create_catalog(config: Dict[str, Any]) -> CatalogInterface:
    """
    Create and return the catalog provider named in the [catalog] section.

    Args:
        config (Dict[str, Any]): Normalized configuration dictionary.

    Returns:
        CatalogInterface: An empty MemoryCatalog, or a JsonCatalog over [catalog] path.

    Raises:
        ValueError: If the catalog type is not supported or a JSON catalog has no path.
    """
    catalog_type = get_config_value(config, "catalog", "type", fallback="memory").lower()

    if catalog_type == "memory":
        return MemoryCatalog()

    elif catalog_type == "json":
        path = get_config_value(config, "catalog", "path")
        if not path:
            raise ValueError("JSON catalog requires [catalog] path")
        logger.info(f"Using JSON catalog at {path}")
        return JsonCatalog(path)

    else:
        raise ValueError(f"Unsupported catalog type: {catalog_type}")
