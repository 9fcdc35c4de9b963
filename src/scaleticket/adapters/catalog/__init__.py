"""Vehicle catalog adapters."""

from ...config import CatalogConfig
from ...ports.catalog import VehicleCatalogPort
from .static import DEFAULT_VEHICLES, StaticCatalog
from .yaml_catalog import YamlCatalog

__all__ = ["DEFAULT_VEHICLES", "StaticCatalog", "YamlCatalog", "create_catalog"]


def create_catalog(config: CatalogConfig) -> VehicleCatalogPort:
    """Create the vehicle catalog based on configuration."""
    if config.path is None:
        return StaticCatalog()
    return YamlCatalog(config.path)
