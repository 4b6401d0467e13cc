"""Species catalog configuration package.

This package provides centralized configuration management with:
- Validation through pydantic models
- Smart defaults for missing files and fields
- YAML parsing and serialization
"""

from .manager import ConfigManager
from .models import CatalogConfig

__all__ = [
    "CatalogConfig",
    "ConfigManager",
]
