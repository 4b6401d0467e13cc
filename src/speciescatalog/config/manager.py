"""Reading and writing the catalog's YAML configuration file."""

import logging
import shutil
from typing import Any

import yaml
from pydantic import ValidationError

from speciescatalog.config.models import CatalogConfig
from speciescatalog.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads ``CatalogConfig`` from disk, creating the file on first use.

    A missing file is seeded from the bundled template, or from the model
    defaults when no template ships with the installation. Keys the model
    does not know are dropped with a warning rather than rejected.
    """

    CURRENT_VERSION = "1.0.0"

    def __init__(self, path_resolver: PathResolver | None = None):
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_config_path()
        self.template_path = self.path_resolver.get_config_template_path()

    def load(self) -> CatalogConfig:
        """Read and validate the config file.

        Raises:
            ValueError: If a known key holds an invalid value
        """
        if not self.config_path.exists():
            self._create_default_config()

        raw = yaml.safe_load(self.config_path.read_text()) or {}
        raw.setdefault("config_version", self.CURRENT_VERSION)

        try:
            return CatalogConfig(**self._known_fields(raw))
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

    def save(self, config: CatalogConfig) -> None:
        """Write ``config`` to disk, keeping the previous file as ``.yaml.backup``."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        self.config_path.write_text(
            yaml.dump(config.model_dump(mode="json"), default_flow_style=False, sort_keys=False)
        )
        logger.info("Configuration saved to %s", self.config_path)

    def _create_default_config(self) -> None:
        if self.template_path.exists():
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(self.template_path, self.config_path)
            logger.info("Created %s from %s", self.config_path, self.template_path)
            return
        self.save(CatalogConfig())

    @staticmethod
    def _known_fields(raw: dict[str, Any]) -> dict[str, Any]:
        expected = set(CatalogConfig.model_fields)
        unexpected = set(raw) - expected
        if unexpected:
            logger.warning("Ignoring unknown config fields: %s", sorted(unexpected))
        return {key: value for key, value in raw.items() if key in expected}
