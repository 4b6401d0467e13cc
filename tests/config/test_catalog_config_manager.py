"""Tests for ConfigManager."""

import pytest
import yaml

from speciescatalog.config import CatalogConfig, ConfigManager


@pytest.fixture
def manager(path_resolver):
    return ConfigManager(path_resolver)


class TestLoad:
    """Should load and validate the YAML configuration."""

    def test_creates_file_from_template(self, manager, path_resolver):
        """Should copy the shipped template when no config exists."""
        config = manager.load()

        assert path_resolver.get_config_path().exists()
        assert config.site_name == "Species Catalog"
        assert config.chat.model == "gpt-4o-mini"
        assert config.chart.per_diet_limit == 5

    def test_creates_defaults_without_template(self, manager, path_resolver, tmp_path):
        """Should fall back to model defaults when the template is missing."""
        manager.template_path = tmp_path / "missing.yaml"

        config = manager.load()

        assert config == CatalogConfig()
        assert yaml.safe_load(path_resolver.get_config_path().read_text())["site_name"]

    def test_unknown_fields_are_dropped(self, manager, path_resolver):
        """Should ignore keys the model does not know."""
        path_resolver.get_config_path().write_text(
            yaml.dump({"site_name": "Wild Things", "latitude": 45.5})
        )

        config = manager.load()

        assert config.site_name == "Wild Things"
        assert not hasattr(config, "latitude")

    def test_empty_file_uses_defaults(self, manager, path_resolver):
        """Should treat an empty file as all defaults."""
        path_resolver.get_config_path().write_text("")

        config = manager.load()

        assert config.config_version == ConfigManager.CURRENT_VERSION
        assert config.viewer_header == "X-Viewer-Id"

    @pytest.mark.parametrize(
        "raw",
        [
            pytest.param({"chat": {"temperature": 3.5}}, id="temperature_too_high"),
            pytest.param({"chart": {"per_diet_limit": 0}}, id="zero_limit"),
            pytest.param({"viewer_header": "X Viewer"}, id="bad_header_name"),
        ],
    )
    def test_invalid_values_raise(self, manager, path_resolver, raw):
        """Should raise ValueError for values outside their constraints."""
        path_resolver.get_config_path().write_text(yaml.dump(raw))

        with pytest.raises(ValueError, match="Configuration validation failed"):
            manager.load()


class TestSave:
    """Should write configuration back to disk."""

    def test_round_trip_with_backup(self, manager, path_resolver):
        """Should persist changes and keep the previous file as a backup."""
        config = manager.load()
        config.site_name = "Field Notes"

        manager.save(config)

        assert manager.load().site_name == "Field Notes"
        backup = path_resolver.get_config_path().with_suffix(".yaml.backup")
        assert backup.exists()
        assert "Species Catalog" in backup.read_text()
