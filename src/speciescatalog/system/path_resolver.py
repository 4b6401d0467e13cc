import os
from pathlib import Path


class PathResolver:
    """Central authority for all file path resolution in the species catalog.

    Uses environment variables for configuration with sensible defaults.
    Read-only assets (templates, static files, config templates) live under the
    application directory; everything written at runtime lives under the data
    directory.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.app_dir = Path(os.getenv("SPECIESCATALOG_APP", "/opt/speciescatalog"))
        self.data_dir = Path(os.getenv("SPECIESCATALOG_DATA", "/var/lib/speciescatalog"))

    def get_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks SPECIESCATALOG_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("SPECIESCATALOG_CONFIG")
        if config_path:
            return Path(config_path)

        return self.data_dir / "config" / "speciescatalog.yaml"

    def get_config_template_path(self) -> Path:
        """Get the path to the configuration template."""
        return self.app_dir / "config_templates" / "speciescatalog.yaml"

    def get_sample_catalog_path(self) -> Path:
        """Get the path to the bundled sample catalog fixture."""
        return self.app_dir / "config_templates" / "sample_catalog.yaml"

    def get_repo_path(self) -> Path:
        """Get the path to the repository root."""
        return self.app_dir

    def get_database_path(self) -> Path:
        """Get the path to the main SQLite database."""
        return self.data_dir / "database" / "speciescatalog.db"

    # Web application paths (in app directory)
    def get_static_dir(self) -> Path:
        """Get the directory for static web assets."""
        return self.app_dir / "src" / "speciescatalog" / "web" / "static"

    def get_templates_dir(self) -> Path:
        """Get the directory for HTML templates."""
        return self.app_dir / "src" / "speciescatalog" / "web" / "templates"

    def get_animal_speeds_csv_path(self) -> Path:
        """Get the path to the animal top-speed CSV used by the speed chart."""
        return self.get_static_dir() / "sample_animals.csv"
