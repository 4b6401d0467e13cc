"""System domain package.

This package contains system-level components:
- path_resolver: Path resolution for configuration, data and web assets
- structlog_configurator: Structured logging configuration

Import components directly from their modules; the configurator depends on
the config package, which itself resolves paths through this package.
"""
