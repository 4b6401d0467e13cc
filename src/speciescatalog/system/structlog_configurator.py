"""Structlog setup for the species catalog.

Containers get one JSON object per line on stdout so a log collector can
parse them. Everywhere else the console renderer is used unless JSON is
requested in the config or through SPECIESCATALOG_JSON_LOGS.
"""

import logging
import os
import subprocess
import sys
from collections.abc import Callable
from typing import Any

import structlog

from speciescatalog.config.models import CatalogConfig

SERVICE_NAME = "species-catalog"


def is_container_environment() -> bool:
    """Whether the process runs inside a Docker-style container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


def _git(*args: str) -> str | None:
    result = subprocess.run(["git", *args], capture_output=True, text=True, timeout=5)
    return result.stdout.strip() if result.returncode == 0 else None


def get_git_version() -> str:
    """Checked-out branch and short commit as ``branch@abcdef12``."""
    try:
        branch = _git("rev-parse", "--abbrev-ref", "HEAD") or "unknown"
        commit = _git("rev-parse", "--short=8", "HEAD") or "unknown"
    except (subprocess.SubprocessError, FileNotFoundError):
        return "unknown"
    return f"{branch}@{commit}"


def get_deployment_environment() -> str:
    """One of ``container``, ``development`` or ``unknown``."""
    if is_container_environment():
        return "container"
    if os.environ.get("SPECIESCATALOG_ENV") == "development":
        return "development"
    return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor stamping the same fields onto every event."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _wants_json(config: CatalogConfig, is_container: bool) -> bool:
    if os.environ.get("SPECIESCATALOG_JSON_LOGS", "false").lower() == "true":
        return True
    if config.logging.json_logs is None:
        return is_container
    return config.logging.json_logs


def _configure_processors(config: CatalogConfig, is_container: bool) -> list:
    """Processor chain ending in the JSON or console renderer."""
    static_fields = {
        "service": SERVICE_NAME,
        "version": get_git_version(),
        "deployment": get_deployment_environment(),
        **config.logging.extra_fields,
    }
    if config.site_name:
        static_fields["site_name"] = config.site_name

    processors: list = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(static_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]
    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if _wants_json(config, is_container):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def _configure_handlers(log_level: int) -> None:
    """Replace any root handlers with a single stdout handler."""
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(log_level)
    stdout_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(stdout_handler)
    root_logger.setLevel(log_level)


def configure_structlog(config: CatalogConfig) -> None:
    """Configure structlog and stdlib logging from the ``logging`` config section.

    Unknown level names fall back to INFO.
    """
    is_container = is_container_environment()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    structlog.configure(
        processors=_configure_processors(config, is_container),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configure_handlers(log_level)

    structlog.get_logger(__name__).info(
        "Structured logging configured",
        log_level=config.logging.level,
        environment=get_deployment_environment(),
        json_output=_wants_json(config, is_container),
    )
