"""Tests for the structlog configurator module."""

import logging
import os
from unittest.mock import Mock, patch

import pytest
import structlog

from speciescatalog.config.models import LoggingConfig
from speciescatalog.system.structlog_configurator import (
    _add_static_context,
    _configure_processors,
    configure_structlog,
    get_deployment_environment,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Leave structlog's global configuration as we found it."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixed_version():
    with patch(
        "speciescatalog.system.structlog_configurator.get_git_version",
        autospec=True,
        return_value="main@deadbeef",
    ) as mock_version:
        yield mock_version


class TestAddStaticContext:
    """Test the _add_static_context processor."""

    def test_adds_static_fields_to_event_dict(self):
        """Should add static fields to all log events."""
        processor = _add_static_context({"service": "species-catalog", "version": "1.0.0"})

        result = processor(Mock(spec=structlog.BoundLogger), "info", {"event": "hello"})

        assert result == {"event": "hello", "service": "species-catalog", "version": "1.0.0"}

    def test_empty_extra_fields(self):
        """Should leave the event untouched when there is nothing to add."""
        processor = _add_static_context({})

        result = processor(Mock(spec=structlog.BoundLogger), "info", {"event": "hello"})

        assert result == {"event": "hello"}


class TestDeploymentEnvironment:
    @patch("speciescatalog.system.structlog_configurator.is_container_environment")
    @patch.dict(os.environ, {"SPECIESCATALOG_ENV": "development"})
    def test_container_wins(self, mock_container):
        mock_container.return_value = True
        assert get_deployment_environment() == "container"

    @patch("speciescatalog.system.structlog_configurator.is_container_environment")
    @patch.dict(os.environ, {"SPECIESCATALOG_ENV": "development"})
    def test_development(self, mock_container):
        mock_container.return_value = False
        assert get_deployment_environment() == "development"

    @patch("speciescatalog.system.structlog_configurator.is_container_environment")
    @patch.dict(os.environ, {}, clear=True)
    def test_unknown(self, mock_container):
        mock_container.return_value = False
        assert get_deployment_environment() == "unknown"


class TestConfigureProcessors:
    """Test processor selection."""

    @pytest.fixture
    def test_config(self, test_config):
        test_config.logging = LoggingConfig(level="info", json_logs=None, extra_fields={})
        return test_config

    @patch.dict(os.environ, {}, clear=True)
    def test_json_renderer_in_container(self, test_config, fixed_version):
        processors = _configure_processors(test_config, is_container=True)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    @patch.dict(os.environ, {}, clear=True)
    def test_console_renderer_outside_container(self, test_config, fixed_version):
        processors = _configure_processors(test_config, is_container=False)

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    @patch.dict(os.environ, {}, clear=True)
    def test_explicit_json_setting_overrides_detection(self, test_config, fixed_version):
        test_config.logging.json_logs = True

        processors = _configure_processors(test_config, is_container=False)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    @patch.dict(os.environ, {"SPECIESCATALOG_JSON_LOGS": "true"})
    def test_environment_forces_json(self, test_config, fixed_version):
        test_config.logging.json_logs = False

        processors = _configure_processors(test_config, is_container=False)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    @patch.dict(os.environ, {}, clear=True)
    def test_caller_info_is_optional(self, test_config, fixed_version):
        without = _configure_processors(test_config, is_container=False)
        test_config.logging.include_caller = True
        with_caller = _configure_processors(test_config, is_container=False)

        assert len(with_caller) == len(without) + 1
        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder) for p in with_caller
        )

    @patch.dict(os.environ, {}, clear=True)
    def test_static_context_carries_site_name(self, test_config, fixed_version):
        test_config.site_name = "Field Station"
        processors = _configure_processors(test_config, is_container=True)
        static_context = processors[1]

        event = static_context(Mock(spec=structlog.BoundLogger), "info", {"event": "x"})

        assert event["service"] == "species-catalog"
        assert event["version"] == "main@deadbeef"
        assert event["site_name"] == "Field Station"


class TestConfigureStructlog:
    @patch("speciescatalog.system.structlog_configurator._configure_handlers")
    @patch("speciescatalog.system.structlog_configurator.is_container_environment")
    @patch.dict(os.environ, {}, clear=True)
    def test_uses_configured_level(
        self, mock_container, mock_handlers, test_config, fixed_version
    ):
        mock_container.return_value = True
        test_config.logging.level = "warning"

        configure_structlog(test_config)

        mock_handlers.assert_called_once_with(logging.WARNING)
        assert structlog.is_configured()

    @patch("speciescatalog.system.structlog_configurator._configure_handlers")
    @patch("speciescatalog.system.structlog_configurator.is_container_environment")
    @patch.dict(os.environ, {}, clear=True)
    def test_unknown_level_falls_back_to_info(
        self, mock_container, mock_handlers, test_config, fixed_version
    ):
        mock_container.return_value = False
        test_config.logging.level = "chatty"

        configure_structlog(test_config)

        mock_handlers.assert_called_once_with(logging.INFO)
