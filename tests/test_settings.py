"""Tests for muxbridge/config/settings.py — Settings, run mode and prefix defaults."""

import pytest
from pydantic import ValidationError

from muxbridge.config.settings import get_settings


class TestSettings:

    def test_defaults(self, override_settings):
        override_settings()
        s = get_settings()
        assert s.event_format == "rest"
        assert s.path_prefix_segments is None
        assert s.listen_host == "0.0.0.0"
        assert s.listen_port == 8080
        assert s.log_level == "INFO"

    def test_env_override(self, override_settings):
        override_settings(
            EVENT_FORMAT="http",
            PATH_PREFIX_SEGMENTS="0",
            LISTEN_PORT="9090",
        )
        s = get_settings()
        assert s.event_format == "http"
        assert s.path_prefix_segments == 0
        assert s.listen_port == 9090

    def test_unknown_event_format_rejected(self, override_settings):
        override_settings(EVENT_FORMAT="websocket")
        with pytest.raises(ValidationError):
            get_settings()


class TestPrefixSegments:

    def test_rest_default(self, override_settings):
        override_settings(EVENT_FORMAT="rest")
        assert get_settings().prefix_segments == 1

    def test_http_default(self, override_settings):
        override_settings(EVENT_FORMAT="http")
        assert get_settings().prefix_segments == 2

    def test_explicit_value_wins(self, override_settings):
        override_settings(EVENT_FORMAT="http", PATH_PREFIX_SEGMENTS="1")
        assert get_settings().prefix_segments == 1


class TestRuntimeMode:

    def test_server_without_marker(self, override_settings):
        override_settings()
        assert get_settings().runtime_mode == "server"

    def test_lambda_with_marker(self, override_settings):
        override_settings(AWS_LAMBDA_FUNCTION_NAME="my-function")
        assert get_settings().runtime_mode == "lambda"

    def test_marker_value_irrelevant(self, override_settings):
        """Presence alone selects Lambda mode, even when empty."""
        override_settings(AWS_LAMBDA_FUNCTION_NAME="")
        assert get_settings().runtime_mode == "lambda"
