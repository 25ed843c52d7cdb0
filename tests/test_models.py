# ==============================================================================
# Tests for Domain Models
# ==============================================================================
"""
Unit tests for session parameter resolution and inbound events.

Tests cover:
- Timeout defaulting and floor enforcement
- Required connection string
- CLI values taking precedence over environment settings
- UTF-8 decoding of payloads
"""

import os

import pytest
from pydantic import ValidationError

from eventhub_reader.core.models import (
    DEFAULT_MAX_EVENTS,
    MIN_TIMEOUT_SECONDS,
    ConfigurationError,
    InboundEvent,
    SessionParameters,
    resolve_timeout,
)
from eventhub_reader.utils.config import Settings

CONN_STR = "Endpoint=sb://ns.servicebus.windows.net/;SharedAccessKeyName=k;SharedAccessKey=s"


# ==============================================================================
# Timeout Resolution
# ==============================================================================


class TestResolveTimeout:
    """Tests for resolve_timeout()."""

    def test_default(self):
        """No value resolves to the default budget."""
        assert resolve_timeout(None) == 5

    @pytest.mark.parametrize("value", [-3, 0, 1, 3, 4])
    def test_below_floor_is_raised(self, value):
        """Any value under the floor is raised to exactly the floor."""
        assert resolve_timeout(value) == MIN_TIMEOUT_SECONDS

    @pytest.mark.parametrize("value", [5, 10, 120])
    def test_at_or_above_floor_is_kept(self, value):
        """Values at or above the floor are used as given."""
        assert resolve_timeout(value) == value


# ==============================================================================
# Session Parameters
# ==============================================================================


class TestSessionParameters:
    """Tests for SessionParameters.from_options()."""

    def test_missing_connection_string(self, settings):
        """No connection string anywhere is a configuration error."""
        with pytest.raises(ConfigurationError, match="connection string is required"):
            SessionParameters.from_options(settings=settings)

    def test_blank_connection_string(self, settings):
        """A whitespace-only connection string counts as missing."""
        with pytest.raises(ConfigurationError):
            SessionParameters.from_options(connection_string="   ", settings=settings)

    def test_configuration_error_is_value_error(self):
        """Configuration errors can be handled as ValueError."""
        assert issubclass(ConfigurationError, ValueError)

    def test_defaults(self, settings):
        """Defaults: 5s budget, 100 events, $Default group, start of stream."""
        params = SessionParameters.from_options(connection_string=CONN_STR, settings=settings)
        assert params.timeout_seconds == 5
        assert params.max_events == DEFAULT_MAX_EVENTS == 100
        assert params.consumer_group == "$Default"
        assert params.starting_position == "-1"
        assert params.eventhub_name is None

    def test_timeout_floor(self, settings):
        """A 3 second request becomes 5 seconds."""
        params = SessionParameters.from_options(
            connection_string=CONN_STR, timeout=3, settings=settings
        )
        assert params.timeout_seconds == 5

    def test_explicit_values(self, settings):
        """Explicit options are carried through."""
        params = SessionParameters.from_options(
            connection_string=CONN_STR,
            eventhub_name="telemetry",
            timeout=10,
            max_events=7,
            consumer_group="debug",
            settings=settings,
        )
        assert params.eventhub_name == "telemetry"
        assert params.timeout_seconds == 10
        assert params.max_events == 7
        assert params.consumer_group == "debug"

    def test_invalid_max_events(self, settings):
        """A non-positive count limit is rejected."""
        with pytest.raises(ConfigurationError, match="max events must be positive"):
            SessionParameters.from_options(
                connection_string=CONN_STR, max_events=0, settings=settings
            )

    def test_environment_fallback(self, monkeypatch):
        """Connection string and name fall back to EVENTHUB_* variables."""
        monkeypatch.setenv("EVENTHUB_CONNECTION_STRING", CONN_STR)
        monkeypatch.setenv("EVENTHUB_NAME", "from-env")
        monkeypatch.setenv("READER_MAX_EVENTS", "25")
        params = SessionParameters.from_options(settings=Settings())
        assert params.connection_string == CONN_STR
        assert params.eventhub_name == "from-env"
        assert params.max_events == 25

    def test_options_override_environment(self, monkeypatch):
        """Command-line values win over the environment."""
        monkeypatch.setenv("EVENTHUB_NAME", "from-env")
        monkeypatch.setenv("READER_TIMEOUT_SECONDS", "30")
        params = SessionParameters.from_options(
            connection_string=CONN_STR, eventhub_name="from-cli", timeout=8, settings=Settings()
        )
        assert params.eventhub_name == "from-cli"
        assert params.timeout_seconds == 8

    def test_environment_timeout_floor(self, monkeypatch):
        """The floor also applies to timeouts from the environment."""
        monkeypatch.setenv("READER_TIMEOUT_SECONDS", "1")
        params = SessionParameters.from_options(connection_string=CONN_STR, settings=Settings())
        assert params.timeout_seconds == 5

    def test_explicit_settings_skip_cached_lookup(self, settings, monkeypatch):
        """Passing a Settings instance never touches the cached settings layer."""

        def unexpected():
            raise AssertionError("get_settings() should not be called")

        monkeypatch.setattr("eventhub_reader.utils.config.get_settings", unexpected)
        params = SessionParameters.from_options(connection_string=CONN_STR, settings=settings)
        assert params.connection_string == CONN_STR

    def test_transport_tuning_ignores_developer_env(self):
        """Tuning variables from a developer .env are cleared for tests."""
        for var in (
            "EVENTHUB_STARTING_POSITION",
            "EVENTHUB_PREFETCH",
            "EVENTHUB_CONNECTION_VERIFY",
        ):
            assert var not in os.environ

        eventhub = Settings().eventhub
        assert eventhub.starting_position == "-1"
        assert eventhub.prefetch == 300
        assert eventhub.connection_verify is True

    def test_frozen(self, settings):
        """Parameters are immutable once resolved."""
        params = SessionParameters.from_options(connection_string=CONN_STR, settings=settings)
        with pytest.raises(ValidationError):
            params.timeout_seconds = 1

    def test_direct_construction_enforces_floor(self):
        """Building the model directly cannot bypass the floor."""
        with pytest.raises(ValidationError):
            SessionParameters(connection_string=CONN_STR, timeout_seconds=2)


# ==============================================================================
# Inbound Events
# ==============================================================================


class TestInboundEvent:
    """Tests for InboundEvent."""

    def test_text_decodes_utf8(self):
        """Payload bytes decode as UTF-8."""
        event = InboundEvent(body="température".encode("utf-8"), partition_id="3")
        assert event.text == "température"
        assert event.partition_id == "3"

    def test_text_replaces_invalid_bytes(self):
        """Invalid UTF-8 does not raise."""
        event = InboundEvent(body=b"\xffok", partition_id="0")
        assert event.text.endswith("ok")
