"""Tests for the exception hierarchy."""

import pytest

from lifeline.exceptions import (
    ConfigurationError,
    LifelineError,
    ProtocolError,
    StreamNotConnectedError,
    TransportError,
)


class TestHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_type",
        [ConfigurationError, TransportError, StreamNotConnectedError, ProtocolError],
    )
    def test_all_are_lifeline_errors(self, exc_type) -> None:
        assert issubclass(exc_type, LifelineError)

    def test_not_connected_is_transport_error(self) -> None:
        assert issubclass(StreamNotConnectedError, TransportError)


class TestMessages:
    """Tests for exception messages and attributes."""

    def test_not_connected_default_message(self) -> None:
        assert str(StreamNotConnectedError()) == "Socket not connected"

    def test_protocol_error_keeps_server_message(self) -> None:
        error = ProtocolError("quota exceeded", event="stream:start")
        assert str(error) == "quota exceeded"
        assert error.event == "stream:start"

    def test_protocol_error_event_optional(self) -> None:
        assert ProtocolError("boom").event is None
