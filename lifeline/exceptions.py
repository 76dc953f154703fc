"""Custom exceptions for the realtime clients."""


class LifelineError(Exception):
    """Base exception for voice and stream client errors."""

    pass


class ConfigurationError(LifelineError):
    """Raised when a required credential or setting is missing."""

    pass


class TransportError(LifelineError):
    """Raised when the underlying socket fails (connect, drop, ack timeout)."""

    pass


class StreamNotConnectedError(TransportError):
    """Raised when an upload call needs a live channel and there is none."""

    def __init__(self, message: str = "Socket not connected") -> None:
        super().__init__(message)


class ProtocolError(LifelineError):
    """Raised when the server reports a failure, either in-band or in an ack."""

    def __init__(self, message: str, event: str | None = None) -> None:
        super().__init__(message)
        self.event = event
