"""Exceptions for the Fronius exporter."""

from __future__ import annotations


class FroniusError(Exception):
    """Base exception for all errors raised talking to a Fronius device."""


class FroniusConnectionError(FroniusError):
    """The device could not be reached or did not answer in time."""


class FroniusHTTPStatusError(FroniusError):
    """The device answered with a non-200 HTTP status."""

    def __init__(self, status: int, reason: str | None = None) -> None:
        super().__init__(f"Unexpected http status: {status} {reason or ''}".rstrip())
        self.status = status
        self.reason = reason


class FroniusDataError(FroniusError):
    """The response was not valid JSON or did not have the expected shape."""


class FroniusProtocolError(FroniusError):
    """The device reported a non-zero status code in the response envelope."""

    def __init__(self, code: int, reason: str = "", user_message: str = "") -> None:
        super().__init__(
            f"Fronius status code={code}: msg={user_message} reason={reason}"
        )
        self.code = code
        self.reason = reason
        self.user_message = user_message


class ConfigError(Exception):
    """Invalid exporter configuration."""
