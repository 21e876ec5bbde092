"""Decoding of the response envelope wrapping every Solar API reply."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .exceptions import FroniusDataError, FroniusProtocolError


def _reject_constant(name: str) -> Any:
    # json accepts NaN and Infinity, which are not valid JSON
    raise ValueError(f"invalid JSON constant {name}")


@dataclass(frozen=True)
class Envelope:
    """Head/Body wrapper of a Solar API response.

    ``data`` is left undecoded; its shape depends on the request that was made.
    """

    data: Any
    code: int
    reason: str = ""
    user_message: str = ""
    timestamp: str | None = None

    @classmethod
    def from_bytes(cls, raw: bytes | str) -> Envelope:
        """Decode an envelope, raising FroniusDataError if it is malformed."""
        try:
            msg = json.loads(raw, parse_constant=_reject_constant)
        except ValueError as err:
            raise FroniusDataError(f"Error parsing json message: {err}") from err

        if not isinstance(msg, dict):
            raise FroniusDataError("Error parsing json message: expected an object")
        head = msg.get("Head")
        if not isinstance(head, dict):
            raise FroniusDataError("Error parsing json message: missing Head")
        status = head.get("Status")
        if not isinstance(status, dict):
            raise FroniusDataError("Error parsing json message: missing Head.Status")

        code = status.get("Code", 0)
        if isinstance(code, bool) or not isinstance(code, int):
            raise FroniusDataError(
                f"Error parsing json message: Status.Code must be an integer, got {code!r}"
            )

        body = msg.get("Body")
        if body is not None and not isinstance(body, dict):
            raise FroniusDataError("Error parsing json message: Body must be an object")

        return cls(
            data=(body or {}).get("Data"),
            code=code,
            reason=str(status.get("Reason") or ""),
            user_message=str(status.get("UserMessage") or ""),
            timestamp=head.get("Timestamp"),
        )

    def raise_for_status(self) -> None:
        """Raise FroniusProtocolError if the device reported a failure."""
        if self.code != 0:
            raise FroniusProtocolError(self.code, self.reason, self.user_message)


def parse_envelope(raw: bytes | str) -> Any:
    """Return the payload of a successful response."""
    envelope = Envelope.from_bytes(raw)
    envelope.raise_for_status()
    return envelope.data
