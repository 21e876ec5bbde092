"""Operational status codes reported by Fronius inverters."""

from __future__ import annotations

from enum import Enum


class InverterStatus(str, Enum):
    """Operational state of an inverter.

    Definition order is significant: it is the order in which the collector
    emits the per-status indicator metrics.
    """

    STARTUP = "Startup"
    RUNNING = "Running"
    STANDBY = "Standby"
    BOOTLOADING = "Bootloading"
    ERROR = "Error"
    IDLE = "Idle"
    READY = "Ready"
    SLEEPING = "Sleeping"
    UNKNOWN = "Unknown"
    INVALID = "Invalid"


STATUS_CODES: tuple[InverterStatus, ...] = tuple(InverterStatus)

# Exact codes; 0-6 is handled as a range before this lookup
_EXACT_CODES = {
    7: InverterStatus.RUNNING,
    8: InverterStatus.STANDBY,
    9: InverterStatus.BOOTLOADING,
    10: InverterStatus.ERROR,
    11: InverterStatus.IDLE,
    12: InverterStatus.READY,
    13: InverterStatus.SLEEPING,
    255: InverterStatus.UNKNOWN,
}


def decode_status(code: int) -> InverterStatus:
    """Map a raw inverter status code to its operational state."""
    if 0 <= code < 7:
        return InverterStatus.STARTUP
    return _EXACT_CODES.get(code, InverterStatus.INVALID)
