"""Shared test fixtures for the Fronius exporter."""

from __future__ import annotations

import json
from typing import Any

import pytest

INVERTER_INFO = {
    "3": {
        "CustomName": "Garage",
        "DT": 123,
        "ErrorCode": 0,
        "PVPower": 5000,
        "Show": 1,
        "StatusCode": 7,
        "UniqueID": "30000003",
    },
    "1": {
        "CustomName": "Roof &amp; Shed",
        "DT": 232,
        "ErrorCode": 0,
        "PVPower": 8000,
        "Show": 1,
        "StatusCode": 7,
        "UniqueID": "30000001",
    },
    "2": {
        "CustomName": "Barn",
        "DT": 232,
        "ErrorCode": 306,
        "PVPower": 8000,
        "Show": 1,
        "StatusCode": 3,
        "UniqueID": "30000002",
    },
}

COMMON_DATA = {
    "DAY_ENERGY": {"Unit": "Wh", "Value": 5212},
    "DeviceStatus": {
        "ErrorCode": 0,
        "LEDColor": 2,
        "LEDState": 0,
        "MgmtTimerRemainingTime": -1,
        "StateToReset": False,
        "StatusCode": 7,
    },
    "FAC": {"Unit": "Hz", "Value": 49.97},
    "IAC": {"Unit": "A", "Value": 7.68},
    "IDC": {"Unit": "A", "Value": 4.6},
    "PAC": {"Unit": "W", "Value": 1693},
    "TOTAL_ENERGY": {"Unit": "Wh", "Value": 234611600},
    "UAC": {"Unit": "V", "Value": 231.4},
    "UDC": {"Unit": "V", "Value": 386.2},
    "YEAR_ENERGY": {"Unit": "Wh", "Value": 1790474},
}

THREE_PHASE_DATA = {
    "IAC_L1": {"Unit": "A", "Value": 2.55},
    "IAC_L2": {"Unit": "A", "Value": 2.61},
    "IAC_L3": {"Unit": "A", "Value": 2.49},
    "UAC_L1": {"Unit": "V", "Value": 231.1},
    "UAC_L2": {"Unit": "V", "Value": 232.4},
    "UAC_L3": {"Unit": "V", "Value": 230.8},
}


def envelope(
    data: Any = None, code: int = 0, reason: str = "", user_message: str = ""
) -> dict[str, Any]:
    """Wrap a payload the way the Solar API does."""
    return {
        "Body": {"Data": data},
        "Head": {
            "RequestArguments": {},
            "Status": {"Code": code, "Reason": reason, "UserMessage": user_message},
            "Timestamp": "2024-06-01T12:00:00+02:00",
        },
    }


def envelope_bytes(*args: Any, **kwargs: Any) -> bytes:
    return json.dumps(envelope(*args, **kwargs)).encode()


@pytest.fixture
def inverter_info() -> dict[str, Any]:
    return json.loads(json.dumps(INVERTER_INFO))


@pytest.fixture
def common_data() -> dict[str, Any]:
    return json.loads(json.dumps(COMMON_DATA))


@pytest.fixture
def three_phase_data() -> dict[str, Any]:
    return json.loads(json.dumps(THREE_PHASE_DATA))
