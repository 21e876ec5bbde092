"""Data models for the Fronius exporter."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .status import InverterStatus, decode_status


def _mapping(data: Any, name: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{name} must be an object, got {type(data).__name__}")
    return data


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be a number, got {value!r}")
    return int(value)


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class DataValue:
    """A measurement with its unit."""

    value: float = 0.0
    unit: str = ""

    @classmethod
    def from_dict(cls, data: Any, name: str = "value") -> DataValue:
        data = _mapping(data, name)
        value = data.get("Value")
        if value is None:
            # Fronius reports null values while the inverter is asleep
            value = 0.0
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{name}.Value must be a number, got {value!r}")
        return cls(value=float(value), unit=_str(data, "Unit"))


@dataclass(frozen=True)
class InverterInfo:
    """An inverter as listed by GetInverterInfo."""

    device_id: str
    custom_name: str
    device_type: int
    error_code: int
    pv_power: int
    show: int
    status_code: int
    unique_id: str

    @property
    def status(self) -> InverterStatus:
        """Decoded operational state."""
        return decode_status(self.status_code)

    @classmethod
    def from_dict(cls, device_id: str, data: Any) -> InverterInfo:
        data = _mapping(data, f"inverter {device_id}")
        return cls(
            device_id=device_id,
            custom_name=html.unescape(_str(data, "CustomName")),
            device_type=_int(data, "DT"),
            error_code=_int(data, "ErrorCode"),
            pv_power=_int(data, "PVPower"),
            show=_int(data, "Show"),
            status_code=_int(data, "StatusCode"),
            unique_id=_str(data, "UniqueID"),
        )


@dataclass(frozen=True)
class DeviceStatus:
    """Status block embedded in the common inverter data."""

    error_code: int = 0
    led_color: int = 0
    led_state: int = 0
    mgmt_timer_remaining_time: int = 0
    state_to_reset: bool = False
    status_code: int = 0

    @property
    def status(self) -> InverterStatus:
        """Decoded operational state."""
        return decode_status(self.status_code)

    @classmethod
    def from_dict(cls, data: Any) -> DeviceStatus:
        data = _mapping(data, "DeviceStatus")
        state_to_reset = data.get("StateToReset", False)
        if not isinstance(state_to_reset, bool):
            raise TypeError(f"StateToReset must be a boolean, got {state_to_reset!r}")
        return cls(
            error_code=_int(data, "ErrorCode"),
            led_color=_int(data, "LEDColor"),
            led_state=_int(data, "LEDState"),
            mgmt_timer_remaining_time=_int(data, "MgmtTimerRemainingTime"),
            state_to_reset=state_to_reset,
            status_code=_int(data, "StatusCode"),
        )


@dataclass(frozen=True)
class InverterCommonData:
    """Realtime data of the CommonInverterData collection."""

    day_energy: DataValue
    year_energy: DataValue
    total_energy: DataValue
    fac: DataValue
    iac: DataValue
    idc: DataValue
    pac: DataValue
    uac: DataValue
    udc: DataValue
    device_status: DeviceStatus

    @classmethod
    def from_dict(cls, data: Any) -> InverterCommonData:
        data = _mapping(data, "CommonInverterData")

        def value(key: str) -> DataValue:
            return DataValue.from_dict(data.get(key), key)

        return cls(
            day_energy=value("DAY_ENERGY"),
            year_energy=value("YEAR_ENERGY"),
            total_energy=value("TOTAL_ENERGY"),
            fac=value("FAC"),
            iac=value("IAC"),
            idc=value("IDC"),
            pac=value("PAC"),
            uac=value("UAC"),
            udc=value("UDC"),
            device_status=DeviceStatus.from_dict(data.get("DeviceStatus")),
        )


@dataclass(frozen=True)
class InverterThreePhaseData:
    """Realtime data of the 3PInverterData collection."""

    iac_l1: DataValue
    iac_l2: DataValue
    iac_l3: DataValue
    uac_l1: DataValue
    uac_l2: DataValue
    uac_l3: DataValue

    @classmethod
    def from_dict(cls, data: Any) -> InverterThreePhaseData:
        data = _mapping(data, "3PInverterData")
        return cls(
            **{
                key.lower(): DataValue.from_dict(data.get(key), key)
                for key in ("IAC_L1", "IAC_L2", "IAC_L3", "UAC_L1", "UAC_L2", "UAC_L3")
            }
        )

    def voltage(self, phase: str) -> DataValue:
        """AC voltage of the given phase (L1, L2 or L3)."""
        return getattr(self, f"uac_{phase.lower()}")

    def current(self, phase: str) -> DataValue:
        """AC current of the given phase (L1, L2 or L3)."""
        return getattr(self, f"iac_{phase.lower()}")


class MetricKind(str, Enum):
    """Kind of an exported metric."""

    GAUGE = "gauge"
    COUNTER = "counter"


@dataclass(frozen=True)
class MetricRecord:
    """A single sample produced by one scrape."""

    name: str
    kind: MetricKind
    value: float
    labels: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def identity(self) -> tuple[str, tuple[tuple[str, str], ...]]:
        """Name plus label set; unique within one scrape."""
        return self.name, self.labels
