"""Prometheus exporter for Fronius solar inverters."""

from .collector import FroniusCollector
from .envelope import Envelope, parse_envelope
from .exceptions import (
    ConfigError,
    FroniusConnectionError,
    FroniusDataError,
    FroniusError,
    FroniusHTTPStatusError,
    FroniusProtocolError,
)
from .fronius import Fronius
from .models import (
    DataValue,
    DeviceStatus,
    InverterCommonData,
    InverterInfo,
    InverterThreePhaseData,
    MetricKind,
    MetricRecord,
)
from .status import STATUS_CODES, InverterStatus, decode_status

__all__ = [
    "ConfigError",
    "DataValue",
    "DeviceStatus",
    "Envelope",
    "Fronius",
    "FroniusCollector",
    "FroniusConnectionError",
    "FroniusDataError",
    "FroniusError",
    "FroniusHTTPStatusError",
    "FroniusProtocolError",
    "InverterCommonData",
    "InverterInfo",
    "InverterStatus",
    "InverterThreePhaseData",
    "MetricKind",
    "MetricRecord",
    "STATUS_CODES",
    "decode_status",
    "parse_envelope",
]
