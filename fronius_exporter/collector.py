"""Prometheus collector turning Fronius readings into metrics."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, NamedTuple

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from .const import PHASES
from .exceptions import FroniusError
from .fronius import Fronius
from .models import (
    InverterCommonData,
    InverterInfo,
    InverterThreePhaseData,
    MetricKind,
    MetricRecord,
)
from .status import STATUS_CODES

_LOGGER = logging.getLogger(__name__)


class MetricDescription(NamedTuple):
    """Static description of an exported metric."""

    documentation: str
    labels: tuple[str, ...]
    kind: MetricKind = MetricKind.GAUGE


INVERTER_INFO = "fronius_inverter_info"
INVERTER_STATUS = "fronius_inverter_status"
INVERTER_TOTAL_ENERGY = "inverter_yield_total"
INVERTER_DC_VOLTAGE = "inverter_dc_voltage"
INVERTER_DC_CURRENT = "inverter_dc_current"
INVERTER_AC_FREQUENCY = "inverter_grid_frequency"
INVERTER_AC_VOLTAGE = "inverter_grid_voltage"
INVERTER_AC_CURRENT = "inverter_grid_current"

METRICS: dict[str, MetricDescription] = {
    INVERTER_INFO: MetricDescription(
        "Information about the inverter",
        ("device_id", "device_type", "device_name", "serial"),
    ),
    INVERTER_STATUS: MetricDescription("Status of the inverter", ("device_id", "status")),
    INVERTER_TOTAL_ENERGY: MetricDescription(
        "Total energy produced by the inverter in kWh", ("device_id",), MetricKind.COUNTER
    ),
    INVERTER_DC_VOLTAGE: MetricDescription("Solar panel (DC) voltage", ("device_id",)),
    INVERTER_DC_CURRENT: MetricDescription("Solar panel (DC) current", ("device_id",)),
    INVERTER_AC_FREQUENCY: MetricDescription("Grid (AC) frequency", ("device_id",)),
    INVERTER_AC_VOLTAGE: MetricDescription("Grid (AC) voltage", ("device_id", "phase")),
    INVERTER_AC_CURRENT: MetricDescription("Grid (AC) current", ("device_id", "phase")),
}


def _record(name: str, value: float, *label_values: str) -> MetricRecord:
    description = METRICS[name]
    return MetricRecord(
        name=name,
        kind=description.kind,
        value=value,
        labels=tuple(zip(description.labels, label_values)),
    )


def inverter_records(inverter: InverterInfo) -> list[MetricRecord]:
    """Info metric plus one indicator per known status for an inverter."""
    records = [
        _record(
            INVERTER_INFO,
            1.0,
            inverter.device_id,
            str(inverter.device_type),
            inverter.custom_name,
            inverter.unique_id,
        )
    ]
    current = inverter.status
    for status in STATUS_CODES:
        records.append(
            _record(
                INVERTER_STATUS,
                1.0 if status is current else 0.0,
                inverter.device_id,
                status.value.lower(),
            )
        )
    return records


def common_data_records(device_id: str, data: InverterCommonData) -> list[MetricRecord]:
    """Energy, DC and grid frequency metrics of one inverter."""
    return [
        # Wh -> kWh
        _record(INVERTER_TOTAL_ENERGY, data.total_energy.value / 1000.0, device_id),
        _record(INVERTER_DC_VOLTAGE, data.udc.value, device_id),
        _record(INVERTER_DC_CURRENT, data.idc.value, device_id),
        _record(INVERTER_AC_FREQUENCY, data.fac.value, device_id),
    ]


def three_phase_records(device_id: str, data: InverterThreePhaseData) -> list[MetricRecord]:
    """Per-phase grid voltage and current metrics of one inverter."""
    records = [
        _record(INVERTER_AC_VOLTAGE, data.voltage(phase).value, device_id, phase)
        for phase in PHASES
    ]
    records.extend(
        _record(INVERTER_AC_CURRENT, data.current(phase).value, device_id, phase)
        for phase in PHASES
    )
    return records


def _family(name: str, description: MetricDescription) -> Metric:
    if description.kind is MetricKind.COUNTER:
        return CounterMetricFamily(name, description.documentation, labels=description.labels)
    return GaugeMetricFamily(name, description.documentation, labels=description.labels)


def metric_families(records: Iterable[MetricRecord]) -> list[Metric]:
    """Group metric records into Prometheus metric families."""
    families: dict[str, Metric] = {}
    for record in records:
        family = families.get(record.name)
        if family is None:
            family = families[record.name] = _family(record.name, METRICS[record.name])
        family.add_metric([value for _, value in record.labels], record.value)
    return list(families.values())


class FroniusCollector(Collector):
    """Scrape all inverters of a Fronius installation on every collect."""

    def __init__(self, api_factory: Callable[[], Fronius]) -> None:
        """Initialize the collector.

        Args:
            api_factory: Returns a fresh, unopened client for each scrape
        """
        self._api_factory = api_factory

    def describe(self) -> Iterator[Metric]:
        """Describe the exported metrics without contacting the device."""
        for name, description in METRICS.items():
            yield _family(name, description)

    def collect(self) -> Iterator[Metric]:
        """Run one scrape cycle on a private event loop."""
        try:
            records = asyncio.run(self.collect_records())
        except Exception:
            _LOGGER.exception("Unexpected error while collecting inverter metrics")
            return
        yield from metric_families(records)

    async def collect_records(self) -> list[MetricRecord]:
        """Collect inventory and per-device metrics for one scrape cycle."""
        async with self._api_factory() as api:
            try:
                inverters = await api.get_inverter_info()
            except FroniusError as err:
                _LOGGER.error("Unable to get inverter info: %s", err)
                return []

            records: list[MetricRecord] = []
            for inverter in inverters:
                records.extend(inverter_records(inverter))

            jobs: list[tuple[str, str, Callable[[str, Any], list[MetricRecord]]]] = []
            calls = []
            for inverter in inverters:
                device_id = inverter.device_id
                jobs.append((device_id, "common data", common_data_records))
                calls.append(api.get_inverter_common_data(device_id))
                jobs.append((device_id, "three phase data", three_phase_records))
                calls.append(api.get_inverter_three_phase_data(device_id))

            results = await asyncio.gather(*calls, return_exceptions=True)

        for (device_id, call, mapper), result in zip(jobs, results):
            if isinstance(result, FroniusError):
                _LOGGER.warning(
                    "Unable to get %s for inverter %s: %s", call, device_id, result
                )
                continue
            if isinstance(result, Exception):
                _LOGGER.error(
                    "Unexpected error getting %s for inverter %s",
                    call,
                    device_id,
                    exc_info=result,
                )
                continue
            if isinstance(result, BaseException):
                raise result
            records.extend(mapper(device_id, result))
        return records
