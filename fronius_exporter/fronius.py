"""Client for the Fronius Solar API v1."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .const import (
    API_PATH,
    DATA_COLLECTION_COMMON,
    DATA_COLLECTION_THREE_PHASE,
    DEFAULT_TIMEOUT,
    ENDPOINT_INVERTER_INFO,
    ENDPOINT_INVERTER_REALTIME_DATA,
    SCOPE_DEVICE,
    USER_AGENT,
)
from .envelope import parse_envelope
from .exceptions import (
    FroniusConnectionError,
    FroniusDataError,
    FroniusHTTPStatusError,
)
from .models import InverterCommonData, InverterInfo, InverterThreePhaseData

_LOGGER = logging.getLogger(__name__)


class Fronius:
    """Read-only client for the local JSON API of a Fronius inverter."""

    def __init__(
        self,
        host: str,
        websession: aiohttp.ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the Fronius client.

        Args:
            host: Base URL, hostname or IP address of the Fronius datalogger
            websession: Optional aiohttp ClientSession. If not provided, one will be created.
            timeout: Timeout in seconds applied to every request
        """
        if not host.startswith("http"):
            host = f"http://{host}"
        self.base_url = f"{host.rstrip('/')}{API_PATH}"
        self._websession = websession
        self._own_session = websession is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def close_connection(self) -> None:
        """Close the connection and clean up resources."""
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    async def _ensure_session(self) -> None:
        """Ensure a websession exists."""
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True

    async def __aenter__(self) -> Fronius:
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close_connection()

    async def _get(self, endpoint: str, params: dict[str, str]) -> Any:
        """Issue a GET request and return the payload of the response envelope."""
        await self._ensure_session()
        assert self._websession is not None
        url = f"{self.base_url}{endpoint}"
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        try:
            async with self._websession.get(
                url, params=params, headers=headers, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    raise FroniusHTTPStatusError(response.status, response.reason)
                raw = await response.read()
        except FroniusHTTPStatusError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise FroniusConnectionError(
                f"Failed to connect to device: {str(err) or type(err).__name__}"
            ) from err
        return parse_envelope(raw)

    async def get_inverter_info(self) -> list[InverterInfo]:
        """List all inverters known to the datalogger, ordered by device id."""
        data = await self._get(ENDPOINT_INVERTER_INFO, {"DeviceClass": "System"})
        _LOGGER.debug("Inverter info: %s", data)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise FroniusDataError(
                f"Unable to parse inverter info: expected an object, got {type(data).__name__}"
            )
        try:
            inverters = [
                InverterInfo.from_dict(device_id, entry) for device_id, entry in data.items()
            ]
        except (TypeError, ValueError, OverflowError) as err:
            raise FroniusDataError(f"Unable to parse inverter info: {err}") from err
        return sorted(inverters, key=lambda inverter: inverter.device_id)

    async def get_inverter_realtime_data(
        self, scope: str, data_collection: str, device_id: str
    ) -> Any:
        """Fetch one realtime data collection and return its undecoded payload."""
        return await self._get(
            ENDPOINT_INVERTER_REALTIME_DATA,
            {
                "Scope": scope,
                "DataCollection": data_collection,
                "DeviceId": device_id,
            },
        )

    async def get_inverter_common_data(self, device_id: str) -> InverterCommonData:
        """Fetch energy, DC and grid readings of one inverter."""
        data = await self.get_inverter_realtime_data(
            SCOPE_DEVICE, DATA_COLLECTION_COMMON, device_id
        )
        _LOGGER.debug("Common data for inverter %s: %s", device_id, data)
        if data is None:
            raise FroniusDataError("Unable to parse inverter common data: missing payload")
        try:
            return InverterCommonData.from_dict(data)
        except (TypeError, ValueError, OverflowError) as err:
            raise FroniusDataError(f"Unable to parse inverter common data: {err}") from err

    async def get_inverter_three_phase_data(self, device_id: str) -> InverterThreePhaseData:
        """Fetch per-phase grid voltage and current of one inverter."""
        data = await self.get_inverter_realtime_data(
            SCOPE_DEVICE, DATA_COLLECTION_THREE_PHASE, device_id
        )
        _LOGGER.debug("Three phase data for inverter %s: %s", device_id, data)
        if data is None:
            raise FroniusDataError(
                "Unable to parse inverter three phase data: missing payload"
            )
        try:
            return InverterThreePhaseData.from_dict(data)
        except (TypeError, ValueError, OverflowError) as err:
            raise FroniusDataError(
                f"Unable to parse inverter three phase data: {err}"
            ) from err
