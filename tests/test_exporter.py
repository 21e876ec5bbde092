"""Tests for configuration and the metrics HTTP endpoint."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer
from prometheus_client import CollectorRegistry

from fronius_exporter import exporter
from fronius_exporter.collector import FroniusCollector
from fronius_exporter.config import ExporterConfig, build_parser
from fronius_exporter.exceptions import ConfigError, FroniusConnectionError
from fronius_exporter.fronius import Fronius

from .test_collector import FakeFronius, _healthy


def _config(*argv: str) -> ExporterConfig:
    return ExporterConfig.from_args(build_parser().parse_args(list(argv)))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    monkeypatch.delenv("FRONIUS_URL", raising=False)
    monkeypatch.delenv("LISTEN_ADDRESS", raising=False)


class TestExporterConfig:
    def test_defaults(self) -> None:
        config = _config("--fronius-url", "http://192.168.1.20")
        assert config.listen_address == ":9109"
        assert config.listen_host is None
        assert config.listen_port == 9109
        assert config.timeout == 15.0
        assert not config.debug

    def test_environment_fallback(self, monkeypatch) -> None:
        monkeypatch.setenv("FRONIUS_URL", "inverter.local")
        monkeypatch.setenv("LISTEN_ADDRESS", "127.0.0.1:8080")
        config = _config()
        assert config.fronius_url == "inverter.local"
        assert config.listen_host == "127.0.0.1"
        assert config.listen_port == 8080

    def test_ipv6_listen_address(self) -> None:
        config = _config("--fronius-url", "inverter", "--listen-address", "[::1]:9109")
        assert config.listen_host == "::1"
        assert config.listen_port == 9109

    def test_missing_url(self) -> None:
        with pytest.raises(ConfigError, match="no fronius-url set"):
            _config()

    @pytest.mark.parametrize(
        "url", ["http://inverter:notaport", "ftp://inverter", "http://", "http://[::1"]
    )
    def test_unparseable_url(self, url: str) -> None:
        with pytest.raises(ConfigError):
            _config("--fronius-url", url)

    @pytest.mark.parametrize("address", ["9109", ":http", "host:0", "host:70000"])
    def test_bad_listen_address(self, address: str) -> None:
        with pytest.raises(ConfigError):
            _config("--fronius-url", "inverter", "--listen-address", address)

    def test_bad_timeout(self) -> None:
        with pytest.raises(ConfigError):
            _config("--fronius-url", "inverter", "--timeout", "0")


class TestMain:
    def test_invalid_config_exits_non_zero(self, monkeypatch) -> None:
        monkeypatch.setattr(exporter, "setup_logging", lambda **kwargs: None)
        monkeypatch.setattr(
            exporter.web, "run_app", lambda *args, **kwargs: pytest.fail("must not serve")
        )
        assert exporter.main([]) == 1

    def test_serves_with_valid_config(self, monkeypatch) -> None:
        calls = {}
        monkeypatch.setattr(exporter, "setup_logging", lambda **kwargs: None)
        monkeypatch.setattr(
            exporter.web, "run_app", lambda app, **kwargs: calls.update(kwargs, app=app)
        )
        assert exporter.main(["--fronius-url", "inverter", "--listen-address", ":9200"]) == 0
        assert calls["host"] is None
        assert calls["port"] == 9200
        assert exporter.REGISTRY_KEY in calls["app"]


class TestBuildRegistry:
    def test_registers_inverter_collector(self) -> None:
        registry = exporter.build_registry(_config("--fronius-url", "inverter", "--timeout", "3"))
        collectors = [
            collector
            for collector in registry._collector_to_names
            if isinstance(collector, FroniusCollector)
        ]
        assert len(collectors) == 1
        api = collectors[0]._api_factory()
        assert isinstance(api, Fronius)
        assert api.base_url == "http://inverter/solar_api/v1"
        assert api._timeout.total == 3


async def _client(registry: CollectorRegistry) -> TestClient:
    client = TestClient(TestServer(exporter.create_app(registry)))
    await client.start_server()
    return client


@pytest_asyncio.fixture
async def healthy_client() -> AsyncGenerator[TestClient, None]:
    registry = CollectorRegistry()
    registry.register(FroniusCollector(lambda: _healthy("1")))
    client = await _client(registry)
    yield client
    await client.close()


class TestMetricsEndpoint:
    @pytest.mark.asyncio
    async def test_text_format(self, healthy_client) -> None:
        response = await healthy_client.get("/metrics")
        assert response.status == 200
        assert response.headers["Content-Type"].startswith("text/plain")
        body = await response.text()
        assert "# TYPE inverter_yield_total counter" in body or "# TYPE inverter_yield counter" in body
        assert 'inverter_yield_total{device_id="1"} 234611.6' in body
        assert 'fronius_inverter_status{device_id="1",status="running"} 1.0' in body

    @pytest.mark.asyncio
    async def test_openmetrics_format(self, healthy_client) -> None:
        response = await healthy_client.get(
            "/metrics", headers={"Accept": "application/openmetrics-text; version=1.0.0"}
        )
        assert response.status == 200
        assert response.headers["Content-Type"].startswith("application/openmetrics-text")
        body = await response.text()
        assert body.endswith("# EOF\n")
        assert 'inverter_yield_total{device_id="1"} 234611.6' in body

    @pytest.mark.asyncio
    async def test_all_devices_failing_still_answers(self) -> None:
        registry = CollectorRegistry()
        registry.register(FroniusCollector(lambda: FakeFronius(FroniusConnectionError("down"))))
        client = await _client(registry)
        try:
            response = await client.get("/metrics")
            assert response.status == 200
            assert "fronius_inverter_info{" not in await response.text()
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_unknown_path(self, healthy_client) -> None:
        response = await healthy_client.get("/")
        assert response.status == 404
