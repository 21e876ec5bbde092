"""HTTP server exposing the collected inverter metrics."""

from __future__ import annotations

import asyncio
import functools
import logging
import sys
from collections.abc import Sequence

from aiohttp import web
from prometheus_client import (
    CollectorRegistry,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
)
from prometheus_client.exposition import choose_encoder

from .collector import FroniusCollector
from .config import ExporterConfig, build_parser
from .exceptions import ConfigError
from .fronius import Fronius

_LOGGER = logging.getLogger(__name__)

REGISTRY_KEY = web.AppKey("registry", CollectorRegistry)
ACCESS_LOG_FORMAT = '%a "%r" %s %b %Tfs'


def setup_logging(debug: bool = False, quiet: bool = False) -> None:
    """Configure root logger according to CLI flags.

    Same console format as the SolarEdge monitor; --quiet wins over --debug.
    """
    level = logging.DEBUG if debug else logging.INFO
    if quiet:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def build_registry(config: ExporterConfig) -> CollectorRegistry:
    """Create a registry holding the inverter and process collectors."""
    registry = CollectorRegistry()
    registry.register(
        FroniusCollector(
            functools.partial(Fronius, config.fronius_url, timeout=config.timeout)
        )
    )
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)
    return registry


async def handle_metrics(request: web.Request) -> web.Response:
    """Render all registered metrics in the format the scraper asked for."""
    registry = request.app[REGISTRY_KEY]
    encoder, content_type = choose_encoder(request.headers.get("Accept", ""))
    # Collectors run their own event loop, so encode off the server loop
    loop = asyncio.get_running_loop()
    body = await loop.run_in_executor(None, encoder, registry)
    return web.Response(body=body, headers={"Content-Type": content_type})


def create_app(registry: CollectorRegistry) -> web.Application:
    """Create the web application serving /metrics from the registry."""
    app = web.Application()
    app[REGISTRY_KEY] = registry
    app.router.add_get("/metrics", handle_metrics)
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Run the exporter; returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug, quiet=args.quiet)
    try:
        config = ExporterConfig.from_args(args)
    except ConfigError as err:
        _LOGGER.critical("Invalid configuration: %s", err)
        return 1

    app = create_app(build_registry(config))
    _LOGGER.info(
        "Exporting metrics of %s on %s", config.fronius_url, config.listen_address
    )
    web.run_app(
        app,
        host=config.listen_host,
        port=config.listen_port,
        access_log=logging.getLogger("aiohttp.access"),
        access_log_format=ACCESS_LOG_FORMAT,
        print=None,
    )
    return 0
