"""Exporter configuration."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from urllib.parse import urlsplit

from .const import DEFAULT_LISTEN_ADDRESS, DEFAULT_TIMEOUT
from .exceptions import ConfigError


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser; flags fall back to environment variables."""
    parser = argparse.ArgumentParser(
        prog="fronius-exporter",
        description="Prometheus exporter for Fronius solar inverters",
    )
    parser.add_argument(
        "--listen-address",
        default=os.environ.get("LISTEN_ADDRESS", DEFAULT_LISTEN_ADDRESS),
        help="The address to listen on for HTTP requests.",
    )
    parser.add_argument(
        "--fronius-url",
        default=os.environ.get("FRONIUS_URL", ""),
        help="URL for the fronius inverter.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Timeout in seconds for each request to the inverter.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser


@dataclass(frozen=True)
class ExporterConfig:
    """Validated exporter settings; invalid values raise ConfigError."""

    fronius_url: str
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False
    quiet: bool = False

    def __post_init__(self) -> None:
        if not self.fronius_url:
            raise ConfigError("no fronius-url set")
        url = self.fronius_url
        if "://" not in url:
            url = f"http://{url}"
        try:
            parts = urlsplit(url)
            _ = parts.port
        except ValueError as err:
            raise ConfigError(f"invalid fronius-url {self.fronius_url!r}: {err}") from err
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ConfigError(f"invalid fronius-url {self.fronius_url!r}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        self._validate_listen_address()

    def _validate_listen_address(self) -> None:
        _ = self.listen_port

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> ExporterConfig:
        """Build the config from parsed command line arguments."""
        return cls(
            fronius_url=args.fronius_url,
            listen_address=args.listen_address,
            timeout=args.timeout,
            debug=args.debug,
            quiet=args.quiet,
        )

    @property
    def listen_host(self) -> str | None:
        """Host part of the listen address; None listens on all interfaces."""
        host, _, _ = self.listen_address.rpartition(":")
        return host.strip("[]") or None

    @property
    def listen_port(self) -> int:
        """Port part of the listen address."""
        _, sep, port = self.listen_address.rpartition(":")
        if not sep:
            raise ConfigError(f"invalid listen-address {self.listen_address!r}")
        try:
            value = int(port)
        except ValueError as err:
            raise ConfigError(f"invalid listen-address {self.listen_address!r}") from err
        if not 0 < value < 65536:
            raise ConfigError(f"invalid listen-address {self.listen_address!r}")
        return value
