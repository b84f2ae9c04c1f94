"""Connection settings and route filters."""

import ipaddress
import os
import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_PORT = "8443"
DEFAULT_VERSION = "10"
DEFAULT_TIMEOUT = 30.0

_ENV_KEYS = {
    "host": "AXL_HOST",
    "username": "AXL_USERNAME",
    "password": "AXL_PASSWORD",
    "port": "AXL_PORT",
    "version": "AXL_VERSION",
    "verify_tls": "AXL_VERIFY_TLS",
    "timeout": "AXL_TIMEOUT",
}


@dataclass(frozen=True)
class AxlSettings:
    host: str
    username: str
    password: str
    port: str = DEFAULT_PORT
    version: str = DEFAULT_VERSION
    verify_tls: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @property
    def endpoint(self) -> str:
        return f"https://{self.host}:{self.port}/axl/"

    @property
    def namespace(self) -> str:
        return f"http://www.cisco.com/AXL/API/{self.version}.0"

    @classmethod
    def from_env(cls, overrides: Mapping[str, Any] | None = None) -> "AxlSettings":
        """Read AXL_* variables (and .env), then apply non-empty overrides."""
        load_dotenv()
        raw: Dict[str, Any] = {}
        for name, env_key in _ENV_KEYS.items():
            value = os.getenv(env_key)
            if value:
                raw[name] = value
        for name, value in (overrides or {}).items():
            if value not in (None, ""):
                raw[name] = value

        missing = [name for name in ("host", "username", "password") if not raw.get(name)]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(missing)}")

        return cls(
            host=validate_ip_address(str(raw["host"])),
            username=str(raw["username"]),
            password=str(raw["password"]),
            port=str(raw.get("port", DEFAULT_PORT)),
            version=normalize_version(str(raw.get("version", DEFAULT_VERSION))),
            verify_tls=_as_bool(raw.get("verify_tls", False)),
            timeout=parse_timeout(raw.get("timeout", DEFAULT_TIMEOUT)),
        )


@dataclass(frozen=True)
class RouteFilters:
    """LIKE patterns narrowing the route queries; ``%`` is the wildcard."""

    css: str | None = None
    partition: str | None = None
    pattern: str | None = None
    route_list: str | None = None
    route_group: str | None = None
    device: str | None = None

    def active(self) -> Dict[str, str]:
        active: Dict[str, str] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value:
                active[item.name] = value
        return active


def validate_ip_address(host: str) -> str:
    try:
        ipaddress.ip_address(host)
    except ValueError as error:
        raise ConfigError(f"IP address is not valid: {host}") from error
    return host


def parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as error:
        raise ConfigError(f"Invalid AXL timeout: {value}") from error
    if timeout <= 0:
        raise ConfigError(f"AXL timeout must be positive: {value}")
    return timeout


def normalize_version(version: str) -> str:
    # Only the major release selects the AXL schema.
    match = re.match(r"\s*(\d+)", version)
    if not match:
        raise ConfigError(f"Invalid CUCM version: {version}")
    return str(int(match.group(1)))


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
