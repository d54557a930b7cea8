"""Parse loosely written node endpoints and render per-family request URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_SCHEME = "http"

_ENDPOINT_RE = re.compile(
    r"^(?:(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*)://)?"
    r"(?P<host>\[[0-9A-Fa-f:.]+\]|[^:/?#\[\]@\s]+)?"
    r"(?::(?P<port>[0-9]+))?"
    r"(?P<path>/[^?#\s]*)?"
    r"(?:[?#]\S*)?$"
)
_CHAIN_ALIAS_RE = re.compile(r"^/ext/bc/(?P<alias>[^/]+)")


class ApiFamily(str, Enum):
    INFO = "/ext/info"
    PLATFORM = "/ext/P"
    HEALTH = "/ext/health"
    LIVENESS = "/ext/health/liveness"


class EndpointParseError(ValueError):
    """Raised when an endpoint string has no usable host or port."""


@dataclass(frozen=True)
class Endpoint:
    host: str
    scheme: Optional[str] = None
    port: Optional[int] = None
    base_path: str = ""
    chain_alias: Optional[str] = None

    def url(self, family: ApiFamily) -> str:
        # the family decides routing, base_path is deliberately dropped
        scheme = self.scheme or DEFAULT_SCHEME
        if self.port is not None:
            return f"{scheme}://{self.host}:{self.port}{family.value}"
        return f"{scheme}://{self.host}{family.value}"


def parse_endpoint(raw: str) -> Endpoint:
    """Split ``raw`` into scheme, host, port, path and chain alias.

    Accepts ``host``, ``host:port``, ``scheme://host[:port][/path]`` and
    bracketed IPv6 hosts. A path of the form ``/ext/bc/<alias>/...`` yields
    the chain alias.
    """
    match = _ENDPOINT_RE.match(raw.strip())
    if match is None:
        raise EndpointParseError(f"malformed endpoint {raw!r}")

    host = match.group("host")
    if not host:
        raise EndpointParseError(f"no host in endpoint {raw!r}")

    port: Optional[int] = None
    if match.group("port") is not None:
        port = int(match.group("port"))
        if not 0 < port <= 65535:
            raise EndpointParseError(f"port {port} out of range in endpoint {raw!r}")

    path = match.group("path") or ""
    alias_match = _CHAIN_ALIAS_RE.match(path)
    return Endpoint(
        host=host,
        scheme=match.group("scheme").lower() if match.group("scheme") else None,
        port=port,
        base_path=path,
        chain_alias=alias_match.group("alias") if alias_match else None,
    )


def resolve_url(raw: str, family: ApiFamily) -> str:
    return parse_endpoint(raw).url(family)
