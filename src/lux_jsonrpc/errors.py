"""Error taxonomy for node RPC calls with an explicit retryable flag."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import requests


class ErrorKind(str, Enum):
    # remote call itself failed (send/receive)
    API = "api"
    # everything local: parsing, encoding, body read, decoding
    OTHER = "other"


@dataclass
class RPCError(Exception):
    """Domain error carrying the failure kind and whether a retry makes sense."""

    message: str
    kind: ErrorKind = ErrorKind.OTHER
    retryable: bool = False
    code: Optional[int] = None
    cause: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - representational only
        suffix = [f"kind={self.kind.value}", f"retryable={self.retryable}"]
        if self.code is not None:
            suffix.append(f"code={self.code}")
        return f"{self.message} ({', '.join(suffix)})"


def classify_transport_error(exc: requests.RequestException) -> RPCError:
    """Map a failed send to an API error, retryable only for transient causes."""
    if isinstance(exc, requests.Timeout):
        retryable = True
    elif isinstance(exc, requests.exceptions.SSLError):
        # certificate or handshake problems will not fix themselves
        retryable = False
    elif isinstance(exc, requests.ConnectionError):
        # refused, reset, DNS resolution
        retryable = True
    else:
        retryable = False
    return RPCError(
        f"failed to send request '{exc}'",
        kind=ErrorKind.API,
        retryable=retryable,
        cause=exc,
    )


def body_read_error(exc: OSError) -> RPCError:
    # dropped connections and raw socket errors are transient, undecodable bodies are not
    if isinstance(exc, requests.RequestException):
        retryable = isinstance(exc, (requests.exceptions.ChunkedEncodingError, requests.ConnectionError))
    else:
        retryable = True
    return RPCError(f"failed to read response body '{exc}'", retryable=retryable, cause=exc)
