import contextlib
import logging
import socket
import threading
import time
from typing import Optional, Protocol

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .errors import RPCError, body_read_error, classify_transport_error

LOG = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def _response_socket(response: requests.Response) -> Optional[socket.socket]:
    raw = response.raw
    sock = getattr(getattr(raw, "connection", None), "sock", None)
    if sock is None:
        # http.client hands the socket to the body reader when the server closes after the response
        body_reader = getattr(getattr(raw, "_fp", None), "fp", None)
        sock = getattr(getattr(body_reader, "raw", None), "_sock", None)
    return sock


class Dispatcher(Protocol):
    def dispatch(self, url: str, method: str = "POST", body: Optional[bytes] = None) -> bytes:
        ...


class HttpDispatcher:
    """Pooled HTTP transport with a fixed user agent, timeout and TLS policy.

    The session is shared by every call made through this dispatcher; urllib3
    keeps the connection pool thread-safe. No retries happen here.

    ``config.timeout`` bounds the whole call, body included. Silencing
    urllib3's ``InsecureRequestWarning`` is left to the application.
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self.config = config or ClientConfig()
        self.session = self._build_session()

    def _build_session(self) -> requests.Session:
        try:
            session = requests.Session()
            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=self.config.pool_connections,
                pool_maxsize=self.config.pool_maxsize,
            )
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        except (OSError, ValueError) as exc:
            raise RPCError(f"failed to build HTTP session '{exc}'", cause=exc) from exc
        session.headers.update({"User-Agent": self.config.user_agent})
        session.verify = self.config.verify_tls
        return session

    def dispatch(self, url: str, method: str = "POST", body: Optional[bytes] = None) -> bytes:
        headers = {"Content-Type": "application/json"} if body is not None else None
        started = time.monotonic()
        deadline = started + self.config.timeout
        try:
            # covers connect and first byte; the deadline covers the body
            response = self.session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.config.timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            raise classify_transport_error(exc) from exc

        try:
            content = self._read_body(response, deadline)
        finally:
            response.close()

        if self.config.verbose:
            LOG.debug(
                "%s %s -> %s (%d bytes, %.3fs)",
                method,
                url,
                response.status_code,
                len(content),
                time.monotonic() - started,
            )
        return content

    def _deadline_error(self) -> RPCError:
        return RPCError(f"request exceeded total timeout of {self.config.timeout}s", retryable=True)

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        expired = threading.Event()
        sock = _response_socket(response)

        def expire() -> None:
            expired.set()
            if sock is not None:
                # wakes a read blocked on a slow server
                with contextlib.suppress(OSError):
                    sock.shutdown(socket.SHUT_RDWR)

        watchdog = threading.Timer(max(deadline - time.monotonic(), 0.0), expire)
        watchdog.daemon = True
        watchdog.start()
        chunks = []
        try:
            for chunk in response.iter_content(CHUNK_SIZE):
                if expired.is_set() or time.monotonic() > deadline:
                    raise self._deadline_error()
                chunks.append(chunk)
        except OSError as exc:
            if expired.is_set():
                raise self._deadline_error() from exc
            raise body_read_error(exc) from exc
        finally:
            watchdog.cancel()

        if expired.is_set():
            raise self._deadline_error()
        return b"".join(chunks)

    def close(self) -> None:
        self.session.close()
