import logging
from typing import Any, Callable, Mapping, Optional, TypeVar

from .config import ClientConfig
from .envelope import BaseRequest, Response, decode_document, decode_response
from .errors import RPCError
from .http_client import Dispatcher, HttpDispatcher
from .urls import ApiFamily, EndpointParseError, resolve_url

LOG = logging.getLogger(__name__)

T = TypeVar("T")


class JsonRpcClient:
    """Shared plumbing for the per-family node clients.

    The endpoint string is re-resolved on every call so a bad endpoint fails
    at call time, before any network I/O.
    """

    def __init__(
        self,
        endpoint: str,
        dispatcher: Optional[Dispatcher] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        self.endpoint = endpoint
        # only a dispatcher built here is closed by close()
        self._owns_dispatcher = dispatcher is None
        self.dispatcher = dispatcher or HttpDispatcher(config)

    def close(self) -> None:
        if self._owns_dispatcher:
            self.dispatcher.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _url(self, family: ApiFamily) -> str:
        try:
            return resolve_url(self.endpoint, family)
        except EndpointParseError as exc:
            raise RPCError(f"failed to parse endpoint '{exc}'", cause=exc) from exc

    def _call(
        self,
        family: ApiFamily,
        request: BaseRequest,
        parse_result: Callable[[Mapping[str, Any]], T],
        action: str,
    ) -> Response[T]:
        url = self._url(family)
        LOG.info("%s via %s", action, url)
        body = request.encode_json()
        raw = self.dispatcher.dispatch(url, "POST", body)
        return decode_response(raw, parse_result)

    def _get(self, family: ApiFamily, parse: Callable[[Mapping[str, Any]], T], action: str) -> T:
        url = self._url(family)
        LOG.info("%s via %s", action, url)
        raw = self.dispatcher.dispatch(url, "GET")
        doc = decode_document(raw)
        try:
            return parse(doc)
        except (KeyError, TypeError, ValueError) as exc:
            raise RPCError(f"response missing expected field {exc}", cause=exc) from exc
