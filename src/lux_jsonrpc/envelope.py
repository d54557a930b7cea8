"""JSON-RPC 2.0 request and response envelopes.

Four request shapes cover every parameter convention the node API uses:

* ``Request`` - a string-keyed mapping, or no params at all
* ``PositionalRequest`` - an ordered list of strings
* ``ArrayOfMapsRequest`` - a list of string-to-string mappings
* ``MapOfArraysRequest`` - a mapping of string to list of strings

Serialized keys always come out in ``jsonrpc, id, method, params`` order and
``params`` is omitted when it is ``None``. An empty mapping is kept, since
several methods expect ``"params":{}`` rather than no params.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from .errors import ErrorKind, RPCError

JSONRPC_VERSION = "2.0"
# every call is a single request/response pair, so a fixed id is enough
DEFAULT_ID = 1

T = TypeVar("T")


@dataclass(frozen=True)
class BaseRequest:
    method: str
    jsonrpc: str = field(default=JSONRPC_VERSION, kw_only=True)
    id: int = field(default=DEFAULT_ID, kw_only=True)

    def _params(self) -> Any:
        return None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id, "method": self.method}
        params = self._params()
        if params is not None:
            payload["params"] = params
        return payload

    def encode_json(self) -> bytes:
        try:
            return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise RPCError(f"failed to encode request '{exc}'", cause=exc) from exc

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]):
        kwargs: Dict[str, Any] = {"jsonrpc": doc["jsonrpc"], "id": doc["id"]}
        if "params" in doc:
            kwargs["params"] = doc["params"]
        return cls(doc["method"], **kwargs)

    @classmethod
    def decode_json(cls, raw: bytes):
        return cls.from_dict(json.loads(raw))


@dataclass(frozen=True)
class Request(BaseRequest):
    params: Optional[Dict[str, Any]] = None

    def _params(self) -> Any:
        return self.params


@dataclass(frozen=True)
class PositionalRequest(BaseRequest):
    params: Optional[List[str]] = None

    def _params(self) -> Any:
        return self.params


@dataclass(frozen=True)
class ArrayOfMapsRequest(BaseRequest):
    params: Optional[List[Dict[str, str]]] = None

    def _params(self) -> Any:
        return self.params


@dataclass(frozen=True)
class MapOfArraysRequest(BaseRequest):
    params: Optional[Dict[str, List[str]]] = None

    def _params(self) -> Any:
        return self.params


@dataclass(frozen=True)
class ResponseError:
    code: int
    message: str
    data: Optional[str] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "ResponseError":
        data = doc.get("data")
        if data is not None and not isinstance(data, str):
            # structured data is kept as its JSON text
            data = json.dumps(data, separators=(",", ":"))
        return cls(code=int(doc["code"]), message=str(doc["message"]), data=data)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


@dataclass(frozen=True)
class Response(Generic[T]):
    jsonrpc: str = JSONRPC_VERSION
    # null when the server could not read the request id (parse or invalid-request errors)
    id: Optional[int] = DEFAULT_ID
    result: Optional[T] = None
    error: Optional[ResponseError] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any], parse_result: Callable[[Mapping[str, Any]], T]) -> "Response[T]":
        raw_result = doc.get("result")
        raw_error = doc.get("error")
        raw_id = doc.get("id", DEFAULT_ID)
        return cls(
            jsonrpc=str(doc.get("jsonrpc", JSONRPC_VERSION)),
            id=None if raw_id is None else int(raw_id),
            result=None if raw_result is None else parse_result(raw_result),
            error=None if raw_error is None else ResponseError.from_dict(raw_error),
        )

    def raise_for_error(self) -> "Response[T]":
        """Raise the server-reported error, if any; return ``self`` otherwise."""
        if self.error is not None:
            raise RPCError(
                f"node returned error '{self.error.message}'",
                kind=ErrorKind.API,
                code=self.error.code,
            )
        return self


def decode_document(raw: bytes) -> Dict[str, Any]:
    try:
        doc = json.loads(raw)
    except ValueError as exc:
        raise RPCError(f"failed to decode JSON response '{exc}'", cause=exc) from exc
    if not isinstance(doc, dict):
        raise RPCError(f"expected JSON object in response, got {type(doc).__name__}")
    return doc


def decode_response(raw: bytes, parse_result: Callable[[Mapping[str, Any]], T]) -> Response[T]:
    doc = decode_document(raw)
    try:
        return Response.from_dict(doc, parse_result)
    except (KeyError, TypeError, ValueError) as exc:
        raise RPCError(f"response missing expected field {exc}", cause=exc) from exc
