from .config import ClientConfig
from .envelope import ArrayOfMapsRequest, MapOfArraysRequest, PositionalRequest, Request, Response, ResponseError
from .errors import ErrorKind, RPCError
from .health import HealthClient, spawn_check
from .http_client import Dispatcher, HttpDispatcher
from .info import InfoClient
from .platformvm import PlatformClient
from .urls import ApiFamily, Endpoint, EndpointParseError, parse_endpoint, resolve_url

__all__ = [
    "ApiFamily",
    "ArrayOfMapsRequest",
    "ClientConfig",
    "Dispatcher",
    "Endpoint",
    "EndpointParseError",
    "ErrorKind",
    "HealthClient",
    "HttpDispatcher",
    "InfoClient",
    "MapOfArraysRequest",
    "PlatformClient",
    "PositionalRequest",
    "RPCError",
    "Request",
    "Response",
    "ResponseError",
    "parse_endpoint",
    "resolve_url",
    "spawn_check",
]
