"""Node health checks over ``GET /ext/health`` and ``GET /ext/health/liveness``."""

import asyncio
from typing import Optional

from .client import JsonRpcClient
from .http_client import Dispatcher
from .models import HealthResult
from .urls import ApiFamily


class HealthClient(JsonRpcClient):
    def check(self, liveness: bool = False) -> HealthResult:
        # an unhealthy node answers 503 with a normal body, so the status is not inspected
        family = ApiFamily.LIVENESS if liveness else ApiFamily.HEALTH
        return self._get(family, HealthResult.from_dict, "checking liveness" if liveness else "checking health")

    def health_check(self) -> bytes:
        return self.dispatcher.dispatch(self._url(ApiFamily.HEALTH), "GET")


async def spawn_check(endpoint: str, liveness: bool = False, dispatcher: Optional[Dispatcher] = None) -> HealthResult:
    """Run a health check in a worker thread as an independently awaitable unit.

    Wrap it in ``asyncio.wait_for`` to time-box the check without touching the
    caller's other work.
    """
    client = HealthClient(endpoint, dispatcher=dispatcher)
    try:
        return await asyncio.to_thread(client.check, liveness)
    finally:
        client.close()
