"""FastAPI middleware for request metrics"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from pixelfin.infrastructure.observability.metrics import request_duration_histogram


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe request latency, labelled by route template rather than raw path"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)

        route = request.scope.get("route")
        endpoint = getattr(route, "path", None) or "unmatched"
        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(time.perf_counter() - start_time)

        return response
