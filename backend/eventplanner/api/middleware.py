"""
Request middleware: correlation id, access log and latency metric.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from eventplanner.core.logging import get_logger
from eventplanner.core.metrics import observe_request

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by Docker, load balancers and Prometheus; logged at debug only
QUIET_PATHS = {"/health", "/metrics"}


def route_label(request: Request) -> str:
    """
    Route template for labels, e.g. /api/events/{event_id}.

    The matched route can come from a nested router and carry only its own
    prefix, so leading literal segments missing from the template are taken
    from the request path.
    """
    route = request.scope.get("route")
    template = getattr(route, "path_format", None) or getattr(route, "path", None)
    if template is None:
        return "unmatched"
    path_parts = request.url.path.strip("/").split("/")
    template_parts = template.strip("/").split("/") if template.strip("/") else []
    missing = len(path_parts) - len(template_parts)
    if missing > 0:
        template_parts = path_parts[:missing] + template_parts
    return "/" + "/".join(template_parts)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds request_id / method / path into the structlog context for every
    record logged while the request runs. A caller-supplied X-Request-ID is
    reused so ids can be followed across services; otherwise a short one is
    generated. Latency is recorded against the route template
    (/api/events/{event_id}), not the concrete path.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        elapsed = time.perf_counter() - start_time
        duration_ms = round(elapsed * 1000, 2)
        route = route_label(request)

        if request.url.path in QUIET_PATHS:
            log = logger.debug
        elif response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log("request_completed", route=route, status_code=response.status_code, duration_ms=duration_ms)

        observe_request(request.method, route, response.status_code, elapsed)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response
