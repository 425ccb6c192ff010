"""
Request logging middleware.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response

from fixitnow.config.logging import bind_request_context, get_logger
from fixitnow.config.settings import settings
from fixitnow.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)


class LoggingMiddleware:
    """
    Binds a request id and the acting party to the log context.

    Lifecycle logs emitted while the request runs (transitions, conflicts,
    settlements) carry the same ``request_id`` as the access log line.
    """

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
            bind_request_context(
                request_id=request_id,
                actor_kind=request.headers.get("x-actor-kind"),
                actor_id=request.headers.get("x-actor-id"),
            )
            request.state.request_id = request_id
            started = time.time()

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Request failed",
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                    duration_ms=round((time.time() - started) * 1000, 2),
                )
                raise

            route = request.scope.get("route")
            endpoint = getattr(route, "path", request.url.path)
            duration_ms = round((time.time() - started) * 1000, 2)

            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request handled",
                method=request.method,
                endpoint=endpoint,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

            if settings.ENABLE_METRICS:
                record_api_request(request.method, endpoint, response.status_code, started)

            response.headers["X-Request-ID"] = request_id
            return response
