import logging
import time
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("mockvideo.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        client = request.client.host if request.client else "-"

        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            "client=%s method=%s path=%s status=%s duration_ms=%.2f",
            client, request.method, request.url.path, response.status_code, duration_ms
        )
        return response


def register_request_logging(app):
    app.add_middleware(RequestLogMiddleware)
