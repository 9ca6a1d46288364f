"""Request id propagation for the HTTP layer and log records."""
from __future__ import annotations

import logging
from contextvars import ContextVar
from time import perf_counter
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-Id"

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)

logger = logging.getLogger(__name__)


def get_request_id() -> str | None:
    return request_id_ctx_var.get()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Reuse the caller's X-Request-Id (or mint one) for the lifetime of a request.

    The id lands on ``request.state.request_id``, in the context variable read
    by the logging filter, and on the response header.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        token = request_id_ctx_var.set(request_id)
        started = perf_counter()

        try:
            response = await call_next(request)
            logger.debug(
                "%s %s -> %s in %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                (perf_counter() - started) * 1000,
            )
        finally:
            request_id_ctx_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
