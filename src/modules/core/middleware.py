import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()


class CorrelationIdMiddleware:
    """Tags every request with a correlation ID and logs its outcome.

    The ID comes from the ``X-Request-ID`` header or is a fresh UUID4. It is
    bound to the structlog context for the lifetime of the request and echoed
    back in the response header of the same name.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        start = time.monotonic()
        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )

        response[REQUEST_ID_HEADER] = cid
        return response
