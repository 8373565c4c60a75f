"""Access log + request id propagation.

A caller-supplied X-Request-ID (e.g. from a proxy) is kept when it looks
sane; otherwise a fresh ``req_<12 hex>`` id is minted. The id lands on
request.state for the response envelope and is echoed in the response header.

One line per request on logger ``ef.request``; 5xx responses log at WARNING:
    [POST] /api/v1/checkout 201 4ms req_a1b2c3d4e5f6
"""

import logging
import re
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.ef_common.response import new_request_id

logger = logging.getLogger("ef.request")

REQUEST_ID_HEADER = "X-Request-ID"
_INCOMING_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _pick_request_id(request: Request) -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER, "")
    return incoming if _INCOMING_ID.match(incoming) else new_request_id()


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _pick_request_id(request)
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        took_ms = (time.perf_counter() - started) * 1000

        logger.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "[%s] %s %d %.0fms %s",
            request.method,
            request.url.path,
            response.status_code,
            took_ms,
            request_id,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
