"""Envelope shared by every /api/v1 response.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "<utc iso>", "request_id": "req_..."}

``code`` is 0 on success and the AppError code otherwise; ``data`` is null on
errors. Handlers build envelopes through ``respond`` / ``error_response`` so
the request_id matches the X-Request-ID header set by RequestLogMiddleware.
"""

import uuid
from typing import Any

from fastapi import Request
from pydantic import BaseModel, Field

from src.ef_common.datetime_utils import utc_now


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    request_id: str = Field(default_factory=new_request_id)


def _request_id(request: Request | None) -> str:
    if request is None:
        return new_request_id()
    return getattr(request.state, "request_id", None) or new_request_id()


def success_response(
    data: Any = None, message: str = "success", request: Request | None = None
) -> ApiResponse:
    return ApiResponse(code=0, message=message, data=data, request_id=_request_id(request))


def error_response(code: int, message: str, request: Request | None = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None, request_id=_request_id(request))


def respond(request: Request, data: Any = None, message: str = "success") -> ApiResponse:
    """Router shorthand: success envelope for the current request."""
    return success_response(data, message, request)
