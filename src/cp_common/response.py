"""Unified API response envelope.

Every endpoint (and the AppError handler) answers with:
{
    "code": 0,           // 0=success, else the AppError code
    "message": "success",
    "data": { ... },     // null on error unless the error carries a payload
    "timestamp": "...",
    "request_id": "..."  // same id as the access-log line
}

Money inside `data` is serialized in JSON mode, so Decimals become strings.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=_new_request_id)


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(code=0, message="success", data=data)


def error_response(code: int, message: str, data: Any = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=data)


def tag_request(resp: ApiResponse, request: Request) -> ApiResponse:
    """Reuse the id RequestLogMiddleware assigned, when there is one."""
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


def respond(request: Request, data: BaseModel) -> ApiResponse:
    return tag_request(success_response(data.model_dump(mode="json")), request)
