from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from ..schemas.common import ApiResponse, ErrorResponse


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or ""


def ok(request: Request, data: Any = None, message: str = "") -> ApiResponse[Any]:
    return ApiResponse(success=True, message=message, request_id=_request_id(request), data=data)


def fail(
    request: Request,
    error: str,
    message: str,
    status_code: int = 400,
    details: Optional[dict] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, request_id=_request_id(request), details=details or {})
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
