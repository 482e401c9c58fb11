"""
Mapping of policy errors onto HTTP responses.

All errors share the envelope ``{"error": {"code", "message", "status"}}``.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.policy.errors import InvalidState, NotFound, PermissionDenied, PolicyError

log = structlog.get_logger()

STATUS_BY_ERROR: dict[type[PolicyError], int] = {
    PermissionDenied: 403,
    NotFound: 404,
    InvalidState: 409,
}


def error_response(code: str, message: str, status: int) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"code": code, "message": message, "status": status}},
    )


async def policy_error_handler(request: Request, exc: PolicyError) -> JSONResponse:
    status = 400
    for error_type, mapped in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            status = mapped
            break
    log.info("request.policy_error", code=exc.code, status=status, resource=exc.resource)
    return error_response(exc.code, exc.message, status)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PolicyError, policy_error_handler)
