# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ValidationException(HTTPException):
    """Rejected upload or form parameter"""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _error_body(request: Request, error_code, detail) -> dict:
    body = {"error_code": error_code, "detail": detail}
    # Set by the request logging middleware
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body["request_id"] = request_id
    return body


async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.status_code, exc.detail),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation exception handler"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            **_error_body(
                request,
                status.HTTP_422_UNPROCESSABLE_ENTITY,
                "Request parameter validation failed",
            ),
            "errors": exc.errors(),
        },
    )


async def python_exception_handler(request: Request, exc: Exception):
    """Unhandled exception handler"""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        ),
    )
