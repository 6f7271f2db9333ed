# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging
import time
import uuid

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from docfit.api.api import api_router
from docfit.core.config import settings
from docfit.core.exceptions import (
    http_exception_handler,
    python_exception_handler,
    validation_exception_handler,
)
from docfit.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


def create_app():
    # Toggle API docs/OpenAPI via environment (settings.ENABLE_API_DOCS, default True)
    enable_docs = settings.ENABLE_API_DOCS
    openapi_url = f"{settings.API_PREFIX}/openapi.json" if enable_docs else None
    docs_url = f"{settings.API_PREFIX}/docs" if enable_docs else None
    redoc_url = f"{settings.API_PREFIX}/redoc" if enable_docs else None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Document ingestion and adaptive sampling API",
        version=settings.VERSION,
        openapi_url=openapi_url,
        docs_url=docs_url,
        redoc_url=redoc_url,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        # Skip logging for health check/probe requests (root path)
        if request.url.path == "/":
            return await call_next(request)

        # First 8 characters of a UUID
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()
        client_ip = request.client.host if request.client else "Unknown"

        logger.info(
            f"request : {request.method} {request.url.path} {request.query_params} {request_id} {client_ip}"
        )

        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000

        logger.info(
            f"response: {request.method} {request.url.path} {request.query_params} {request_id} {client_ip} {response.status_code} {process_time:.2f}ms"
        )

        # Add request ID to response headers for client-side tracking
        response.headers["X-Request-ID"] = request_id

        return response

    # Setup CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, python_exception_handler)

    # Include API routes
    app.include_router(api_router, prefix=settings.API_PREFIX)

    # Root path
    @app.get("/")
    async def root():
        """
        Root path, returns API information
        """
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "api_prefix": settings.API_PREFIX,
            "docs_url": docs_url,
        }

    return app


app = create_app()
