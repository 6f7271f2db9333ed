# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
API router module, providing the global API router instance
"""

from fastapi import APIRouter

from docfit.api.endpoints import attachments, health

api_router = APIRouter()

# Health check endpoints (no prefix, directly under /api)
api_router.include_router(health.router, tags=["health"])
api_router.include_router(
    attachments.router, prefix="/attachments", tags=["attachments"]
)
