# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health_check():
    """
    Liveness probe endpoint.

    Returns:
        dict: Health status
    """
    return {"status": "healthy"}
