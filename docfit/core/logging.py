# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging
import sys

from docfit.core.config import settings

# PyPDF2 warns once per malformed object; a scanned upload can produce hundreds
NOISY_LOGGERS = ["PyPDF2", "pypdf"]


def setup_logging() -> None:
    """Configure simple logging format at the configured level"""
    logging.basicConfig(
        format="%(asctime)s %(levelname)-4s : %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=settings.LOG_LEVEL.upper(),
    )

    # Route server logs through the root handler
    for name in ["uvicorn", "uvicorn.error", "fastapi"]:
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True

    # Requests are logged by the request-id middleware instead
    logging.getLogger("uvicorn.access").handlers.clear()
    logging.getLogger("uvicorn.access").propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)
