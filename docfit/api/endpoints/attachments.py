# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Attachment API endpoints for document processing.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from docfit.core.config import settings
from docfit.core.exceptions import ValidationException
from docfit.schemas.attachment import ProcessedDocumentResponse
from docfit.services.attachment import (
    DocumentProcessingError,
    document_ingestion_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/process", response_model=ProcessedDocumentResponse)
async def process_attachment(
    file: UploadFile = File(...),
    question: Optional[str] = Form(None),
    token_budget: Optional[int] = Form(None),
):
    """
    Process an uploaded document into a prompt-ready message.

    Supported file types:
    - PDF (.pdf)
    - Word (.docx)
    - Excel (.xlsx)
    - CSV / TSV (.csv, .tsv)
    - Plain text (.txt)
    - Markdown (.md)

    Large documents are sampled to fit the token budget: the beginning,
    middle and end are kept and omitted sections are marked.

    Returns:
        Sampled document text, sampling bookkeeping and the composed message
    """
    logger.info(
        f"[attachments.py] process_attachment: filename={file.filename}, "
        f"token_budget={token_budget}"
    )

    if not file.filename:
        raise ValidationException(detail="Filename is required")

    if token_budget is None:
        token_budget = settings.DOCUMENT_TOKEN_BUDGET
    elif not 1 <= token_budget <= settings.MAX_TOKEN_BUDGET:
        raise ValidationException(
            detail=f"token_budget must be between 1 and {settings.MAX_TOKEN_BUDGET}"
        )

    # Read file content
    try:
        binary_data = await file.read()
    except Exception as e:
        logger.error(f"Error reading uploaded file: {e}")
        raise HTTPException(
            status_code=400, detail="Failed to read uploaded file"
        ) from e

    # Validate file size before processing
    max_size_mb = settings.MAX_UPLOAD_FILE_SIZE_MB
    if len(binary_data) > max_size_mb * 1024 * 1024:
        raise ValidationException(
            detail=f"File size exceeds maximum limit ({max_size_mb} MB)"
        )

    try:
        processed = await asyncio.to_thread(
            document_ingestion_service.process,
            binary_data,
            file.filename,
            file.content_type,
            question,
            token_budget,
        )
        return ProcessedDocumentResponse.from_processed(processed)

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except DocumentProcessingError as e:
        # Return error with error_code for i18n mapping
        raise HTTPException(
            status_code=400,
            detail={
                "message": str(e),
                "error_code": e.error_code,
            },
        ) from e
    except Exception as e:
        logger.error(f"Error processing attachment: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Failed to process attachment"
        ) from e
