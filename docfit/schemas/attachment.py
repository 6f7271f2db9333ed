# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Attachment schemas for API responses.
"""

from pydantic import BaseModel

from docfit.services.attachment.ingestion import ProcessedDocument


class ProcessedDocumentResponse(BaseModel):
    """Response model for a processed document upload."""

    filename: str
    format: str
    content_kind: str
    tier: str
    text: str
    text_length: int
    was_truncated: bool
    total_units: int
    included_units: int
    message: str  # Prompt-ready message for the language model

    @classmethod
    def from_processed(cls, processed: ProcessedDocument) -> "ProcessedDocumentResponse":
        result = processed.result
        return cls(
            filename=processed.filename,
            format=processed.document_format.value,
            content_kind=processed.document_format.content_kind.value,
            tier=result.tier.value,
            text=result.text,
            text_length=result.text_length,
            was_truncated=result.was_truncated,
            total_units=result.total_units,
            included_units=result.included_units,
            message=processed.message,
        )
