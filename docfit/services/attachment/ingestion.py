# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Ingestion service turning an uploaded document into a prompt-ready message.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from docfit.services.attachment.budget import DEFAULT_TOKEN_BUDGET
from docfit.services.attachment.exceptions import UnsupportedFormatError
from docfit.services.attachment.extractors import (
    BaseExtractor,
    DelimitedTextExtractor,
    PDFExtractor,
    SpreadsheetExtractor,
    TextExtractor,
    WordExtractor,
)
from docfit.services.attachment.format_detection import (
    DocumentFormat,
    DocumentFormatDetector,
)
from docfit.services.attachment.models import SampledResult
from docfit.services.attachment.prompt import compose_document_message
from docfit.services.attachment.sampling import SamplingManager, sampling_manager

logger = logging.getLogger(__name__)


@dataclass
class ProcessedDocument:
    """Outcome of processing one upload."""

    filename: str
    document_format: DocumentFormat
    result: SampledResult
    message: str

    @property
    def was_truncated(self) -> bool:
        return self.result.was_truncated


class DocumentIngestionService:
    """
    Service for processing uploaded documents.

    Detects the format, runs the matching structural extractor, samples the
    extracted content into the token budget and composes the outgoing
    message. Each call works on its own data; nothing is kept between calls.
    """

    def __init__(
        self,
        manager: Optional[SamplingManager] = None,
        extractors: Optional[Dict[DocumentFormat, BaseExtractor]] = None,
    ):
        self.manager = manager or sampling_manager
        self.extractors = extractors or {
            DocumentFormat.PDF: PDFExtractor(),
            DocumentFormat.DOCX: WordExtractor(),
            DocumentFormat.TXT: TextExtractor(),
            DocumentFormat.MARKDOWN: TextExtractor(),
            DocumentFormat.EXCEL: SpreadsheetExtractor(),
            DocumentFormat.CSV: DelimitedTextExtractor(","),
            DocumentFormat.TSV: DelimitedTextExtractor("\t"),
        }

    def process(
        self,
        binary_data: bytes,
        filename: str,
        mime_type: Optional[str] = None,
        question: Optional[str] = None,
        token_budget: int = DEFAULT_TOKEN_BUDGET,
    ) -> ProcessedDocument:
        """
        Process an uploaded document.

        Args:
            binary_data: File binary data
            filename: Original filename
            mime_type: MIME type reported by the client, if any
            question: Optional user question about the document
            token_budget: Token target for the document content

        Returns:
            ProcessedDocument with the sampled result and composed message

        Raises:
            ValueError: If token_budget is not a positive integer
            UnsupportedFormatError: If no extractor handles the file
            ExtractionError: If the file cannot be read
        """
        document_format = DocumentFormatDetector.detect(filename, mime_type)

        extractor = self.extractors.get(document_format)
        if extractor is None:
            raise UnsupportedFormatError(
                f"No extractor registered for {document_format.value} files"
            )

        content = extractor.extract(binary_data)
        result = self.manager.sample(content, token_budget)
        message = compose_document_message(document_format, filename, result, question)

        logger.info(
            f"Document processed: filename={filename}, format={document_format.value}, "
            f"size={len(binary_data)}, tier={result.tier.value}, "
            f"units={result.included_units}/{result.total_units}, "
            f"truncated={result.was_truncated}"
        )

        return ProcessedDocument(
            filename=filename,
            document_format=document_format,
            result=result,
            message=message,
        )


# Global service instance
document_ingestion_service = DocumentIngestionService()
