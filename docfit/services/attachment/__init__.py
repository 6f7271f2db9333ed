# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Attachment service module for document ingestion and adaptive sampling.

This module provides:
- DocumentFormatDetector: Format detection from file name and MIME type
- Structural extractors: PDF, Word, text, spreadsheet and delimited text
- SamplingManager: Adaptive sampling of extracted content into a token budget
- DocumentIngestionService: High-level service from file bytes to prompt message
"""

from docfit.services.attachment.exceptions import (
    BudgetViolationError,
    DocumentProcessingError,
    ExtractionError,
    UnsupportedFormatError,
)
from docfit.services.attachment.format_detection import (
    DocumentFormat,
    DocumentFormatDetector,
)
from docfit.services.attachment.ingestion import (
    DocumentIngestionService,
    ProcessedDocument,
    document_ingestion_service,
)
from docfit.services.attachment.sampling import SamplingManager, sample, sampling_manager

__all__ = [
    # Errors
    "DocumentProcessingError",
    "UnsupportedFormatError",
    "ExtractionError",
    "BudgetViolationError",
    # Format detection
    "DocumentFormat",
    "DocumentFormatDetector",
    # Sampling
    "SamplingManager",
    "sampling_manager",
    "sample",
    # Services
    "DocumentIngestionService",
    "ProcessedDocument",
    "document_ingestion_service",
]
