# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Errors raised while turning an uploaded file into prompt-ready text.
"""

from typing import Optional


class DocumentProcessingError(Exception):
    """Base class for failures that abort processing of a single upload."""

    # Error codes for i18n mapping
    UNSUPPORTED_TYPE = "unsupported_type"
    PARSE_FAILED = "parse_failed"
    ENCRYPTED_PDF = "encrypted_pdf"
    LEGACY_DOC = "legacy_doc"
    LEGACY_XLS = "legacy_xls"

    default_error_code = PARSE_FAILED

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code or self.default_error_code


class UnsupportedFormatError(DocumentProcessingError):
    """No Structural Extractor exists for the detected file type."""

    default_error_code = DocumentProcessingError.UNSUPPORTED_TYPE


class ExtractionError(DocumentProcessingError):
    """The format parser could not read the file (corrupt or encrypted)."""

    default_error_code = DocumentProcessingError.PARSE_FAILED


class BudgetViolationError(RuntimeError):
    """Sampled output exceeded the character budget after every fallback."""

    def __init__(self, length: int, limit: int):
        super().__init__(
            f"Sampled text is {length} characters, limit is {limit} characters"
        )
        self.length = length
        self.limit = limit
