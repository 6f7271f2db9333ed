# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Detection of the document format of an uploaded file.
"""

from enum import Enum
from pathlib import PurePath
from typing import Optional

from .exceptions import DocumentProcessingError, UnsupportedFormatError
from .models import ContentKind


class DocumentFormat(str, Enum):
    """Supported document formats."""

    PDF = "pdf"
    DOCX = "docx"
    EXCEL = "excel"
    CSV = "csv"
    TSV = "tsv"
    TXT = "txt"
    MARKDOWN = "md"

    @property
    def content_kind(self) -> ContentKind:
        return _CONTENT_KINDS[self]

    @property
    def label(self) -> str:
        """Upper-case name used when describing the upload to the model."""
        return self.value.upper()


_CONTENT_KINDS = {
    DocumentFormat.PDF: ContentKind.PAGINATED,
    DocumentFormat.DOCX: ContentKind.FLAT,
    DocumentFormat.TXT: ContentKind.FLAT,
    DocumentFormat.MARKDOWN: ContentKind.FLAT,
    DocumentFormat.EXCEL: ContentKind.TABULAR,
    DocumentFormat.CSV: ContentKind.DELIMITED,
    DocumentFormat.TSV: ContentKind.DELIMITED,
}


class DocumentFormatDetector:
    """Detects the document format from the file name and optional MIME type."""

    SUPPORTED_EXTENSIONS = {
        ".pdf": DocumentFormat.PDF,
        ".docx": DocumentFormat.DOCX,
        ".xlsx": DocumentFormat.EXCEL,
        ".xlsm": DocumentFormat.EXCEL,
        ".csv": DocumentFormat.CSV,
        ".tsv": DocumentFormat.TSV,
        ".txt": DocumentFormat.TXT,
        ".md": DocumentFormat.MARKDOWN,
    }

    _MIME_MAP = {
        "application/pdf": DocumentFormat.PDF,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": DocumentFormat.EXCEL,
        "application/vnd.ms-excel.sheet.macroenabled.12": DocumentFormat.EXCEL,
        "text/csv": DocumentFormat.CSV,
        "text/tab-separated-values": DocumentFormat.TSV,
        "text/plain": DocumentFormat.TXT,
        "text/markdown": DocumentFormat.MARKDOWN,
    }

    _LEGACY_EXTENSIONS = {
        ".doc": (
            "Legacy .doc format is not supported. Please convert to .docx",
            DocumentProcessingError.LEGACY_DOC,
        ),
        ".xls": (
            "Legacy .xls format is not supported. Please convert to .xlsx",
            DocumentProcessingError.LEGACY_XLS,
        ),
    }

    @classmethod
    def is_supported_extension(cls, extension: str) -> bool:
        """Check if the file extension is supported."""
        return extension.lower() in cls.SUPPORTED_EXTENSIONS

    @classmethod
    def detect(cls, filename: str, mime_type: Optional[str] = None) -> DocumentFormat:
        """
        Return the detected document format.

        Legacy binary formats are rejected first. Otherwise an exact MIME type
        match wins, then the file extension, then any MIME type naming a
        spreadsheet.

        Raises:
            UnsupportedFormatError: If no extractor handles the file
        """
        extension = PurePath(filename or "").suffix.lower()
        if extension in cls._LEGACY_EXTENSIONS:
            message, error_code = cls._LEGACY_EXTENSIONS[extension]
            raise UnsupportedFormatError(message, error_code)

        mime = (mime_type or "").split(";")[0].strip().lower()
        if mime in cls._MIME_MAP:
            return cls._MIME_MAP[mime]

        if extension in cls.SUPPORTED_EXTENSIONS:
            return cls.SUPPORTED_EXTENSIONS[extension]

        if "spreadsheet" in mime or "excel" in mime:
            return DocumentFormat.EXCEL

        raise UnsupportedFormatError(
            f"Unsupported file type: {extension or mime or filename}"
        )
