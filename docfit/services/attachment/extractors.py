# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Structural extractors turning uploaded file bytes into ExtractedContent.

Supports: PDF (paginated), Word .docx and TXT/Markdown (flat),
Excel .xlsx (tabular), CSV and TSV (delimited).
"""

import csv
import io
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import chardet
from docx import Document
from openpyxl import load_workbook
from PyPDF2 import PdfReader

from .exceptions import DocumentProcessingError, ExtractionError
from .models import (
    ContentKind,
    ExtractedContent,
    LinearContent,
    Sheet,
    TabularContent,
)

logger = logging.getLogger(__name__)

# Tried in order after the chardet guess
FALLBACK_ENCODINGS = ["utf-8", "utf-8-sig", "gbk", "gb2312", "gb18030", "latin-1"]


def decode_text(binary_data: bytes) -> str:
    """Decode text bytes, preferring the encoding chardet detects."""
    encodings_to_try = list(FALLBACK_ENCODINGS)

    detected_encoding = chardet.detect(binary_data).get("encoding")
    if detected_encoding and detected_encoding.lower() not in ["ascii", "charmap"]:
        encodings_to_try.insert(0, detected_encoding)

    for encoding in encodings_to_try:
        try:
            return binary_data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue

    return binary_data.decode("utf-8", errors="replace")


class BaseExtractor(ABC):
    """Base class for per-format structural extractors."""

    # Human-readable name used in error messages
    format_name: str = "document"

    def extract(self, binary_data: bytes) -> ExtractedContent:
        """
        Extract structured content from file bytes.

        Raises:
            ExtractionError: If the file cannot be read
        """
        try:
            return self._extract(binary_data)
        except DocumentProcessingError:
            raise
        except Exception as e:
            logger.error(f"Error parsing {self.format_name}: {e}", exc_info=True)
            raise ExtractionError(
                f"Failed to parse {self.format_name}: {str(e)}",
                ExtractionError.PARSE_FAILED,
            ) from e

    @abstractmethod
    def _extract(self, binary_data: bytes) -> ExtractedContent:
        pass


class PDFExtractor(BaseExtractor):
    """One unit per PDF page."""

    format_name = "PDF"

    def _extract(self, binary_data: bytes) -> LinearContent:
        reader = PdfReader(io.BytesIO(binary_data))

        # Check if PDF is encrypted
        if reader.is_encrypted:
            raise ExtractionError(
                "Cannot parse encrypted PDF file",
                ExtractionError.ENCRYPTED_PDF,
            )

        # Blank pages keep their slot so ordinals match page numbers
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
        return LinearContent.from_pages(pages)


class WordExtractor(BaseExtractor):
    """Paragraphs followed by table rows as a single flat unit."""

    format_name = "Word document"

    def _extract(self, binary_data: bytes) -> LinearContent:
        doc = Document(io.BytesIO(binary_data))

        text_parts = []
        for paragraph in doc.paragraphs:
            if paragraph.text.strip():
                text_parts.append(paragraph.text)

        for table in doc.tables:
            for row in table.rows:
                row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_text:
                    text_parts.append(" | ".join(row_text))

        return LinearContent.from_text("\n\n".join(text_parts))


class TextExtractor(BaseExtractor):
    """Plain text and Markdown."""

    format_name = "text file"

    def _extract(self, binary_data: bytes) -> LinearContent:
        return LinearContent.from_text(decode_text(binary_data))


def _trim_row(values: List[str]) -> List[str]:
    """Drop trailing empty cells."""
    end = len(values)
    while end > 0 and not values[end - 1].strip():
        end -= 1
    return values[:end]


class SpreadsheetExtractor(BaseExtractor):
    """One sheet per worksheet; the first non-empty row is the header."""

    format_name = "Excel"

    def _extract(self, binary_data: bytes) -> TabularContent:
        wb = load_workbook(io.BytesIO(binary_data), read_only=True, data_only=True)
        try:
            sheets = []
            for sheet_name in wb.sheetnames:
                header: Optional[List[str]] = None
                rows = []
                for row in wb[sheet_name].iter_rows(values_only=True):
                    values = _trim_row(["" if value is None else str(value) for value in row])
                    if not values:
                        continue
                    if header is None:
                        header = values
                    else:
                        rows.append(values)
                sheets.append(Sheet(name=sheet_name, header=header or [], rows=rows))
        finally:
            wb.close()

        return TabularContent(sheets=sheets, kind=ContentKind.TABULAR, delimiter=",")


class DelimitedTextExtractor(BaseExtractor):
    """A single implicit sheet read from comma or tab separated text."""

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter
        self.format_name = "TSV" if delimiter == "\t" else "CSV"

    def _extract(self, binary_data: bytes) -> TabularContent:
        text = decode_text(binary_data)
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter)

        header: Optional[List[str]] = None
        rows = []
        for record in reader:
            if not any(cell.strip() for cell in record):
                continue
            if header is None:
                header = record
            else:
                rows.append(record)

        return TabularContent(
            sheets=[Sheet(name="", header=header or [], rows=rows)],
            kind=ContentKind.DELIMITED,
            delimiter=self.delimiter,
        )
