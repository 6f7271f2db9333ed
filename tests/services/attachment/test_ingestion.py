# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the document ingestion service.
"""

from unittest.mock import MagicMock, patch

import pytest

from docfit.services.attachment.annotator import TRUNCATION_NOTE
from docfit.services.attachment.exceptions import (
    DocumentProcessingError,
    ExtractionError,
    UnsupportedFormatError,
)
from docfit.services.attachment.format_detection import DocumentFormat
from docfit.services.attachment.ingestion import DocumentIngestionService
from docfit.services.attachment.models import CompressionTier


def csv_bytes(count):
    lines = ["id,value"] + [f"{i:03d},value{i:03d}" for i in range(count)]
    return ("\n".join(lines) + "\n").encode("utf-8")


class TestDocumentIngestionService:
    """Test cases for DocumentIngestionService."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = DocumentIngestionService()

    def test_small_csv(self):
        processed = self.service.process(csv_bytes(3), "data.csv", "text/csv")

        assert processed.document_format == DocumentFormat.CSV
        assert processed.was_truncated is False
        assert processed.result.tier == CompressionTier.FULL
        assert processed.result.included_units == 3
        assert processed.message.startswith("I've uploaded a CSV file (data.csv).\n\n")
        assert "Document content:\nid,value\n000,value000" in processed.message
        assert processed.message.endswith(
            "Please analyze this document and provide insights."
        )

    def test_large_csv_sampled_with_note(self):
        processed = self.service.process(
            csv_bytes(50), "data.csv", question="Which id is largest?", token_budget=125
        )

        assert processed.was_truncated is True
        assert processed.result.tier == CompressionTier.MODERATE
        assert processed.result.included_units == 27
        assert TRUNCATION_NOTE in processed.message
        assert processed.message.endswith("My question: Which id is largest?")

    def test_markdown_document(self):
        processed = self.service.process(b"# Notes\n\nShort.", "notes.md")

        assert processed.document_format == DocumentFormat.MARKDOWN
        assert processed.result.text == "# Notes\n\nShort."
        assert processed.message.startswith("I've uploaded a MD file (notes.md).")

    def test_empty_text_uses_fallback(self):
        processed = self.service.process(b"", "empty.txt")
        assert "(No readable text could be extracted from this document.)" in processed.message

    def test_unsupported_format(self):
        with pytest.raises(UnsupportedFormatError):
            self.service.process(b"\x89PNG", "photo.png", "image/png")

    def test_legacy_spreadsheet(self):
        with pytest.raises(DocumentProcessingError) as exc_info:
            self.service.process(b"\xd0\xcf\x11\xe0", "old.xls")
        assert exc_info.value.error_code == DocumentProcessingError.LEGACY_XLS

    def test_corrupt_file_raises_extraction_error(self):
        with pytest.raises(ExtractionError):
            self.service.process(b"not a zip", "broken.docx")

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            self.service.process(csv_bytes(3), "data.csv", token_budget=0)

    def test_missing_extractor(self):
        service = DocumentIngestionService(extractors={DocumentFormat.PDF: MagicMock()})
        with pytest.raises(UnsupportedFormatError):
            service.process(csv_bytes(3), "data.csv")

    @patch("docfit.services.attachment.extractors.PdfReader")
    def test_pdf_pages_sampled(self, mock_reader_cls):
        pages = []
        for i in range(1, 21):
            page = MagicMock()
            page.extract_text.return_value = f"<<page {i}>>" + "x" * 490
            pages.append(page)
        reader = MagicMock()
        reader.is_encrypted = False
        reader.pages = pages
        mock_reader_cls.return_value = reader

        processed = self.service.process(b"%PDF", "big.pdf", token_budget=753)

        assert processed.result.tier == CompressionTier.HEAVY
        assert processed.result.total_units == 20
        assert processed.result.included_units == 8
        assert "[Pages 4 to 9 omitted]" in processed.message
        assert "[Pages 12 to 17 omitted]" in processed.message
        assert processed.message.startswith(
            "I've uploaded a PDF file (big.pdf).\n" + TRUNCATION_NOTE
        )
