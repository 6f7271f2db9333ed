# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for document format detection.
"""

import pytest

from docfit.services.attachment.exceptions import (
    DocumentProcessingError,
    UnsupportedFormatError,
)
from docfit.services.attachment.format_detection import (
    DocumentFormat,
    DocumentFormatDetector,
)
from docfit.services.attachment.models import ContentKind


class TestDocumentFormatDetector:
    """Test cases for DocumentFormatDetector."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("report.pdf", DocumentFormat.PDF),
            ("Report.PDF", DocumentFormat.PDF),
            ("notes.docx", DocumentFormat.DOCX),
            ("book.xlsx", DocumentFormat.EXCEL),
            ("data.csv", DocumentFormat.CSV),
            ("data.tsv", DocumentFormat.TSV),
            ("readme.txt", DocumentFormat.TXT),
            ("README.md", DocumentFormat.MARKDOWN),
        ],
    )
    def test_detect_by_extension(self, filename, expected):
        assert DocumentFormatDetector.detect(filename) == expected

    def test_mime_type_wins_over_extension(self):
        assert DocumentFormatDetector.detect("upload.bin", "application/pdf") == DocumentFormat.PDF
        assert DocumentFormatDetector.detect("data.txt", "text/csv") == DocumentFormat.CSV

    def test_mime_parameters_ignored(self):
        assert (
            DocumentFormatDetector.detect("export", "text/csv; charset=utf-8")
            == DocumentFormat.CSV
        )

    def test_spreadsheet_mime_substring(self):
        assert (
            DocumentFormatDetector.detect("export", "application/x-custom-spreadsheet")
            == DocumentFormat.EXCEL
        )

    def test_generic_mime_falls_back_to_extension(self):
        assert (
            DocumentFormatDetector.detect("data.tsv", "application/octet-stream")
            == DocumentFormat.TSV
        )

    @pytest.mark.parametrize(
        "filename,error_code",
        [
            ("old.doc", DocumentProcessingError.LEGACY_DOC),
            ("old.xls", DocumentProcessingError.LEGACY_XLS),
        ],
    )
    def test_legacy_formats_rejected(self, filename, error_code):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            DocumentFormatDetector.detect(filename, "application/vnd.ms-excel")
        assert exc_info.value.error_code == error_code

    @pytest.mark.parametrize("filename", ["photo.png", "archive.zip", "noextension"])
    def test_unsupported_types_rejected(self, filename):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            DocumentFormatDetector.detect(filename)
        assert exc_info.value.error_code == DocumentProcessingError.UNSUPPORTED_TYPE

    def test_is_supported_extension(self):
        assert DocumentFormatDetector.is_supported_extension(".PDF") is True
        assert DocumentFormatDetector.is_supported_extension(".png") is False


class TestDocumentFormat:
    """Test cases for DocumentFormat."""

    def test_content_kinds(self):
        assert DocumentFormat.PDF.content_kind == ContentKind.PAGINATED
        assert DocumentFormat.DOCX.content_kind == ContentKind.FLAT
        assert DocumentFormat.TXT.content_kind == ContentKind.FLAT
        assert DocumentFormat.MARKDOWN.content_kind == ContentKind.FLAT
        assert DocumentFormat.EXCEL.content_kind == ContentKind.TABULAR
        assert DocumentFormat.CSV.content_kind == ContentKind.DELIMITED
        assert DocumentFormat.TSV.content_kind == ContentKind.DELIMITED

    def test_labels(self):
        assert DocumentFormat.PDF.label == "PDF"
        assert DocumentFormat.EXCEL.label == "EXCEL"
        assert DocumentFormat.MARKDOWN.label == "MD"
