# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for truncation detection.
"""

import pytest

from docfit.services.attachment.annotator import (
    TRUNCATION_NOTE,
    detect_truncation,
    disclosure_for,
)


class TestDetectTruncation:
    """Test cases for detect_truncation."""

    @pytest.mark.parametrize(
        "text",
        [
            "row\n[12 rows omitted]\nrow",
            "[1 row omitted]",
            "[Pages 4 to 9 omitted]",
            "[Page 3 omitted]",
            "head\n[... 500 characters omitted ...]\ntail",
            "[... significant data omitted (40 rows) ...]",
            "abc\n[Content truncated to fit the size limit]",
            "[content TRUNCATED: 10 characters omitted]",
        ],
    )
    def test_markers_detected(self, text):
        assert detect_truncation(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "A plain document with nothing removed.",
            "The committee omitted two clauses from the draft.",
            "[Total rows in sheet: 5, Rows included: 5]",
        ],
    )
    def test_plain_text_not_flagged(self, text):
        assert detect_truncation(text) is False


class TestDisclosure:
    """Test cases for the disclosure note."""

    def test_note_for_truncated_result(self):
        assert disclosure_for("text", was_truncated=True) == TRUNCATION_NOTE

    def test_note_when_marker_present(self):
        assert disclosure_for("a\n[3 rows omitted]\nb") == TRUNCATION_NOTE

    def test_no_note_for_full_text(self):
        assert disclosure_for("complete text") == ""

    def test_note_mentions_sampling(self):
        assert "sampled" in TRUNCATION_NOTE
        assert "beginning, middle and end" in TRUNCATION_NOTE
