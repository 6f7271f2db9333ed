# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Truncation annotator for sampled document text.
"""

import re

# A bracketed marker on one line that mentions an omission or truncation,
# e.g. "[12 rows omitted]", "[Pages 4 to 9 omitted]"
_MARKER_PATTERN = re.compile(r"\[[^\[\]\n]*\b(?:omitted|truncated)\b[^\[\]\n]*\]", re.IGNORECASE)

TRUNCATION_NOTE = (
    "[Note: This is a large document, so it was sampled to fit the context limit. "
    "The beginning, middle and end were retained; omitted sections are marked.]"
)

NO_CONTENT_FALLBACK = "(No readable text could be extracted from this document.)"


def detect_truncation(text: str) -> bool:
    """Check whether sampled text carries any omission marker."""
    if not text:
        return False
    return _MARKER_PATTERN.search(text) is not None


def disclosure_for(text: str, was_truncated: bool = False) -> str:
    """Disclosure note for the prompt, or an empty string when nothing was dropped."""
    if was_truncated or detect_truncation(text):
        return TRUNCATION_NOTE
    return ""
