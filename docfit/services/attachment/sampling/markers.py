# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Omission markers and summary lines inserted into sampled text.

Every marker is a single bracketed line containing "omitted" or
"truncated", which is what the truncation annotator looks for.
"""

SAFETY_NET_MARKER = "[Content truncated to fit the size limit]"
SAFETY_NET_TAIL = "\n" + SAFETY_NET_MARKER

# Appended to a kept unit that had to be shortened to fit the budget
CLIP_SUFFIX = " [...]"


def pages_omitted(first: int, last: int) -> str:
    """Marker for the 1-based inclusive page range [first, last]."""
    if first == last:
        return f"[Page {first} omitted]"
    return f"[Pages {first} to {last} omitted]"


def rows_omitted(count: int) -> str:
    noun = "row" if count == 1 else "rows"
    return f"[{count} {noun} omitted]"


def significant_data_omitted(count: int) -> str:
    return f"[... significant data omitted ({count} rows) ...]"


def characters_omitted(count: int) -> str:
    return f"[... {count} characters omitted ...]"


def content_truncated(count: int) -> str:
    return f"[Content truncated: {count} characters omitted]"


def document_summary(included: int, total: int, unit: str = "pages") -> str:
    return f"[Document sampled: {included} of {total} {unit} included]"


def sheet_summary(total_rows: int, included_rows: int) -> str:
    return f"[Total rows in sheet: {total_rows}, Rows included: {included_rows}]"
