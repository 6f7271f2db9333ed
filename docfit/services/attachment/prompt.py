# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Document Message Builder.

Builds the single user message that carries a sampled document into the
language-model request.
"""

from typing import Optional

from .annotator import NO_CONTENT_FALLBACK, disclosure_for
from .format_detection import DocumentFormat
from .models import SampledResult

DEFAULT_QUESTION = "Please analyze this document and provide insights."


def compose_document_message(
    document_format: DocumentFormat,
    filename: str,
    result: SampledResult,
    question: Optional[str] = None,
) -> str:
    """
    Build the outgoing message for an uploaded document.

    The message names the file and its format, carries a sampling disclosure
    when content was omitted, then the document content and the user's
    question (or a default request for analysis).

    Args:
        document_format: Detected format of the upload
        filename: Original filename
        result: Sampled document text and bookkeeping
        question: Optional user question about the document

    Returns:
        Prompt-ready message string
    """
    lines = [f"I've uploaded a {document_format.label} file ({filename})."]

    note = disclosure_for(result.text, result.was_truncated)
    if note:
        lines.append(note)

    content = result.text if result.text.strip() else NO_CONTENT_FALLBACK
    question = (question or "").strip()
    closing = f"My question: {question}" if question else DEFAULT_QUESTION

    return "\n".join(lines) + f"\n\nDocument content:\n{content}\n\n{closing}"
