# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Sampling strategy for linear content: paginated documents and flat text.
"""

from typing import List, Tuple

from ..models import CompressionTier, ContentKind, LinearContent, SampledResult
from . import markers
from .base import BaseSamplingStrategy

# Separator placed between pages, markers and the summary line
SEPARATOR = "\n\n"

# Attempts at shrinking a light-tier prefix until it and its markers fit
_PREFIX_FIT_ATTEMPTS = 3


class LinearSamplingStrategy(BaseSamplingStrategy):
    """
    Adaptive sampling for paginated and flat documents.

    Paginated documents are sampled in whole pages:
    1. Light tier - a leading prefix of pages, the last one possibly cut
    2. Moderate tier - head/middle/tail page groups sized from the ratio
    3. Heavy tier - fixed head/middle/tail page counts

    Flat documents have no page boundaries and are sampled by character
    offsets: a prefix (light) or a head slice and a tail slice joined by a
    single omission marker (moderate, heavy).
    """

    def sample(self, content: LinearContent, char_budget: int) -> SampledResult:
        texts = [unit.text for unit in content.units]
        total_units = len(texts)
        total_length = sum(len(text) for text in texts) + len(SEPARATOR) * max(
            0, total_units - 1
        )

        # Common case: everything fits
        if total_length <= char_budget:
            return SampledResult(
                text=SEPARATOR.join(texts),
                was_truncated=False,
                total_units=total_units,
                included_units=total_units,
                tier=CompressionTier.FULL,
                original_length=total_length,
            )

        ratio = self._compression_ratio(char_budget, total_length)
        tier = self.policy.classify(ratio)

        if content.kind == ContentKind.FLAT:
            result = self._sample_flat(SEPARATOR.join(texts), char_budget, ratio, tier)
            result.included_units = total_units
        elif total_units == 1:
            result = self._truncate_single(texts[0], char_budget)
        elif tier == CompressionTier.LIGHT:
            result = self._sample_prefix(texts, total_length, char_budget, ratio)
        else:
            result = self._sample_regions(texts, char_budget, ratio, tier)

        result.was_truncated = True
        result.total_units = total_units
        result.original_length = total_length
        return result

    def _truncate_single(self, text: str, char_budget: int) -> SampledResult:
        """Plain length cut for a unit that cannot be sampled any further."""
        marker_room = len(SEPARATOR) + len(markers.content_truncated(len(text)))
        keep = max(0, char_budget - marker_room)
        truncated = (
            text[:keep] + SEPARATOR + markers.content_truncated(len(text) - keep)
        )
        return SampledResult(
            text=truncated,
            included_units=1,
            tier=CompressionTier.SIMPLE,
        )

    def _sample_flat(
        self, text: str, char_budget: int, ratio: float, tier: CompressionTier
    ) -> SampledResult:
        total = len(text)
        summary_room = len(markers.document_summary(total, total, "characters"))
        marker_count_room = len(markers.characters_omitted(total))
        separators = 2 if tier == CompressionTier.LIGHT else 3
        available = (
            char_budget - summary_room - marker_count_room - len(SEPARATOR) * separators
        )
        if available <= 0:
            return self._truncate_single(text, char_budget)

        if tier == CompressionTier.LIGHT:
            head_len = min(int(total * max(ratio, self.policy.light_floor)), available)
            tail_len = 0
        elif tier == CompressionTier.MODERATE:
            head_len, _, tail_len = self._split_counts(
                available, self.policy.moderate_regions
            )
        else:
            head_len, _, tail_len = self._split_counts(
                available, self.policy.heavy_regions
            )

        parts = [
            text[:head_len],
            markers.characters_omitted(total - head_len - tail_len),
        ]
        if tail_len > 0:
            parts.append(text[total - tail_len :])

        summary = markers.document_summary(head_len + tail_len, total, "characters")
        return SampledResult(
            text=summary + SEPARATOR + SEPARATOR.join(parts),
            tier=tier,
        )

    def _sample_prefix(
        self, texts: List[str], total_length: int, char_budget: int, ratio: float
    ) -> SampledResult:
        """Light tier for paginated content: keep a leading run of pages."""
        keep_chars = int(total_length * max(ratio, self.policy.light_floor))

        for _ in range(_PREFIX_FIT_ATTEMPTS):
            kept = self._prefix_pages(texts, keep_chars)
            pieces = [(True, page) for page in kept]
            if len(kept) < len(texts):
                pieces.append(
                    (False, markers.pages_omitted(len(kept) + 1, len(texts)))
                )
            summary = markers.document_summary(len(kept), len(texts))
            body, unit_ends = self._join_pieces(
                pieces, SEPARATOR, start=len(summary) + len(SEPARATOR)
            )
            text = summary + SEPARATOR + body
            excess = len(text) - char_budget
            if excess <= 0:
                break
            keep_chars = max(0, keep_chars - excess)

        return SampledResult(
            text=text,
            included_units=len(kept),
            tier=CompressionTier.LIGHT,
            unit_ends=unit_ends,
        )

    def _prefix_pages(self, texts: List[str], keep_chars: int) -> List[str]:
        """Whole pages that fit in keep_chars, plus a cut of the next page."""
        kept: List[str] = []
        used = 0
        for text in texts:
            separator = len(SEPARATOR) if kept else 0
            if used + separator + len(text) <= keep_chars:
                kept.append(text)
                used += separator + len(text)
                continue
            room = keep_chars - used - separator
            if room > len(markers.CLIP_SUFFIX):
                kept.append(self._clip(text, room))
            break
        return kept

    def _sample_regions(
        self, texts: List[str], char_budget: int, ratio: float, tier: CompressionTier
    ) -> SampledResult:
        """Moderate and heavy tiers: head, middle and tail page groups."""
        total = len(texts)
        if tier == CompressionTier.MODERATE:
            # Never fewer pages than the heavy tier keeps for the same document
            heavy_pages = min(total, sum(self._heavy_counts(total)))
            pages_to_keep = max(1, int(total * ratio), heavy_pages)
            head, middle, tail = self._split_counts(
                pages_to_keep, self.policy.moderate_regions
            )
        else:
            head, middle, tail = self._heavy_counts(total)

        regions = self._plan_regions(total, head, middle, tail)

        # (is_page, text) in output order
        pieces: List[Tuple[bool, str]] = []
        position = 0
        for region in regions:
            if region.start > position:
                pieces.append((False, markers.pages_omitted(position + 1, region.start)))
            pieces.extend((True, texts[index]) for index in range(region.start, region.end))
            position = region.end
        if position < total:
            pieces.append((False, markers.pages_omitted(position + 1, total)))

        included = sum(region.count for region in regions)
        summary = markers.document_summary(included, total)

        fixed = (
            len(summary)
            + len(SEPARATOR) * len(pieces)
            + sum(len(text) for is_page, text in pieces if not is_page)
        )
        page_chars = sum(len(text) for is_page, text in pieces if is_page)
        if page_chars > char_budget - fixed:
            pieces = self._fit_pages(pieces, char_budget - fixed)

        body, unit_ends = self._join_pieces(
            pieces, SEPARATOR, start=len(summary) + len(SEPARATOR)
        )
        return SampledResult(
            text=summary + SEPARATOR + body,
            included_units=included,
            tier=tier,
            unit_ends=unit_ends,
        )

    def _heavy_counts(self, total: int) -> Tuple[int, int, int]:
        """
        Head/middle/tail page counts for the heavy tier.

        Fixed counts are used as they are; region planning clamps them on
        documents with fewer pages than their sum.
        """
        if self.policy.heavy_fixed_counts is not None:
            return self.policy.heavy_fixed_counts
        cap = max(1, int(total * self.policy.moderate_threshold))
        return self._split_counts(cap, self.policy.heavy_regions)

    def _fit_pages(
        self, pieces: List[Tuple[bool, str]], available: int
    ) -> List[Tuple[bool, str]]:
        """Shorten kept pages so they share the available characters."""
        page_count = sum(1 for is_page, _ in pieces if is_page)
        remaining = max(0, available)
        seen = 0
        fitted = []
        for is_page, text in pieces:
            if is_page:
                share = remaining // (page_count - seen)
                text = self._clip(text, share)
                remaining -= len(text)
                seen += 1
            fitted.append((is_page, text))
        return fitted
