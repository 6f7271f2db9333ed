# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Sampling strategy for spreadsheets and delimited text.
"""

import csv
import io
from typing import List, Tuple

from ..models import CompressionTier, ContentKind, SampledResult, Sheet, TabularContent
from . import markers
from .base import BaseSamplingStrategy, Region

SHEET_SEPARATOR = "\n\n"
LINE_SEPARATOR = "\n"


class TabularSamplingStrategy(BaseSamplingStrategy):
    """
    Adaptive row sampling for tabular content.

    The character budget is shared by all sheets and handed out greedily in
    sheet order: each sheet gets a share proportional to its size out of
    whatever earlier sheets left unused. A sheet's compression ratio is
    computed after its fixed overhead (title, header, summary line and two
    omission markers) has been subtracted from its share. Within a sheet:
    1. Header row - always emitted first, never counted as a sampled row
    2. Light tier - a leading run of rows
    3. Moderate tier - head, middle (large sheets only) and tail row groups
    4. Heavy tier - smaller head, middle and tail groups with generic markers

    Row order is preserved and every sampled sheet ends with a summary line.
    Rows longer than half of a sheet's row room are clipped, and the row
    count shrinks until the rendered sheet fits its share.
    """

    def sample(self, content: TabularContent, char_budget: int) -> SampledResult:
        rendered = [
            self._join_pieces(self._sheet_pieces(sheet, content), LINE_SEPARATOR)
            for sheet in content.sheets
        ]
        total_length = sum(len(text) for text, _ in rendered) + len(
            SHEET_SEPARATOR
        ) * max(0, len(rendered) - 1)
        total_rows = content.total_rows

        # Common case: everything fits
        if total_length <= char_budget:
            return SampledResult(
                text=SHEET_SEPARATOR.join(text for text, _ in rendered),
                was_truncated=False,
                total_units=total_rows,
                included_units=total_rows,
                tier=CompressionTier.FULL,
                original_length=total_length,
            )

        parts = []
        unit_ends: List[int] = []
        offset = 0
        included_rows = 0
        tier = CompressionTier.FULL
        remaining_budget = char_budget
        remaining_length = total_length

        for sheet, (full_text, full_ends) in zip(content.sheets, rendered):
            if remaining_length > 0:
                share = remaining_budget * len(full_text) / remaining_length
            else:
                share = remaining_budget

            if len(full_text) <= share:
                sheet_text, kept, sheet_tier, sheet_ends = (
                    full_text,
                    sheet.data_row_count,
                    CompressionTier.FULL,
                    full_ends,
                )
            else:
                sheet_text, kept, sheet_tier, sheet_ends = self._sample_sheet(
                    sheet, content, share
                )

            if parts:
                offset += len(SHEET_SEPARATOR)
            parts.append(sheet_text)
            unit_ends.extend(offset + end for end in sheet_ends)
            offset += len(sheet_text)
            included_rows += kept
            if sheet_tier.severity > tier.severity:
                tier = sheet_tier

            remaining_budget = max(
                0, remaining_budget - len(sheet_text) - len(SHEET_SEPARATOR)
            )
            remaining_length -= len(full_text) + len(SHEET_SEPARATOR)

        return SampledResult(
            text=SHEET_SEPARATOR.join(parts),
            was_truncated=True,
            total_units=total_rows,
            included_units=included_rows,
            tier=tier,
            original_length=total_length,
            unit_ends=unit_ends,
        )

    def _sample_sheet(
        self, sheet: Sheet, content: TabularContent, share: float
    ) -> Tuple[str, int, CompressionTier, List[int]]:
        """
        Sample one sheet into at most ``share`` characters where possible.

        Returns:
            Tuple of (sheet_text, included_rows, tier, row_ends)
        """
        total_rows = sheet.data_row_count
        leading = self._leading_lines(sheet, content)
        if total_rows == 0:
            return LINE_SEPARATOR.join(leading), 0, CompressionTier.FULL, []

        # Room taken by everything that is not a data row
        overhead = (
            sum(len(line) + 1 for line in leading)
            + len(markers.sheet_summary(total_rows, total_rows))
            + 2 * (len(markers.significant_data_omitted(total_rows)) + 1)
        )
        room = share - overhead

        row_lines = [self._format_row(row, content.delimiter) for row in sheet.rows]
        if room > 0:
            # A single row never takes more than half of the room
            row_lines = [self._clip(line, int(room // 2)) for line in row_lines]
        rows_length = sum(len(line) + 1 for line in row_lines)

        ratio = max(0.0, room / rows_length)
        tier = self.policy.classify(ratio)
        if tier == CompressionTier.FULL:
            tier = CompressionTier.LIGHT

        target_rows = int(total_rows * ratio)
        if tier == CompressionTier.LIGHT:
            target_rows = min(
                total_rows, max(target_rows, int(total_rows * self.policy.light_floor))
            )

        while True:
            text, included_rows, row_ends = self._build_sheet(
                leading, row_lines, target_rows, tier
            )
            if len(text) <= share or target_rows == 0:
                return text, included_rows, tier, row_ends
            target_rows = min(target_rows - 1, int(target_rows * share / len(text)))

    def _build_sheet(
        self,
        leading: List[str],
        row_lines: List[str],
        target_rows: int,
        tier: CompressionTier,
    ) -> Tuple[str, int, List[int]]:
        """Render the sampled rows of a sheet with its markers and summary."""
        total_rows = len(row_lines)
        regions = self._row_regions(total_rows, target_rows, tier)
        omitted_marker = (
            markers.significant_data_omitted
            if tier == CompressionTier.HEAVY
            else markers.rows_omitted
        )

        pieces = [(False, line) for line in leading]
        position = 0
        for region in regions:
            if region.start > position:
                pieces.append((False, omitted_marker(region.start - position)))
            pieces.extend((True, line) for line in row_lines[region.start : region.end])
            position = region.end
        if position < total_rows:
            pieces.append((False, omitted_marker(total_rows - position)))

        included_rows = sum(region.count for region in regions)
        pieces.append((False, markers.sheet_summary(total_rows, included_rows)))
        text, row_ends = self._join_pieces(pieces, LINE_SEPARATOR)
        return text, included_rows, row_ends

    def _row_regions(
        self, total_rows: int, target_rows: int, tier: CompressionTier
    ) -> List[Region]:
        if tier == CompressionTier.LIGHT:
            keep = min(total_rows, target_rows)
            return [Region(0, keep)] if keep > 0 else []

        if tier == CompressionTier.MODERATE:
            head, middle, tail = self._split_counts(
                target_rows, self.policy.moderate_regions
            )
            min_gap = self.policy.moderate_middle_min_gap
            if min_gap is not None and total_rows - (head + tail) <= min_gap:
                # Too few rows between head and tail for a separate middle group
                head += middle
                middle = 0
        else:
            head, middle, tail = self._split_counts(
                target_rows, self.policy.heavy_regions
            )

        return self._plan_regions(total_rows, head, middle, tail)

    def _sheet_pieces(self, sheet: Sheet, content: TabularContent) -> List[Tuple[bool, str]]:
        """Leading lines and every data row, as (is_row, line) pieces."""
        pieces = [(False, line) for line in self._leading_lines(sheet, content)]
        pieces.extend((True, self._format_row(row, content.delimiter)) for row in sheet.rows)
        return pieces

    def _leading_lines(self, sheet: Sheet, content: TabularContent) -> List[str]:
        """Sheet title (spreadsheets only) and header row."""
        lines = []
        if content.kind == ContentKind.TABULAR:
            lines.append(f"Sheet: {sheet.name}")
        if sheet.header:
            lines.append(self._format_row(sheet.header, content.delimiter))
        return lines

    def _format_row(self, row: List[str], delimiter: str) -> str:
        """Format a row as a single delimited record."""
        buffer = io.StringIO()
        csv.writer(buffer, delimiter=delimiter, lineterminator="").writerow(row)
        return buffer.getvalue()
