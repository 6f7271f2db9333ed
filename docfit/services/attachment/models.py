# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Data models shared by the extractors, the sampler and the ingestion service.

ExtractedContent is a closed set of shapes. Linear content is an ordered list
of text units (pages, or one unit for a flat document); tabular content is a
list of sheets, each with a header and data rows.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union


class ContentKind(str, Enum):
    """Structural shape produced by a Structural Extractor."""

    PAGINATED = "paginated"  # One unit per page
    FLAT = "flat"  # Whole document as a single unit
    TABULAR = "tabular"  # One or more named sheets
    DELIMITED = "delimited"  # Single implicit sheet from csv/tsv text

    @property
    def is_linear(self) -> bool:
        return self in (ContentKind.PAGINATED, ContentKind.FLAT)


class CompressionTier(str, Enum):
    """How aggressively content was sampled to fit the budget."""

    FULL = "full"  # Everything fits, nothing dropped
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    SIMPLE = "simple"  # Plain length cut (single unit or safety net)

    @property
    def severity(self) -> int:
        return _TIER_SEVERITY[self]


_TIER_SEVERITY = {
    CompressionTier.FULL: 0,
    CompressionTier.LIGHT: 1,
    CompressionTier.MODERATE: 2,
    CompressionTier.HEAVY: 3,
    CompressionTier.SIMPLE: 4,
}


@dataclass(frozen=True)
class Unit:
    """A piece of linear text tagged with its 1-based ordinal."""

    ordinal: int
    text: str


@dataclass
class LinearContent:
    """Paginated or flat document text."""

    units: List[Unit]
    kind: ContentKind = ContentKind.PAGINATED

    def __post_init__(self):
        if not self.kind.is_linear:
            raise ValueError(f"Linear content cannot have kind {self.kind.value}")
        for expected, unit in enumerate(self.units, 1):
            if unit.ordinal != expected:
                raise ValueError(
                    f"Unit ordinals must be contiguous from 1, "
                    f"got {unit.ordinal} at position {expected}"
                )

    @classmethod
    def from_pages(cls, pages: List[str]) -> "LinearContent":
        return cls(
            units=[Unit(ordinal=i, text=text) for i, text in enumerate(pages, 1)],
            kind=ContentKind.PAGINATED,
        )

    @classmethod
    def from_text(cls, text: str) -> "LinearContent":
        return cls(units=[Unit(ordinal=1, text=text)], kind=ContentKind.FLAT)


@dataclass
class Sheet:
    """A table with an optional header and ordered data rows."""

    name: str = ""
    header: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def data_row_count(self) -> int:
        return len(self.rows)


@dataclass
class TabularContent:
    """Spreadsheet sheets, or the single implicit sheet of delimited text."""

    sheets: List[Sheet]
    kind: ContentKind = ContentKind.TABULAR
    delimiter: str = ","

    def __post_init__(self):
        if self.kind.is_linear:
            raise ValueError(f"Tabular content cannot have kind {self.kind.value}")
        if self.kind == ContentKind.DELIMITED and len(self.sheets) != 1:
            raise ValueError("Delimited content holds exactly one sheet")

    @property
    def total_rows(self) -> int:
        return sum(sheet.data_row_count for sheet in self.sheets)


ExtractedContent = Union[LinearContent, TabularContent]


@dataclass
class SampledResult:
    """Bounded text handed to the prompt builder plus sampling bookkeeping."""

    text: str
    was_truncated: bool = False
    total_units: int = 0
    included_units: int = 0
    tier: CompressionTier = CompressionTier.FULL
    original_length: int = 0

    # End offset in text of each included unit, used to recount units after
    # a hard length cut
    unit_ends: List[int] = field(default_factory=list, repr=False)

    @property
    def text_length(self) -> int:
        return len(self.text)
