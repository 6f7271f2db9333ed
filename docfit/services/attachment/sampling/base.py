# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Base classes and tier policies for adaptive content sampling.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..exceptions import BudgetViolationError
from ..models import CompressionTier, ExtractedContent, SampledResult
from .markers import CLIP_SUFFIX, SAFETY_NET_TAIL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierPolicy:
    """
    Tier breakpoints and region proportions for one content shape.

    A compression ratio (budget / total length) above ``light_threshold``
    selects the light tier, above ``moderate_threshold`` the moderate tier,
    anything else the heavy tier. The thresholds are hand-tuned per shape.
    """

    light_threshold: float
    moderate_threshold: float

    # Minimum share of the input the light tier keeps
    light_floor: float = 0.0

    # (head, middle, tail) proportions of the kept amount
    moderate_regions: Tuple[float, float, float] = (0.5, 0.2, 0.3)
    heavy_regions: Tuple[float, float, float] = (0.4, 0.2, 0.4)

    # Fixed (head, middle, tail) unit counts used by the heavy tier instead
    # of proportions, when set
    heavy_fixed_counts: Optional[Tuple[int, int, int]] = None

    # Moderate middle region is only emitted when more than this many units
    # remain outside the head and tail regions, when set
    moderate_middle_min_gap: Optional[int] = None

    def classify(self, ratio: float) -> CompressionTier:
        """Map a compression ratio to a tier."""
        if ratio >= 1:
            return CompressionTier.FULL
        if ratio > self.light_threshold:
            return CompressionTier.LIGHT
        if ratio > self.moderate_threshold:
            return CompressionTier.MODERATE
        return CompressionTier.HEAVY


# Paginated documents (PDF)
PAGINATED_POLICY = TierPolicy(
    light_threshold=0.7,
    moderate_threshold=0.4,
    light_floor=0.85,
    moderate_regions=(0.5, 0.2, 0.3),
    heavy_fixed_counts=(3, 2, 3),
)

# Flat documents (Word, plain text); regions are character slices
FLAT_POLICY = TierPolicy(
    light_threshold=0.85,
    moderate_threshold=0.6,
    moderate_regions=(0.7, 0.0, 0.3),
    heavy_regions=(0.5, 0.0, 0.5),
)

# Spreadsheets
TABULAR_POLICY = TierPolicy(
    light_threshold=0.85,
    moderate_threshold=0.5,
    light_floor=0.85,
    moderate_regions=(0.5, 0.2, 0.3),
    heavy_regions=(0.4, 0.2, 0.4),
    moderate_middle_min_gap=20,
)

# Delimited text shares the spreadsheet tuning
DELIMITED_POLICY = TABULAR_POLICY


@dataclass(frozen=True)
class Region:
    """Half-open range [start, end) of 0-based unit or row indices."""

    start: int
    end: int

    @property
    def count(self) -> int:
        return self.end - self.start


class BaseSamplingStrategy(ABC):
    """Base class for shape-specific sampling strategies."""

    def __init__(self, policy: TierPolicy):
        self.policy = policy

    @abstractmethod
    def sample(self, content: ExtractedContent, char_budget: int) -> SampledResult:
        """
        Fit content into the character budget.

        Args:
            content: Fully extracted content of the matching shape
            char_budget: Maximum number of characters to emit

        Returns:
            SampledResult with the bounded text and unit counts
        """
        pass

    def _compression_ratio(self, char_budget: int, total_length: int) -> float:
        if total_length <= 0:
            return 1.0
        return char_budget / total_length

    def _split_counts(
        self, amount: int, proportions: Tuple[float, float, float]
    ) -> Tuple[int, int, int]:
        """
        Split an amount into head/middle/tail parts.

        Head and middle are rounded down and the tail absorbs the remainder, so
        the parts always add up to ``amount``. A non-zero amount always gives
        the head at least one item.
        """
        amount = max(0, amount)
        head = int(amount * proportions[0])
        middle = int(amount * proportions[1])
        tail = amount - head - middle
        if amount >= 1 and head == 0:
            # The beginning of a document is always kept
            head = 1
            if tail > 0:
                tail -= 1
            else:
                middle -= 1
        return head, middle, tail

    def _plan_regions(
        self, total: int, head: int, middle: int, tail: int
    ) -> List[Region]:
        """
        Place head, middle and tail regions over ``total`` items.

        The head starts at the first item, the middle is centered at
        ``total // 2`` and the tail ends at the last item. Regions never
        overlap: a region that would begin inside its predecessor starts at
        the predecessor's end instead. Empty regions are dropped.
        """
        head_region = Region(0, min(max(head, 0), total))

        middle_start = max(total // 2 - middle // 2, head_region.end)
        middle_region = Region(middle_start, min(middle_start + max(middle, 0), total))
        if middle_region.count <= 0:
            middle_region = Region(head_region.end, head_region.end)

        tail_start = max(total - max(tail, 0), middle_region.end, head_region.end)
        tail_region = Region(tail_start, total)

        return [
            region
            for region in (head_region, middle_region, tail_region)
            if region.count > 0
        ]

    def _join_pieces(
        self, pieces: List[Tuple[bool, str]], separator: str, start: int = 0
    ) -> Tuple[str, List[int]]:
        """
        Join (is_unit, text) pieces with a separator.

        Returns:
            Tuple of (joined_text, unit_ends) where unit_ends holds the end
            offset of every unit piece, counted from ``start``
        """
        ends = []
        position = start
        for index, (is_unit, text) in enumerate(pieces):
            if index:
                position += len(separator)
            position += len(text)
            if is_unit:
                ends.append(position)
        return separator.join(text for _, text in pieces), ends

    def _clip(self, text: str, limit: int) -> str:
        """Cut text to ``limit`` characters, marking the cut when there is room."""
        if len(text) <= limit:
            return text
        if limit <= len(CLIP_SUFFIX):
            return text[: max(0, limit)]
        return text[: limit - len(CLIP_SUFFIX)] + CLIP_SUFFIX

    def enforce_budget(self, result: SampledResult, char_budget: int) -> SampledResult:
        """
        Hard backstop: cut text that still exceeds the budget.

        Raises:
            BudgetViolationError: If the text is still over the limit afterwards
        """
        if len(result.text) > char_budget:
            logger.warning(
                f"Sampled text still exceeds budget ({len(result.text)} > {char_budget}), "
                f"applying safety-net truncation"
            )
            result.text = result.text[:char_budget] + SAFETY_NET_TAIL
            result.was_truncated = True
            if result.unit_ends:
                # Only units that survived the cut intact still count
                result.unit_ends = [end for end in result.unit_ends if end <= char_budget]
                result.included_units = len(result.unit_ends)
            if result.tier.severity < CompressionTier.SIMPLE.severity:
                result.tier = CompressionTier.SIMPLE

        limit = char_budget + len(SAFETY_NET_TAIL)
        if len(result.text) > limit:
            raise BudgetViolationError(len(result.text), limit)
        return result
