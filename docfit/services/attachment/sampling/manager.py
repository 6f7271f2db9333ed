# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Sampling manager dispatching extracted content to its shape's strategy.
"""

import logging
from typing import Dict, Optional

from ..budget import DEFAULT_TOKEN_BUDGET, to_char_budget
from ..models import ContentKind, ExtractedContent, SampledResult
from .base import (
    DELIMITED_POLICY,
    FLAT_POLICY,
    PAGINATED_POLICY,
    TABULAR_POLICY,
    BaseSamplingStrategy,
)
from .linear import LinearSamplingStrategy
from .tabular import TabularSamplingStrategy

logger = logging.getLogger(__name__)


class SamplingManager:
    """Manager for applying the sampling strategy of each content shape."""

    def __init__(self, strategies: Optional[Dict[ContentKind, BaseSamplingStrategy]] = None):
        self._strategies = strategies or {
            ContentKind.PAGINATED: LinearSamplingStrategy(PAGINATED_POLICY),
            ContentKind.FLAT: LinearSamplingStrategy(FLAT_POLICY),
            ContentKind.TABULAR: TabularSamplingStrategy(TABULAR_POLICY),
            ContentKind.DELIMITED: TabularSamplingStrategy(DELIMITED_POLICY),
        }

    def get_strategy(self, kind: ContentKind) -> BaseSamplingStrategy:
        """Get the sampling strategy for a content shape."""
        return self._strategies[kind]

    def sample(
        self, content: ExtractedContent, token_budget: int = DEFAULT_TOKEN_BUDGET
    ) -> SampledResult:
        """
        Fit fully extracted content into a token budget.

        Args:
            content: Linear or tabular content from a Structural Extractor
            token_budget: Positive token target for the document

        Returns:
            SampledResult whose text is at most the character budget plus the
            fixed safety-net marker

        Raises:
            ValueError: If token_budget is not a positive integer
        """
        char_budget = to_char_budget(token_budget)
        strategy = self.get_strategy(content.kind)
        result = strategy.enforce_budget(strategy.sample(content, char_budget), char_budget)

        if result.was_truncated:
            logger.info(
                f"Sampled {content.kind.value} content with {result.tier.value} tier: "
                f"{result.original_length} -> {len(result.text)} chars, "
                f"{result.included_units}/{result.total_units} units kept"
            )
        return result


# Global manager instance
sampling_manager = SamplingManager()


def sample(
    content: ExtractedContent, token_budget: int = DEFAULT_TOKEN_BUDGET
) -> SampledResult:
    """Sample content with the default manager."""
    return sampling_manager.sample(content, token_budget)
