# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the sampling manager.
"""

from unittest.mock import MagicMock

import pytest

from docfit.services.attachment.models import (
    CompressionTier,
    ContentKind,
    LinearContent,
    SampledResult,
    Sheet,
    TabularContent,
)
from docfit.services.attachment.sampling import (
    LinearSamplingStrategy,
    SamplingManager,
    TabularSamplingStrategy,
    sample,
)


class TestSamplingManager:
    """Test cases for SamplingManager."""

    def setup_method(self):
        """Set up test fixtures."""
        self.manager = SamplingManager()

    def test_strategy_per_content_kind(self):
        assert isinstance(
            self.manager.get_strategy(ContentKind.PAGINATED), LinearSamplingStrategy
        )
        assert isinstance(self.manager.get_strategy(ContentKind.FLAT), LinearSamplingStrategy)
        assert isinstance(
            self.manager.get_strategy(ContentKind.TABULAR), TabularSamplingStrategy
        )
        assert isinstance(
            self.manager.get_strategy(ContentKind.DELIMITED), TabularSamplingStrategy
        )

    @pytest.mark.parametrize("token_budget", [0, -5, 2.5])
    def test_invalid_budget_rejected(self, token_budget):
        with pytest.raises(ValueError):
            self.manager.sample(LinearContent.from_text("hello"), token_budget)

    def test_default_budget_used(self):
        text = "a" * 15000
        result = sample(LinearContent.from_text(text))
        assert result.tier == CompressionTier.FULL
        assert result.text == text

    def test_custom_strategy_receives_char_budget(self):
        strategy = MagicMock()
        strategy.sample.return_value = SampledResult(text="ok")
        strategy.enforce_budget.side_effect = lambda result, budget: result
        manager = SamplingManager({ContentKind.FLAT: strategy})

        content = LinearContent.from_text("hello")
        result = manager.sample(content, 10)

        strategy.sample.assert_called_once_with(content, 40)
        assert result.text == "ok"

    def test_repeated_sampling_is_deterministic(self):
        content = TabularContent(
            sheets=[Sheet(header=["n"], rows=[[str(i)] for i in range(500)])],
            kind=ContentKind.DELIMITED,
        )
        first = self.manager.sample(content, 100)
        second = self.manager.sample(content, 100)
        assert first.text == second.text
        assert first.included_units == second.included_units
