# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the token to character budget conversion.
"""

import pytest

from docfit.services.attachment.budget import (
    CHARS_PER_TOKEN,
    DEFAULT_TOKEN_BUDGET,
    to_char_budget,
)


class TestCharacterBudget:
    """Test cases for to_char_budget."""

    def test_default_budget(self):
        """Test the default token target converts to 16000 characters."""
        assert DEFAULT_TOKEN_BUDGET == 4000
        assert to_char_budget(DEFAULT_TOKEN_BUDGET) == 16000

    def test_four_characters_per_token(self):
        assert CHARS_PER_TOKEN == 4
        assert to_char_budget(1) == 4
        assert to_char_budget(125) == 500

    @pytest.mark.parametrize("token_target", [0, -1, -4000])
    def test_non_positive_budget_rejected(self, token_target):
        with pytest.raises(ValueError):
            to_char_budget(token_target)

    @pytest.mark.parametrize("token_target", [1.5, "100", None, True])
    def test_non_integer_budget_rejected(self, token_target):
        with pytest.raises(ValueError):
            to_char_budget(token_target)
