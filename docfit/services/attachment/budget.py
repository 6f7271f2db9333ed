# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Conversion between a model token budget and a character budget.

Documents are budgeted in characters because that is what the sampler can
measure cheaply; the model service enforces its limit in tokens.
"""

# Average number of characters per token for the model service tokenizer
CHARS_PER_TOKEN = 4

# Token target for a single attached document. Kept well below the model's
# context window so conversation history and system instructions still fit.
DEFAULT_TOKEN_BUDGET = 4000


def to_char_budget(token_target: int) -> int:
    """Convert a positive token target into a character budget."""
    if isinstance(token_target, bool) or not isinstance(token_target, int):
        raise ValueError(f"Token budget must be an integer, got {token_target!r}")
    if token_target <= 0:
        raise ValueError(f"Token budget must be positive, got {token_target}")
    return token_target * CHARS_PER_TOKEN
