# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Adaptive content sampling.

Turns extracted document content of any length into a bounded excerpt that
fits a character budget: full inclusion when it fits, otherwise light,
moderate or heavy sampling of head, middle and tail regions, with omission
markers and summary lines recording what was dropped.
"""

from .base import (
    DELIMITED_POLICY,
    FLAT_POLICY,
    PAGINATED_POLICY,
    TABULAR_POLICY,
    BaseSamplingStrategy,
    Region,
    TierPolicy,
)
from .linear import LinearSamplingStrategy
from .manager import SamplingManager, sample, sampling_manager
from .tabular import TabularSamplingStrategy

__all__ = [
    # Policies and base classes
    "TierPolicy",
    "Region",
    "BaseSamplingStrategy",
    "PAGINATED_POLICY",
    "FLAT_POLICY",
    "TABULAR_POLICY",
    "DELIMITED_POLICY",
    # Strategies
    "LinearSamplingStrategy",
    "TabularSamplingStrategy",
    # Manager
    "SamplingManager",
    "sampling_manager",
    "sample",
]
