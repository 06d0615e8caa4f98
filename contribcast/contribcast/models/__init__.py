"""
Core contribution models.

Contribution → chain (depth-annotated traversal) → summary
"""

from .types import (
    ContributionType,
    DEFAULT_CONTRIBUTION_TYPE,
    new_contribution_id,
    now_iso,
    now_utc,
)

from .contribution import Contribution, RECORD_KEYS
from .chain import ChainReport, ChainSummary, ContributionWithDepth, summarize_chain

__all__ = [
    "ContributionType",
    "DEFAULT_CONTRIBUTION_TYPE",
    "new_contribution_id",
    "now_iso",
    "now_utc",
    "Contribution",
    "RECORD_KEYS",
    "ChainReport",
    "ChainSummary",
    "ContributionWithDepth",
    "summarize_chain",
]
