"""
contribcast: contribution records threaded into parent/child chains,
persisted as one JSON blob behind a pluggable storage port.
"""
from contribcast.models import Contribution, ContributionType, ContributionWithDepth
from contribcast.runtime import ContributionStore, InMemoryBlobStorage, StoreConfig

__all__ = [
    "Contribution",
    "ContributionType",
    "ContributionWithDepth",
    "ContributionStore",
    "InMemoryBlobStorage",
    "StoreConfig",
]
