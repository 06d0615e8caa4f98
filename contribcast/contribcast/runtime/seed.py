from __future__ import annotations

import logging

from contribcast.models.contribution import Contribution
from contribcast.models.types import ContributionType

from .store import ContributionStore

logger = logging.getLogger(__name__)


def sample_contributions() -> tuple[Contribution, ...]:
    """
    Five first-run examples. Parent links are wired by seed_sample_data once
    the parents have been added.
    """
    return (
        Contribution.create(
            contributor="alice.eth",
            project_id="farcaster-frames-toolkit",
            contribution_type=ContributionType.EDIT,
            description="Fixed TypeScript type definitions for Frame metadata",
            tags=("typescript", "bugfix"),
            resonance=12,
        ),
        Contribution.create(
            contributor="bob.fc",
            project_id="farcaster-frames-toolkit",
            contribution_type=ContributionType.COMMENT,
            description="Great fix! This resolves the build issues we were having.",
            resonance=3,
        ),
        Contribution.create(
            contributor="charlie.cast",
            project_id="social-feed-widget",
            contribution_type=ContributionType.REMIX,
            description="Created a dark mode variant with improved accessibility",
            tags=("ui", "accessibility", "dark-mode"),
            resonance=8,
        ),
        Contribution.create(
            contributor="diana.dev",
            project_id="farcaster-analytics",
            contribution_type=ContributionType.SUGGESTION,
            description="Could we add support for custom time ranges in the analytics dashboard?",
            tags=("feature-request", "analytics"),
            resonance=5,
        ),
        Contribution.create(
            contributor="eve.builder",
            project_id="social-feed-widget",
            contribution_type=ContributionType.REMIX,
            description="Extended Charlie's dark mode with animated transitions",
            tags=("ui", "animations"),
            resonance=15,
        ),
    )


def seed_sample_data(store: ContributionStore) -> bool:
    """
    Populate an empty store with the sample contributions.
    No-op (returns False) when anything is already stored.
    """
    if store.load_all():
        return False

    edit, comment, remix, suggestion, extension = sample_contributions()

    first = store.add(edit)
    store.add(comment.with_parent(first.contribution_id))
    third = store.add(remix)
    store.add(suggestion)
    store.add(extension.with_parent(third.contribution_id))

    logger.info("Seeded 5 sample contributions")
    return True
