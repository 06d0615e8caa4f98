from __future__ import annotations

from contribcast.invariants.validate import ValidationReport, validate_submission
from contribcast.models.contribution import Contribution
from contribcast.runtime.store import ContributionStore

from .types import ContributionDraft


def check_draft(store: ContributionStore, draft: ContributionDraft) -> ValidationReport:
    return validate_submission(
        contributor=draft.contributor,
        project_id=draft.project_id,
        description=draft.description,
        min_description_length=store.config.min_description_length,
    )


def submit_draft(store: ContributionStore, draft: ContributionDraft) -> Contribution:
    """
    Validate a draft, build the contribution from trimmed values and add it.

    Raises ValueError listing every violated rule when the draft is rejected;
    nothing is written in that case.
    """
    report = check_draft(store, draft)
    if not report.ok:
        raise ValueError("Contribution draft rejected:\n" + report.describe())

    contribution = Contribution.create(
        contributor=draft.contributor.strip(),
        project_id=draft.project_id.strip(),
        contribution_type=draft.contribution_type,
        description=draft.description.strip(),
        parent_contribution_id=draft.parent_contribution_id or None,
        tags=draft.tags,
    )
    return store.add(contribution)
