from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from contribcast.models.contribution import Contribution

from .rules import (
    MIN_DESCRIPTION_LENGTH,
    InvariantViolation,
    check_submission,
    find_dangling_parents,
    find_parent_cycles,
    require_non_negative_resonance,
    require_unique_ids,
)


@dataclass(frozen=True)
class ValidationReport:
    """
    Collected violations for a submission or a stored collection.

    warnings hold tolerated conditions (dangling parents) that do not make
    the report fail.
    """
    subject: str
    violations: Sequence[InvariantViolation] = field(default_factory=tuple)
    warnings: Sequence[InvariantViolation] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def rules(self) -> frozenset[str]:
        return frozenset(v.rule for v in self.violations)

    def describe(self) -> str:
        return "\n".join(f"{v.rule}: {v.message}" for v in self.violations)


def validate_submission(
    *,
    contributor: str,
    project_id: str,
    description: str,
    min_description_length: int = MIN_DESCRIPTION_LENGTH,
) -> ValidationReport:
    return ValidationReport(
        subject="Submission",
        violations=check_submission(
            contributor=contributor,
            project_id=project_id,
            description=description,
            min_description_length=min_description_length,
        ),
    )


def validate_contribution(
    contribution: Contribution,
    *,
    min_description_length: int = MIN_DESCRIPTION_LENGTH,
) -> ValidationReport:
    report = validate_submission(
        contributor=contribution.contributor,
        project_id=contribution.project_id,
        description=contribution.description,
        min_description_length=min_description_length,
    )
    return ValidationReport(subject=f"Contribution:{contribution.contribution_id}", violations=report.violations)


def validate_collection(contributions: Sequence[Contribution]) -> ValidationReport:
    contributions = tuple(contributions)
    violations: list[InvariantViolation] = []
    violations.extend(require_unique_ids(contributions))
    violations.extend(require_non_negative_resonance(contributions))
    violations.extend(find_parent_cycles(contributions))

    return ValidationReport(
        subject=f"Collection:{len(contributions)}",
        violations=tuple(violations),
        warnings=find_dangling_parents(contributions),
    )
