from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set

from contribcast.models.contribution import Contribution

MIN_DESCRIPTION_LENGTH = 10


@dataclass(frozen=True)
class InvariantViolation:
    rule: str
    message: str
    contribution_id: Optional[str] = None


# ---------------------------
# Submission (boundary) rules
# ---------------------------

def require_contributor(contributor: str) -> Sequence[InvariantViolation]:
    if not (contributor or "").strip():
        return (InvariantViolation(rule="contributor_required", message="Contributor name is required"),)
    return ()


def require_project(project_id: str) -> Sequence[InvariantViolation]:
    if not (project_id or "").strip():
        return (InvariantViolation(rule="project_required", message="Project ID/URL is required"),)
    return ()


def require_description(
    description: str,
    *,
    min_length: int = MIN_DESCRIPTION_LENGTH,
) -> Sequence[InvariantViolation]:
    text = (description or "").strip()
    if not text:
        return (InvariantViolation(rule="description_required", message="Description is required"),)
    if len(text) < min_length:
        return (
            InvariantViolation(
                rule="description_length",
                message=f"Description must be at least {min_length} characters",
            ),
        )
    return ()


def check_submission(
    *,
    contributor: str,
    project_id: str,
    description: str,
    min_description_length: int = MIN_DESCRIPTION_LENGTH,
) -> Sequence[InvariantViolation]:
    violations: list[InvariantViolation] = []
    violations.extend(require_contributor(contributor))
    violations.extend(require_project(project_id))
    violations.extend(require_description(description, min_length=min_description_length))
    return tuple(violations)


# ---------------------------
# Collection integrity rules
# ---------------------------

def require_unique_ids(contributions: Iterable[Contribution]) -> Sequence[InvariantViolation]:
    seen: Set[str] = set()
    reported: Set[str] = set()
    violations: list[InvariantViolation] = []
    for c in contributions:
        cid = c.contribution_id
        if cid in seen and cid not in reported:
            reported.add(cid)
            violations.append(
                InvariantViolation(
                    rule="duplicate_id",
                    message=f"Contribution id {cid} appears more than once",
                    contribution_id=cid,
                )
            )
        seen.add(cid)
    return tuple(violations)


def require_non_negative_resonance(contributions: Iterable[Contribution]) -> Sequence[InvariantViolation]:
    """
    (Contribution.__post_init__ already refuses negatives; this catches
    instances built around it, e.g. via object.__setattr__.)
    """
    return tuple(
        InvariantViolation(
            rule="negative_resonance",
            message=f"Contribution {c.contribution_id} has resonance {c.resonance}",
            contribution_id=c.contribution_id,
        )
        for c in contributions
        if c.resonance < 0
    )


def find_dangling_parents(contributions: Sequence[Contribution]) -> Sequence[InvariantViolation]:
    """
    Dangling parents are tolerated (the record acts as a root), so callers
    usually treat these as warnings rather than failures.
    """
    known = {c.contribution_id for c in contributions}
    return tuple(
        InvariantViolation(
            rule="dangling_parent",
            message=f"Contribution {c.contribution_id} references missing parent {c.parent_contribution_id}",
            contribution_id=c.contribution_id,
        )
        for c in contributions
        if c.parent_contribution_id is not None and c.parent_contribution_id not in known
    )


def find_parent_cycles(contributions: Sequence[Contribution]) -> Sequence[InvariantViolation]:
    """
    One violation per distinct cycle in the parent relation, reported against
    the smallest id on the cycle so output is deterministic.
    """
    parent_of: Dict[str, Optional[str]] = {}
    for c in contributions:
        parent_of.setdefault(c.contribution_id, c.parent_contribution_id)

    violations: list[InvariantViolation] = []
    done: Set[str] = set()
    for start in parent_of:
        if start in done:
            continue
        path: List[str] = []
        on_path: Set[str] = set()
        node: Optional[str] = start
        while node is not None and node in parent_of and node not in done:
            if node in on_path:
                cycle = path[path.index(node):]
                anchor = min(cycle)
                violations.append(
                    InvariantViolation(
                        rule="parent_cycle",
                        message=f"Parent links form a cycle: {' -> '.join(cycle + [node])}",
                        contribution_id=anchor,
                    )
                )
                break
            path.append(node)
            on_path.add(node)
            node = parent_of[node]
        done.update(path)
    return tuple(violations)
