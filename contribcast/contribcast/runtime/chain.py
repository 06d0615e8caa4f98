from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from contribcast.models.chain import ChainReport, ContributionWithDepth
from contribcast.models.contribution import Contribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainIndex:
    """
    Lookup tables built once per chain query from the flat collection.

    - by_id: first occurrence wins, matching a linear scan
    - children: parent id -> children in stored order
    """
    by_id: Mapping[str, Contribution]
    children: Mapping[str, Tuple[Contribution, ...]]

    def children_of(self, contribution_id: str) -> Tuple[Contribution, ...]:
        return self.children.get(contribution_id, ())


def build_index(contributions: Iterable[Contribution]) -> ChainIndex:
    by_id: Dict[str, Contribution] = {}
    children: Dict[str, List[Contribution]] = {}
    for c in contributions:
        by_id.setdefault(c.contribution_id, c)
        if c.parent_contribution_id is not None:
            children.setdefault(c.parent_contribution_id, []).append(c)
    return ChainIndex(
        by_id=by_id,
        children={parent_id: tuple(kids) for parent_id, kids in children.items()},
    )


def find_root(index: ChainIndex, start: Contribution) -> Tuple[Contribution, bool]:
    """
    Follow parent links upward from `start`.

    Stops at a record with no parent, at a parent id that cannot be resolved
    (the current record becomes the root), or when the next parent id was
    already visited. In the last case the current record is used as the root
    even though a cyclic structure has no true top; the descent from it still
    covers everything reachable, so that substitution is accepted policy.

    Returns (root, stopped_on_cycle).
    """
    current = start
    visited: Set[str] = {current.contribution_id}
    while current.parent_contribution_id is not None:
        parent_id = current.parent_contribution_id
        if parent_id in visited:
            return current, True
        parent = index.by_id.get(parent_id)
        if parent is None:
            # dangling reference
            return current, False
        visited.add(parent_id)
        current = parent
    return current, False


def descend(index: ChainIndex, root: Contribution) -> Tuple[Tuple[ContributionWithDepth, ...], Tuple[str, ...]]:
    """
    Pre-order walk from root: parent before children, children in stored order.

    A visited-set caps the walk; a node reached a second time is not emitted
    and its id is returned in the skipped list instead.
    """
    entries: List[ContributionWithDepth] = []
    skipped: List[str] = []
    visited: Set[str] = set()

    stack: List[Tuple[Contribution, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node.contribution_id in visited:
            skipped.append(node.contribution_id)
            continue
        visited.add(node.contribution_id)
        entries.append(ContributionWithDepth(contribution=node, depth=depth))

        # reversed so the first stored child is popped first
        for child in reversed(index.children_of(node.contribution_id)):
            stack.append((child, depth + 1))

    return tuple(entries), tuple(skipped)


def reconstruct_chain(contributions: Sequence[Contribution], contribution_id: str) -> ChainReport:
    index = build_index(contributions)
    start = index.by_id.get(contribution_id)
    if start is None:
        return ChainReport()

    root, stopped_on_cycle = find_root(index, start)
    entries, skipped = descend(index, root)

    if stopped_on_cycle:
        logger.warning(
            f"Parent cycle above {contribution_id}: ascent stopped at {root.contribution_id}"
        )
    if skipped:
        logger.warning(
            f"Chain under {root.contribution_id} revisited {len(skipped)} node(s): {', '.join(skipped)}"
        )

    return ChainReport(
        root_id=root.contribution_id,
        entries=entries,
        ascent_stopped_on_cycle=stopped_on_cycle,
        skipped_ids=skipped,
    )


def ancestor_depth(contributions: Sequence[Contribution], contribution_id: str) -> Optional[int]:
    """
    Number of resolvable parent hops above a contribution (0 for a root).
    Cycle-safe: counting stops when a parent id repeats. None if unknown.
    """
    index = build_index(contributions)
    current = index.by_id.get(contribution_id)
    if current is None:
        return None

    depth = 0
    visited: Set[str] = {current.contribution_id}
    while current.parent_contribution_id is not None:
        parent_id = current.parent_contribution_id
        parent = index.by_id.get(parent_id)
        if parent is None or parent_id in visited:
            break
        visited.add(parent_id)
        depth += 1
        current = parent
    return depth
