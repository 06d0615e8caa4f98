from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

from .contribution import Contribution


@dataclass(frozen=True)
class ContributionWithDepth:
    """
    A chain entry: the contribution plus its distance (in parent hops) from
    the chain root. The root has depth 0.
    """
    contribution: Contribution
    depth: int

    @property
    def contribution_id(self) -> str:
        return self.contribution.contribution_id

    @property
    def contributor(self) -> str:
        return self.contribution.contributor


@dataclass(frozen=True)
class ChainReport:
    """
    Full result of reconstructing a chain around one contribution.

    - root_id: the root the ascent settled on (None when the id is unknown)
    - ascent_stopped_on_cycle: the ascent hit an already-visited id and used
      the last node reached as the root
    - skipped_ids: ids the descent reached a second time and did not emit
    """
    root_id: Optional[str] = None
    entries: Sequence[ContributionWithDepth] = field(default_factory=tuple)
    ascent_stopped_on_cycle: bool = False
    skipped_ids: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))
        object.__setattr__(self, "skipped_ids", tuple(self.skipped_ids))

    @property
    def found(self) -> bool:
        return self.root_id is not None

    @property
    def has_cycle(self) -> bool:
        return self.ascent_stopped_on_cycle or bool(self.skipped_ids)


@dataclass(frozen=True)
class ChainSummary:
    total: int = 0
    max_depth: int = 0
    contributors: Tuple[str, ...] = ()

    @property
    def contributor_count(self) -> int:
        return len(self.contributors)


def summarize_chain(entries: Iterable[ContributionWithDepth]) -> ChainSummary:
    # single pass: count, deepest entry, distinct contributors in first-seen order
    total = 0
    max_depth = 0
    seen: list[str] = []
    for entry in entries:
        total += 1
        if entry.depth > max_depth:
            max_depth = entry.depth
        if entry.contributor not in seen:
            seen.append(entry.contributor)
    return ChainSummary(total=total, max_depth=max_depth, contributors=tuple(seen))
