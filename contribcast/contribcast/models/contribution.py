from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .types import DEFAULT_CONTRIBUTION_TYPE, ContributionType, new_contribution_id, now_iso

logger = logging.getLogger(__name__)


# Persisted key order; also the exact key set of a record.
RECORD_KEYS: Tuple[str, ...] = (
    "id",
    "contributor",
    "projectId",
    "type",
    "description",
    "timestamp",
    "parentContributionId",
    "tags",
    "resonance",
)


def _as_tags(seq: Sequence[str]) -> Tuple[str, ...]:
    # order is display-relevant and duplicates are allowed: no dedupe
    if isinstance(seq, str):
        raise TypeError("tags must be a sequence of strings, not a single string")
    tags = tuple(seq)
    for tag in tags:
        if not isinstance(tag, str):
            raise TypeError(f"tags must be strings, got {type(tag).__name__}")
    return tags


@dataclass(frozen=True)
class Contribution:
    """
    One authored action (comment, edit, remix, suggestion) tied to a project.

    - contribution_id never changes once generated
    - parent_contribution_id is a plain back-reference; it may dangle
    - resonance is the only field that changes after creation, and it changes
      by producing a new instance (with_resonance / bump_resonance)
    """
    contribution_id: str = field(default_factory=new_contribution_id)
    contributor: str = ""
    project_id: str = ""
    contribution_type: ContributionType = DEFAULT_CONTRIBUTION_TYPE
    description: str = ""
    timestamp: str = field(default_factory=now_iso)
    parent_contribution_id: Optional[str] = None
    tags: Sequence[str] = field(default_factory=tuple)
    resonance: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "contribution_type", ContributionType.coerce(self.contribution_type))
        object.__setattr__(self, "tags", _as_tags(self.tags))
        if not self.parent_contribution_id:
            object.__setattr__(self, "parent_contribution_id", None)
        if self.resonance < 0:
            raise ValueError("Contribution.resonance must be >= 0")

    # -----------------------
    # Construction
    # -----------------------

    @classmethod
    def create(
        cls,
        *,
        contributor: str,
        project_id: str,
        contribution_type: ContributionType | str,
        description: str,
        parent_contribution_id: Optional[str] = None,
        tags: Sequence[str] = (),
        resonance: int = 0,
    ) -> "Contribution":
        return cls(
            contributor=contributor,
            project_id=project_id,
            contribution_type=ContributionType.coerce(contribution_type),
            description=description,
            parent_contribution_id=parent_contribution_id,
            tags=tuple(tags),
            resonance=resonance,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Contribution":
        """
        Rebuild a Contribution from a persisted record.

        Missing fields get the same defaults a fresh construction would give
        them, so records written by an older schema still come back valid.
        Unknown keys are ignored.
        """
        if not isinstance(record, Mapping):
            raise TypeError(f"Contribution record must be an object, got {type(record).__name__}")

        kwargs: Dict[str, Any] = {}

        # falsy id -> generate, same as construction
        if record.get("id"):
            kwargs["contribution_id"] = str(record["id"])
        if record.get("timestamp"):
            kwargs["timestamp"] = str(record["timestamp"])

        for key, attr in (("contributor", "contributor"), ("projectId", "project_id"), ("description", "description")):
            value = record.get(key)
            if value is not None:
                kwargs[attr] = str(value)

        raw_type = record.get("type")
        if raw_type is not None:
            try:
                kwargs["contribution_type"] = ContributionType.coerce(raw_type)
            except ValueError:
                logger.warning(
                    f"Unknown contribution type {raw_type!r} in record {record.get('id')!r}; "
                    f"using {DEFAULT_CONTRIBUTION_TYPE.value}"
                )

        parent = record.get("parentContributionId")
        kwargs["parent_contribution_id"] = str(parent) if parent else None

        tags = record.get("tags")
        if isinstance(tags, (list, tuple)):
            kwargs["tags"] = tuple(str(t) for t in tags)

        resonance = record.get("resonance")
        if resonance is not None:
            kwargs["resonance"] = max(0, int(resonance))

        return cls(**kwargs)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.contribution_id,
            "contributor": self.contributor,
            "projectId": self.project_id,
            "type": self.contribution_type.value,
            "description": self.description,
            "timestamp": self.timestamp,
            "parentContributionId": self.parent_contribution_id,
            "tags": list(self.tags),
            "resonance": self.resonance,
        }

    # -----------------------
    # Immutability helpers
    # -----------------------

    @property
    def is_reply(self) -> bool:
        return self.parent_contribution_id is not None

    def with_resonance(self, resonance: int) -> "Contribution":
        return replace(self, resonance=max(0, resonance))

    def bump_resonance(self, delta: int = 1) -> "Contribution":
        return self.with_resonance(self.resonance + delta)

    def with_parent(self, parent_contribution_id: Optional[str]) -> "Contribution":
        return replace(self, parent_contribution_id=parent_contribution_id)
