from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from contribcast.models.types import ContributionType


def parse_tags(text: str) -> Tuple[str, ...]:
    # "ui, dark-mode,, ui" -> ("ui", "dark-mode", "ui")
    return tuple(tag.strip() for tag in (text or "").split(",") if tag.strip())


@dataclass(frozen=True)
class ContributionDraft:
    """
    Submission as typed into a form: untrimmed text, tags as one
    comma-separated string.
    """
    contributor: str
    project_id: str
    description: str
    contribution_type: ContributionType = ContributionType.COMMENT
    tags_text: str = ""
    parent_contribution_id: Optional[str] = None

    @property
    def tags(self) -> Tuple[str, ...]:
        return parse_tags(self.tags_text)
