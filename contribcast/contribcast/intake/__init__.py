from .types import ContributionDraft, parse_tags
from .submit import check_draft, submit_draft

__all__ = ["ContributionDraft", "parse_tags", "check_draft", "submit_draft"]
