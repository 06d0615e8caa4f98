from __future__ import annotations

import time
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


# ============================================================
# types.py (scalars + taxonomies)
# ============================================================

def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """
    Current UTC time as ISO-8601 with millisecond precision and a "Z" suffix,
    e.g. "2024-05-01T12:30:00.123Z".
    """
    return now_utc().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_contribution_id() -> str:
    # time component (ms since epoch) + random suffix
    return f"{int(time.time() * 1000)}{uuid4().hex[:9]}"


class ContributionType(str, Enum):
    COMMENT = "Comment"
    EDIT = "Edit"
    REMIX = "Remix"
    SUGGESTION = "Suggestion"

    @classmethod
    def coerce(cls, value: "ContributionType | str") -> "ContributionType":
        """
        Accepts the enum itself, its value ("Remix") or its name ("REMIX").
        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
            try:
                return cls[value.upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown contribution type: {value!r}")


DEFAULT_CONTRIBUTION_TYPE = ContributionType.COMMENT
