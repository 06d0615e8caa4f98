import sys
from pathlib import Path

# -------------------------------------------------------------------
# Make the project importable BEFORE importing any project packages.
# -------------------------------------------------------------------
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from contribcast.models.contribution import Contribution  # noqa: E402
from contribcast.models.types import ContributionType  # noqa: E402
from contribcast.runtime.storage import InMemoryBlobStorage  # noqa: E402
from contribcast.runtime.store import ContributionStore  # noqa: E402


@pytest.fixture
def storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def store(storage: InMemoryBlobStorage) -> ContributionStore:
    return ContributionStore(storage)


@pytest.fixture
def make_contribution():
    """
    Returns a factory that builds a valid baseline Contribution and lets each
    test override what it cares about (id, parent, resonance, ...).
    """

    def _make(
        contribution_id: str | None = None,
        *,
        parent: str | None = None,
        contributor: str = "alice.eth",
        project_id: str = "frames-toolkit",
        contribution_type: ContributionType = ContributionType.COMMENT,
        description: str = "A perfectly reasonable description",
        tags=(),
        resonance: int = 0,
    ) -> Contribution:
        kwargs = {}
        if contribution_id is not None:
            kwargs["contribution_id"] = contribution_id
        return Contribution(
            contributor=contributor,
            project_id=project_id,
            contribution_type=contribution_type,
            description=description,
            parent_contribution_id=parent,
            tags=tuple(tags),
            resonance=resonance,
            **kwargs,
        )

    return _make
