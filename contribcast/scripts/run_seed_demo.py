# contribcast/scripts/run_seed_demo.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

from contribcast.models.chain import summarize_chain
from contribcast.runtime.seed import seed_sample_data
from contribcast.runtime.storage import JsonFileBlobStorage
from contribcast.runtime.store import ContributionStore, StoreConfig


def main(argv: list[str]) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    data_dir = Path(argv[1]) if len(argv) > 1 else Path(".contribcast")
    store = ContributionStore(JsonFileBlobStorage(data_dir), StoreConfig(json_indent=2))

    if seed_sample_data(store):
        print(f"Seeded sample data into {data_dir}")

    feed = store.list_all()
    print(f"\nFeed ({len(feed)} contributions, newest first)")
    for c in feed:
        depth = store.get_depth(c.contribution_id)
        tags = f" [{', '.join(c.tags)}]" if c.tags else ""
        print(
            f"  {c.contribution_type.value:10s} {c.contributor:14s} {c.project_id:26s} "
            f"resonance={c.resonance:<3d} depth={depth}{tags}"
        )

    replies = [c for c in feed if c.is_reply]
    if not replies:
        return

    chain = store.get_chain(replies[0].contribution_id)
    summary = summarize_chain(chain)
    print(
        f"\nChain around {replies[0].contribution_id}: "
        f"{summary.total} contributions, max depth {summary.max_depth}, "
        f"{summary.contributor_count} contributors"
    )
    for entry in chain:
        print(f"  {'  ' * entry.depth}- {entry.contributor}: {entry.contribution.description}")


if __name__ == "__main__":
    main(sys.argv)
