from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from contribcast.invariants.rules import MIN_DESCRIPTION_LENGTH
from contribcast.invariants.validate import ValidationReport, validate_collection, validate_contribution
from contribcast.models.chain import ChainReport, ChainSummary, ContributionWithDepth, summarize_chain
from contribcast.models.contribution import Contribution
from contribcast.models.types import ContributionType

from .chain import ancestor_depth, reconstruct_chain
from .storage import BlobStorage, StorageError

logger = logging.getLogger(__name__)

STORAGE_KEY = "contribcast_contributions"


@dataclass(frozen=True)
class StoreConfig:
    """
    Store configuration.
    Keep small; presentation policy lives outside.
    """
    storage_key: str = STORAGE_KEY
    min_description_length: int = MIN_DESCRIPTION_LENGTH
    # off: the store persists whatever it is handed, validation is the caller's job
    enforce_validation: bool = False
    json_indent: Optional[int] = None


class ContributionStore:
    """
    Owns the contribution collection kept in one storage slot.

    Nothing is cached between calls: every operation re-reads and re-parses
    the slot, so the persisted blob is the single source of truth. Writes are
    read-modify-write of the whole collection with no version check, so two
    writers sharing a slot can overwrite each other.
    """

    def __init__(self, storage: BlobStorage, config: Optional[StoreConfig] = None) -> None:
        self.storage = storage
        self.config = config or StoreConfig()

    # -----------------------
    # Persistence
    # -----------------------

    def load_all(self) -> Tuple[Contribution, ...]:
        key = self.config.storage_key
        try:
            blob = self.storage.read(key)
        except StorageError as e:
            logger.error(f"Error loading contributions from storage: {e}")
            return ()
        if not blob:
            return ()

        try:
            data = json.loads(blob)
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            return tuple(Contribution.from_record(record) for record in data)
        except (ValueError, TypeError, OverflowError, RecursionError) as e:
            # non-finite numbers overflow int(); deeply nested arrays exhaust the decoder
            logger.error(f"Error loading contributions from storage slot {key!r}: {e}")
            return ()

    def list_all(self) -> Tuple[Contribution, ...]:
        return self.load_all()

    def save_all(self, contributions: Iterable[Contribution]) -> bool:
        """
        Replace the stored collection. Returns False (after logging) when the
        backend refused the write; callers are free to ignore the result.
        """
        blob = json.dumps([c.to_record() for c in contributions], indent=self.config.json_indent)
        try:
            self.storage.write(self.config.storage_key, blob)
        except StorageError as e:
            logger.error(f"Error saving contributions to storage: {e}")
            return False
        return True

    # -----------------------
    # Mutation
    # -----------------------

    def add(self, contribution: Contribution) -> Contribution:
        """
        Prepend (newest first) and persist. Ids are not checked for
        duplicates; generation makes collisions practically impossible.
        """
        if self.config.enforce_validation:
            report = validate_contribution(
                contribution,
                min_description_length=self.config.min_description_length,
            )
            if not report.ok:
                raise ValueError("Contribution validation failed:\n" + report.describe())

        contributions = list(self.load_all())
        contributions.insert(0, contribution)
        if self.save_all(contributions):
            logger.info(
                f"Added {contribution.contribution_type.value} {contribution.contribution_id} "
                f"by {contribution.contributor}"
            )
        return contribution

    def update_resonance(self, contribution_id: str, delta: int = 1) -> Optional[Contribution]:
        contributions = list(self.load_all())
        for i, c in enumerate(contributions):
            if c.contribution_id == contribution_id:
                updated = c.bump_resonance(delta)
                contributions[i] = updated
                self.save_all(contributions)
                return updated
        return None

    # -----------------------
    # Lookup
    # -----------------------

    def get_by_id(self, contribution_id: str) -> Optional[Contribution]:
        for c in self.load_all():
            if c.contribution_id == contribution_id:
                return c
        return None

    def get_by_project(self, project_id: str) -> Tuple[Contribution, ...]:
        # exact match, no trimming or case folding
        return tuple(c for c in self.load_all() if c.project_id == project_id)

    def get_by_type(self, contribution_type: ContributionType | str) -> Tuple[Contribution, ...]:
        wanted = ContributionType.coerce(contribution_type)
        return tuple(c for c in self.load_all() if c.contribution_type is wanted)

    def get_depth(self, contribution_id: str) -> Optional[int]:
        return ancestor_depth(self.load_all(), contribution_id)

    # -----------------------
    # Chains
    # -----------------------

    def trace_chain(self, contribution_id: str) -> ChainReport:
        return reconstruct_chain(self.load_all(), contribution_id)

    def get_chain(self, contribution_id: str) -> Tuple[ContributionWithDepth, ...]:
        return tuple(self.trace_chain(contribution_id).entries)

    def get_chain_summary(self, contribution_id: str) -> ChainSummary:
        return summarize_chain(self.get_chain(contribution_id))

    # -----------------------
    # Integrity
    # -----------------------

    def validate_collection(self) -> ValidationReport:
        return validate_collection(self.load_all())
