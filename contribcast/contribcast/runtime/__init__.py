"""
Runtime layer (storage backends, the contribution store, chain reconstruction).

Models live in contribcast.models.
"""
from .storage import BlobStorage, InMemoryBlobStorage, JsonFileBlobStorage, SqliteBlobStorage, StorageError
from .store import STORAGE_KEY, ContributionStore, StoreConfig
from .seed import seed_sample_data

__all__ = [
    "BlobStorage",
    "InMemoryBlobStorage",
    "JsonFileBlobStorage",
    "SqliteBlobStorage",
    "StorageError",
    "STORAGE_KEY",
    "ContributionStore",
    "StoreConfig",
    "seed_sample_data",
]
