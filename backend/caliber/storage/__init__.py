"""Storage module - durable blob storage and the measurement entry store."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .entry_store import (
    EntryStore, StorageError, SEED_ENTRIES, CANONICAL_CORRECTION, init_entry_store, get_entry_store
)

__all__ = [
    'StorageInterface', 'LocalStorage',
    'EntryStore', 'StorageError', 'SEED_ENTRIES', 'CANONICAL_CORRECTION',
    'init_entry_store', 'get_entry_store',
]
