"""
Session Context

Responsibilities:
- Holds the current and previous recommendation records of a user
- Applies the write policy (merge-on-write, never overwrite with nothing)
- Loads and saves career plan documents through a DocumentStore

Owns: Career plan state, document store implementations
Never: Parses responses itself or talks to the assistant
"""

from tandau.contexts.session.session_state import CareerPlanSession
from tandau.contexts.session.store import (
    DocumentStore,
    InMemoryStore,
    JsonFileStore,
    StoreError,
    document_key,
)

__all__ = [
    "CareerPlanSession",
    "DocumentStore",
    "InMemoryStore",
    "JsonFileStore",
    "StoreError",
    "document_key",
]
