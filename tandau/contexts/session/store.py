"""
Document store for career plans.

One document per user holds the questionnaire answers, the chat history and
the latest recommendations. Writes are merge-style upserts: only the fields
passed to save() change, everything else in the document is kept.

JsonFileStore keeps one JSON file per document under TANDAU_DATA_PATH.
Temporary solution until a hosted document database is set up.
"""

import json
import os
from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()
DATA_PATH = Path(os.getenv("TANDAU_DATA_PATH", "outs/data"))
APP_ID = os.getenv("TANDAU_APP_ID", "default-app-id")


class StoreError(Exception):
    """
    Exception raised when a stored document cannot be read or written.

    Attributes:
        message: Error description
        key: Document key
        original_error: The underlying I/O or decoding error
    """

    def __init__(self, message: str, key: Optional[str] = None, original_error: Exception = None):
        self.message = message
        self.key = key
        self.original_error = original_error

        parts = [message]
        if key:
            parts.append(f"Document: {key}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


def document_key(user_id: str, app_id: Optional[str] = None) -> str:
    """
    Build the key of a user's career plan document.

    Example:
        document_key("u-42", "tandau")
        # "tandau/users/u-42/career_plan"
    """
    if app_id is None:
        app_id = APP_ID
    if not user_id:
        raise ValueError("user_id is required to address a career plan")
    return f"{app_id}/users/{user_id}/career_plan"


def merge_documents(existing: Optional[dict], update: dict) -> dict:
    """
    Deep-merge update into existing.

    Nested mappings are merged key by key; lists and scalars in update
    replace what was there. Values are copied as plain data: strings such as
    "${price}" from chat text are stored verbatim, never interpreted.
    """
    merged = deepcopy(existing) if existing else {}
    for field, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(field), dict):
            merged[field] = merge_documents(merged[field], value)
        else:
            merged[field] = deepcopy(value)
    return merged


class DocumentStore(ABC):
    """Persistence collaborator: load and merge-save documents by key."""

    @abstractmethod
    def load(self, key: str) -> Optional[dict]:
        """Return the stored document, or None if it does not exist."""
        pass

    @abstractmethod
    def save(self, key: str, data: dict, merge: bool = True) -> dict:
        """
        Write data to the document at key.

        Args:
            key: Document key (see document_key())
            data: Fields to write
            merge: Merge into the existing document (True) or replace it (False)

        Returns:
            The document as stored after the write
        """
        pass


class InMemoryStore(DocumentStore):
    """DocumentStore kept in a dict. Used for dry runs and tests."""

    def __init__(self):
        self._documents: dict[str, dict] = {}

    def load(self, key: str) -> Optional[dict]:
        document = self._documents.get(key)
        return deepcopy(document) if document is not None else None

    def save(self, key: str, data: dict, merge: bool = True) -> dict:
        existing = self._documents.get(key) if merge else None
        self._documents[key] = merge_documents(existing, data)
        return deepcopy(self._documents[key])


class JsonFileStore(DocumentStore):
    """DocumentStore writing one UTF-8 JSON file per document."""

    def __init__(self, root: Path = None):
        """
        Args:
            root: Base directory for documents. Defaults to TANDAU_DATA_PATH
        """
        if root is None:
            root = DATA_PATH
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        """Get the file path for a document key."""
        parts = key.split("/")
        if any(part in ("", ".", "..") for part in parts):
            raise ValueError(f"Invalid document key: {key}")
        return self.root.joinpath(*parts).with_suffix(".json")

    def load(self, key: str) -> Optional[dict]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError("Could not read stored document", key=key, original_error=e) from e
        if not isinstance(document, dict):
            raise StoreError("Stored document is not a JSON object", key=key)
        return document

    def save(self, key: str, data: dict, merge: bool = True) -> dict:
        existing = self.load(key) if merge else None
        document = merge_documents(existing, data)

        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            tmp_path.replace(path)
        except OSError as e:
            raise StoreError("Could not write document", key=key, original_error=e) from e
        return document
