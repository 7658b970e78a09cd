from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

Filter = tuple[str, str, Any]
Order = tuple[str, bool]


class DocumentStore(Protocol):
    """CRUD + query access to a document store.

    Documents are plain dicts of JSON-compatible values; every document
    returned carries its identifier under ``"id"``. ``kind`` is the
    collection name. Single-document writes are assumed atomic, nothing
    spanning two documents is.
    """

    def query(self, kind: str, filters: Sequence[Filter] = (), order: Optional[Order] = None) -> list[dict]:
        """Filters are (field, op, value) with op in ==, !=, in, <, <=, >, >=.

        ``order`` is (field, descending).
        """

        raise NotImplementedError

    def get(self, kind: str, doc_id: str) -> Optional[dict]:
        raise NotImplementedError

    def put(self, kind: str, fields: dict, doc_id: Optional[str] = None) -> str:
        """Create (or overwrite when doc_id is given) a document.

        Returns the document id.
        """

        raise NotImplementedError

    def update(self, kind: str, doc_id: str, patch: dict) -> None:
        """Merge ``patch`` into an existing document.

        Raises NotFoundError when the document does not exist.
        """

        raise NotImplementedError

    def delete(self, kind: str, doc_id: str) -> None:
        raise NotImplementedError


class AssetStore(Protocol):
    def delete_asset(self, ref: str) -> None:
        """Best-effort removal of a binary asset (selfie, attachment)."""

        raise NotImplementedError
