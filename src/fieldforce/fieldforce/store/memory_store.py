from __future__ import annotations

import copy
import uuid
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from .filters import apply_query
from .repository import DocumentStore, Filter, Order


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store for tests, demos and ``STORE_BACKEND=memory``.

    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self):
        self._collections: dict[str, dict[str, dict]] = {}

    def _collection(self, kind: str) -> dict[str, dict]:
        return self._collections.setdefault(kind, {})

    def query(self, kind: str, filters: Sequence[Filter] = (), order: Optional[Order] = None) -> list[dict]:
        docs = [dict(body, id=doc_id) for doc_id, body in self._collection(kind).items()]
        return copy.deepcopy(apply_query(docs, filters, order))

    def get(self, kind: str, doc_id: str) -> Optional[dict]:
        body = self._collection(kind).get(str(doc_id))
        if body is None:
            return None
        return copy.deepcopy(dict(body, id=str(doc_id)))

    def put(self, kind: str, fields: dict, doc_id: Optional[str] = None) -> str:
        doc_id = str(doc_id) if doc_id else uuid.uuid4().hex
        body = copy.deepcopy({k: v for k, v in fields.items() if k != "id"})
        self._collection(kind)[doc_id] = body
        return doc_id

    def update(self, kind: str, doc_id: str, patch: dict) -> None:
        body = self._collection(kind).get(str(doc_id))
        if body is None:
            raise NotFoundError(f"Document not found: {kind}/{doc_id}")
        body.update(copy.deepcopy({k: v for k, v in patch.items() if k != "id"}))

    def delete(self, kind: str, doc_id: str) -> None:
        self._collection(kind).pop(str(doc_id), None)
