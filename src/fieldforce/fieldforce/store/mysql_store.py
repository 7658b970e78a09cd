from __future__ import annotations

import json
import uuid
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from .connection import DatabaseConnection
from .filters import apply_query
from .mysql_base import db_cursor, fetchall, fetchone
from .repository import DocumentStore, Filter, Order


def _load(row: dict) -> dict:
    body = row["body"]
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    doc = json.loads(body) if isinstance(body, str) else dict(body)
    doc["id"] = row["doc_id"]
    return doc


def _dump(fields: dict) -> str:
    return json.dumps({k: v for k, v in fields.items() if k != "id"}, ensure_ascii=False)


class MySQLDocumentStore(DocumentStore):
    """JSON documents in a single ``documents`` table.

    Queries load the collection and filter in Python; every aggregate in this
    package is a full filtered scan anyway.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def query(self, kind: str, filters: Sequence[Filter] = (), order: Optional[Order] = None) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT doc_id, body FROM documents WHERE kind=%s", (kind,))
            docs = [_load(r) for r in fetchall(cur)]
        return apply_query(docs, filters, order)

    def get(self, kind: str, doc_id: str) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT doc_id, body FROM documents WHERE kind=%s AND doc_id=%s",
                (kind, str(doc_id)),
            )
            r = fetchone(cur)
            return _load(r) if r else None

    def put(self, kind: str, fields: dict, doc_id: Optional[str] = None) -> str:
        doc_id = str(doc_id) if doc_id else uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO documents(kind, doc_id, body)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE body=VALUES(body)
                """,
                (kind, doc_id, _dump(fields)),
            )
        return doc_id

    def update(self, kind: str, doc_id: str, patch: dict) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT doc_id, body FROM documents WHERE kind=%s AND doc_id=%s FOR UPDATE",
                (kind, str(doc_id)),
            )
            r = fetchone(cur)
            if not r:
                raise NotFoundError(f"Document not found: {kind}/{doc_id}")
            doc = _load(r)
            doc.update(patch)
            cur.execute(
                "UPDATE documents SET body=%s WHERE kind=%s AND doc_id=%s",
                (_dump(doc), kind, str(doc_id)),
            )

    def delete(self, kind: str, doc_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM documents WHERE kind=%s AND doc_id=%s", (kind, str(doc_id)))
