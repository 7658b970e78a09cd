import json

import mysql.connector
import pytest

from fieldforce.core.exceptions import NotFoundError, StoreError
from fieldforce.store.mysql_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, table):
        self._table = table
        self._rows = []

    def execute(self, sql, params=()):
        sql = " ".join(sql.split())
        if sql.startswith("SELECT doc_id, body FROM documents WHERE kind=%s AND doc_id=%s"):
            body = self._table.get((params[0], params[1]))
            self._rows = [] if body is None else [{"doc_id": params[1], "body": body}]
        elif sql.startswith("SELECT doc_id, body FROM documents WHERE kind=%s"):
            self._rows = [{"doc_id": d, "body": b} for (k, d), b in self._table.items() if k == params[0]]
        elif sql.startswith("INSERT INTO documents"):
            self._table[(params[0], params[1])] = params[2]
        elif sql.startswith("UPDATE documents"):
            self._table[(params[1], params[2])] = params[0]
        elif sql.startswith("DELETE FROM documents"):
            self._table.pop((params[0], params[1]), None)
        else:
            raise AssertionError(f"unexpected SQL: {sql}")

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, table):
        self._table = table
        self.committed = 0

    def cursor(self, dictionary=True):
        return FakeCursor(self._table)

    def commit(self):
        self.committed += 1

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, fail=False):
        self.table = {}
        self._fail = fail

    def connect(self, *, with_database=True):
        if self._fail:
            raise mysql.connector.Error(msg="Can't connect to MySQL server")
        return FakeConnection(self.table)


def test_documents_are_stored_as_json_bodies():
    factory = FakeConnFactory()
    store = MySQLDocumentStore(factory)

    doc_id = store.put("expenses", {"id": "ignored", "userId": "u1", "status": "draft"})

    assert json.loads(factory.table[("expenses", doc_id)]) == {"userId": "u1", "status": "draft"}
    assert store.get("expenses", doc_id) == {"id": doc_id, "userId": "u1", "status": "draft"}
    assert store.get("expenses", "other") is None


def test_update_merges_and_query_filters():
    store = MySQLDocumentStore(FakeConnFactory())
    a = store.put("expenses", {"userId": "u1", "status": "draft"})
    store.put("expenses", {"userId": "u2", "status": "draft"})

    store.update("expenses", a, {"status": "pending"})

    docs = store.query("expenses", [("status", "==", "pending")])
    assert [d["id"] for d in docs] == [a]
    assert docs[0]["userId"] == "u1"

    with pytest.raises(NotFoundError):
        store.update("expenses", "missing", {"status": "approved"})

    store.delete("expenses", a)
    assert store.get("expenses", a) is None


def test_driver_errors_surface_as_store_errors():
    store = MySQLDocumentStore(FakeConnFactory(fail=True))

    with pytest.raises(StoreError):
        store.get("expenses", "x")
