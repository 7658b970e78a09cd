import pytest

from fieldforce.core.exceptions import NotFoundError
from fieldforce.store.filters import apply_query, matches
from fieldforce.store.memory_store import InMemoryDocumentStore


def test_put_get_update_delete():
    store = InMemoryDocumentStore()
    doc_id = store.put("expenses", {"userId": "u1", "status": "draft"})

    assert store.get("expenses", doc_id) == {"id": doc_id, "userId": "u1", "status": "draft"}

    store.update("expenses", doc_id, {"status": "pending"})
    assert store.get("expenses", doc_id)["status"] == "pending"

    store.delete("expenses", doc_id)
    assert store.get("expenses", doc_id) is None


def test_update_of_missing_document_raises():
    with pytest.raises(NotFoundError):
        InMemoryDocumentStore().update("expenses", "missing", {"status": "approved"})


def test_returned_documents_are_copies():
    store = InMemoryDocumentStore()
    doc_id = store.put("users", {"locations": {"A": {"distanceKm": "1"}}}, doc_id="u1")

    store.get("users", doc_id)["locations"]["A"]["distanceKm"] = "999"
    store.query("users")[0]["locations"].clear()

    assert store.get("users", "u1")["locations"] == {"A": {"distanceKm": "1"}}


def test_query_filters_and_order():
    store = InMemoryDocumentStore()
    store.put("orders", {"userId": "u1", "createdAt": "2024-03-02"}, doc_id="b")
    store.put("orders", {"userId": "u1", "createdAt": "2024-03-01"}, doc_id="a")
    store.put("orders", {"userId": "u2", "createdAt": "2024-03-03"}, doc_id="c")

    docs = store.query("orders", [("userId", "==", "u1")], order=("createdAt", True))

    assert [d["id"] for d in docs] == ["b", "a"]


def test_filter_operators():
    doc = {"status": "pending", "createdAt": "2024-03-05", "selfieRef": None}

    assert matches(doc, [("status", "in", ["pending", "approved"])])
    assert matches(doc, [("createdAt", ">=", "2024-03-05"), ("createdAt", "<", "2024-03-06")])
    assert not matches(doc, [("selfieRef", "!=", None)])
    assert not matches(doc, [("selfieRef", "<", "x")])
    assert not matches(doc, [("createdAt", ">", 5)])
    with pytest.raises(ValueError):
        matches(doc, [("status", "~", "p")])


def test_missing_order_values_sort_first():
    docs = [{"id": "x", "n": "2"}, {"id": "y"}, {"id": "z", "n": "1"}]

    assert [d["id"] for d in apply_query(docs, [], ("n", False))] == ["y", "z", "x"]
