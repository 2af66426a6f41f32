"""Tests for the in-memory and Supabase record stores."""

from types import SimpleNamespace

import pytest

from study_buddy.db.store import SEQUENCE_COLUMN, MemoryStore, SupabaseStore


@pytest.fixture
def store():
    return MemoryStore()


def test_insert_assigns_id(store):
    row = store.insert("conversations", {"user_id": "u1", "title": "T"})
    assert row["id"]
    assert store.get("conversations", row["id"]) == row


def test_returned_rows_are_copies(store):
    row = store.insert("conversations", {"title": "T"})
    row["title"] = "changed"
    assert store.get("conversations", row["id"])["title"] == "T"


def test_patch(store):
    row = store.insert("conversations", {"last_message_at": 1})
    patched = store.patch("conversations", row["id"], {"last_message_at": 5})
    assert patched["last_message_at"] == 5
    assert store.patch("conversations", "missing", {"last_message_at": 5}) is None


def test_scan_orders_and_keeps_insertion_order_on_ties(store):
    a = store.insert("messages", {"conversation_id": "c", "timestamp": 2})
    b = store.insert("messages", {"conversation_id": "c", "timestamp": 1})
    c = store.insert("messages", {"conversation_id": "c", "timestamp": 2})
    store.insert("messages", {"conversation_id": "other", "timestamp": 0})

    ascending = store.scan("messages", "conversation_id", "c", order_by="timestamp")
    assert [r["id"] for r in ascending] == [b["id"], a["id"], c["id"]]

    descending = store.scan("messages", "conversation_id", "c", order_by="timestamp", desc=True)
    assert [r["id"] for r in descending] == [a["id"], c["id"], b["id"]]


def test_find_one(store):
    store.insert("users", {"email": "a@example.com"})
    assert store.find_one("users", "email", "a@example.com")["email"] == "a@example.com"
    assert store.find_one("users", "email", "b@example.com") is None


def test_transaction_rolls_back_on_error(store):
    conv = store.insert("conversations", {"last_message_at": 1})

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.insert("messages", {"conversation_id": conv["id"], "timestamp": 2})
            store.patch("conversations", conv["id"], {"last_message_at": 2})
            raise RuntimeError("fail")

    assert store.scan("messages", "conversation_id", conv["id"], order_by="timestamp") == []
    assert store.get("conversations", conv["id"])["last_message_at"] == 1


def test_transaction_commits(store):
    with store.transaction():
        store.insert("messages", {"conversation_id": "c", "timestamp": 1})
    assert len(store.scan("messages", "conversation_id", "c", order_by="timestamp")) == 1


# --- SupabaseStore, against a client that records PostgREST calls ---

class _FakeQuery:
    def __init__(self, client, table):
        self._client = client
        self._table = table
        self.ops = []

    def __getattr__(self, name):
        if name not in ("insert", "select", "update", "delete", "eq", "order", "limit"):
            raise AttributeError(name)

        def record(*args, **kwargs):
            self.ops.append((name, args, kwargs))
            return self

        return record

    def execute(self):
        self._client.executed.append((self._table, self.ops))
        kind = self.ops[0][0]
        if kind == "insert":
            self._client.counter += 1
            return SimpleNamespace(data=[{"id": f"row-{self._client.counter}", **self.ops[0][1][0]}])
        if kind == "delete":
            return SimpleNamespace(data=[])
        return SimpleNamespace(data=list(self._client.rows))


class _FakeSupabase:
    def __init__(self):
        self.executed = []
        self.rows = []
        self.counter = 0

    def table(self, name):
        return _FakeQuery(self, name)

    def deleted(self):
        return [
            (table, ops[1][1][1])
            for table, ops in self.executed
            if ops[0][0] == "delete"
        ]


@pytest.fixture
def supabase():
    return _FakeSupabase()


def test_supabase_rollback_deletes_inserted_rows(supabase):
    store = SupabaseStore(supabase)

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.insert("messages", {"content": "a"})
            store.insert("conversations", {"title": "b"})
            raise RuntimeError("patch failed")

    assert supabase.deleted() == [("conversations", "row-2"), ("messages", "row-1")]


def test_supabase_commit_keeps_rows(supabase):
    store = SupabaseStore(supabase)

    with store.transaction():
        store.insert("messages", {"content": "a"})

    assert supabase.deleted() == []
    # Inserts after the block are not journaled
    store.insert("messages", {"content": "b"})
    assert supabase.deleted() == []


def test_supabase_nested_transaction_rolled_back_by_outer(supabase):
    store = SupabaseStore(supabase)

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.insert("messages", {"content": "outer"})
            with store.transaction():
                store.insert("messages", {"content": "inner"})
            raise RuntimeError("fail")

    assert supabase.deleted() == [("messages", "row-2"), ("messages", "row-1")]


def test_supabase_scan_breaks_ties_by_sequence(supabase):
    store = SupabaseStore(supabase)

    store.scan("conversations", "user_id", "u1", order_by="last_message_at", desc=True)

    _, ops = supabase.executed[-1]
    orders = [(op[1][0], op[2].get("desc", False)) for op in ops if op[0] == "order"]
    assert orders == [("last_message_at", True), (SEQUENCE_COLUMN, False)]
