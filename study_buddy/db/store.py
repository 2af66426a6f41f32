"""Record store used by every data access function.

The access layer only needs insert, point-get, patch-by-id and an ordered
scan over one indexed field, plus a transaction boundary around each
handler's reads and writes. ``SupabaseStore`` is the deployed backend;
``MemoryStore`` keeps everything in process for local runs and tests.
"""

import copy
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)

# Identity column on every Supabase table; breaks ties in insertion order
SEQUENCE_COLUMN = "seq"


class Store(ABC):
    @abstractmethod
    def insert(self, table: str, row: dict[str, Any]) -> dict:
        """Insert a row and return it with its assigned ``id``."""
        ...

    @abstractmethod
    def get(self, table: str, row_id: str) -> dict | None:
        ...

    @abstractmethod
    def patch(self, table: str, row_id: str, fields: dict[str, Any]) -> dict | None:
        ...

    @abstractmethod
    def scan(self, table: str, field: str, value: Any, order_by: str, desc: bool = False) -> list[dict]:
        """All rows where ``field == value`` ordered by ``order_by``; ties keep insertion order."""
        ...

    @abstractmethod
    def find_one(self, table: str, field: str, value: Any) -> dict | None:
        ...

    @abstractmethod
    def transaction(self):
        """Context manager: writes inside the block are all kept or all discarded."""
        ...


class MemoryStore(Store):
    def __init__(self):
        self._tables: dict[str, list[dict]] = defaultdict(list)
        self._lock = threading.RLock()

    def insert(self, table: str, row: dict[str, Any]) -> dict:
        record = {"id": str(uuid.uuid4()), **row}
        with self._lock:
            self._tables[table].append(record)
        return dict(record)

    def get(self, table: str, row_id: str) -> dict | None:
        with self._lock:
            for row in self._tables[table]:
                if row["id"] == row_id:
                    return dict(row)
        return None

    def patch(self, table: str, row_id: str, fields: dict[str, Any]) -> dict | None:
        with self._lock:
            for row in self._tables[table]:
                if row["id"] == row_id:
                    row.update(fields)
                    return dict(row)
        return None

    def scan(self, table: str, field: str, value: Any, order_by: str, desc: bool = False) -> list[dict]:
        with self._lock:
            rows = [dict(row) for row in self._tables[table] if row.get(field) == value]
        # sorted() is stable, including with reverse=True
        return sorted(rows, key=lambda row: row[order_by], reverse=desc)

    def find_one(self, table: str, field: str, value: Any) -> dict | None:
        with self._lock:
            for row in self._tables[table]:
                if row.get(field) == value:
                    return dict(row)
        return None

    @contextmanager
    def transaction(self) -> Iterator["MemoryStore"]:
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield self
            except BaseException:
                self._tables = snapshot
                raise


class SupabaseStore(Store):
    """Store backed by Supabase tables through PostgREST.

    PostgREST has no multi-statement transactions, so ``transaction()``
    records the rows inserted inside the block and deletes them again if the
    block raises. Patches are not reverted; callers put them last.
    """

    def __init__(self, client):
        self._client = client
        self._local = threading.local()

    def _journal(self) -> list[tuple[str, str]] | None:
        return getattr(self._local, "journal", None)

    def insert(self, table: str, row: dict[str, Any]) -> dict:
        result = self._client.table(table).insert(row).execute()
        created = result.data[0]
        journal = self._journal()
        if journal is not None:
            journal.append((table, created["id"]))
        return created

    def get(self, table: str, row_id: str) -> dict | None:
        result = self._client.table(table).select("*").eq("id", row_id).execute()
        return result.data[0] if result.data else None

    def patch(self, table: str, row_id: str, fields: dict[str, Any]) -> dict | None:
        result = self._client.table(table).update(fields).eq("id", row_id).execute()
        return result.data[0] if result.data else None

    def scan(self, table: str, field: str, value: Any, order_by: str, desc: bool = False) -> list[dict]:
        result = (
            self._client.table(table)
            .select("*")
            .eq(field, value)
            .order(order_by, desc=desc)
            .order(SEQUENCE_COLUMN)
            .execute()
        )
        return result.data

    def find_one(self, table: str, field: str, value: Any) -> dict | None:
        result = self._client.table(table).select("*").eq(field, value).limit(1).execute()
        return result.data[0] if result.data else None

    @contextmanager
    def transaction(self) -> Iterator["SupabaseStore"]:
        if self._journal() is not None:
            # Nested block: the outermost transaction owns the rollback
            yield self
            return

        self._local.journal = []
        try:
            yield self
        except BaseException:
            for table, row_id in reversed(self._local.journal):
                try:
                    self._client.table(table).delete().eq("id", row_id).execute()
                except Exception:
                    logger.exception("Failed to roll back %s row %s", table, row_id)
            raise
        finally:
            self._local.journal = None
