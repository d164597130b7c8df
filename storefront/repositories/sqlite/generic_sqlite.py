from __future__ import annotations

import logging
import sqlite3
from typing import Optional, TypeVar

from storefront.domain.entities.base import Entity
from storefront.domain.specifications.base import Specification

from ..evaluator import evaluate
from ..generic import GenericRepo
from ..unit_of_work import ChangeKind, StagedChange, UnitOfWork
from .query_sqlite import SqliteQuery, TableMapping, register_functions

E = TypeVar("E", bound=Entity)

logger = logging.getLogger(__name__)

_SAVEPOINT = "save_all"


class _Conflict(Exception):
    """A staged update or delete matched no row."""


class SqliteRepo(GenericRepo[E]):
    """SQLite implementation of :class:`GenericRepo` for one table.

    Staged changes live in an explicit :class:`UnitOfWork` and are flushed
    inside a single savepoint by :meth:`save_all`. On an idle connection a
    successful ``save_all`` commits; when the caller already has a
    transaction open the savepoint nests in it and committing stays with the
    caller. An instance is meant to serve one unit of work at a time;
    concurrent reads are fine when the connection was opened with
    ``check_same_thread=False``.
    """

    def __init__(self, conn: sqlite3.Connection, mapping: TableMapping[E]) -> None:
        self._conn = conn
        self._mapping = mapping
        self._changes: UnitOfWork[E] = UnitOfWork()
        register_functions(self._conn)

    def query(self) -> SqliteQuery[E]:
        return SqliteQuery(self._conn, self._mapping)

    # Reads --------------------------------------------------------------

    def get_by_id(self, entity_id: int) -> Optional[E]:
        m = self._mapping
        cur = self._conn.execute(
            f"SELECT {m.select_list} FROM {m.table} WHERE {m.pk} = ?",
            (entity_id,),
        )
        row = cur.fetchone()
        if row:
            return m.from_row(row)
        return None

    def list_all(self) -> list[E]:
        return self.query().to_list()

    def list_by_spec(self, spec: Specification[E]) -> list[E]:
        return evaluate(self.query(), spec).to_list()

    def count_by_spec(self, spec: Specification[E]) -> int:
        return evaluate(self.query(), spec.without_paging()).count()

    def exists(self, entity_id: int) -> bool:
        m = self._mapping
        cur = self._conn.execute(f"SELECT 1 FROM {m.table} WHERE {m.pk} = ? LIMIT 1", (entity_id,))
        return cur.fetchone() is not None

    # Staging ------------------------------------------------------------

    def add(self, entity: E) -> None:
        self._changes.stage_add(entity)

    def update(self, entity: E) -> None:
        self._changes.stage_update(entity)

    def remove(self, entity: E) -> None:
        self._changes.stage_remove(entity)

    @property
    def pending(self) -> int:
        """Number of staged, uncommitted changes."""
        return len(self._changes)

    # Commit -------------------------------------------------------------

    def save_all(self) -> bool:
        changes = list(self._changes)
        self._changes.clear()
        if not changes:
            logger.info("Nothing to save", extra={"table": self._mapping.table})
            return False

        # Inside a caller-managed transaction the savepoint nests and the
        # caller keeps control of the final commit.
        outer = self._conn.in_transaction
        try:
            self._conn.execute(f"SAVEPOINT {_SAVEPOINT}")
        except sqlite3.Error as exc:
            logger.warning(
                "Could not open transaction: %s", exc, extra={"table": self._mapping.table}
            )
            return False

        inserted: list[tuple[E, int]] = []
        try:
            affected = 0
            for change in changes:
                affected += self._apply(change, inserted)
            self._conn.execute(f"RELEASE SAVEPOINT {_SAVEPOINT}")
            if not outer:
                self._conn.commit()
        except _Conflict as exc:
            logger.warning("Save rejected: %s", exc, extra={"table": self._mapping.table})
            self._rollback()
            return False
        except (sqlite3.Error, OverflowError) as exc:
            # OverflowError: an integer outside SQLite's 64-bit range
            logger.warning("Save failed: %s", exc, extra={"table": self._mapping.table})
            self._rollback()
            return False
        except Exception:
            self._rollback()
            raise

        for entity, rowid in inserted:
            entity.id = rowid
        logger.debug(
            "Saved changes",
            extra={"table": self._mapping.table, "changes": len(changes), "rows": affected},
        )
        return True

    def _apply(self, change: StagedChange[E], inserted: list[tuple[E, int]]) -> int:
        m = self._mapping
        entity = change.entity
        if change.kind is ChangeKind.ADD:
            values = m.to_row(entity)
            columns = list(m.columns.values())
            if not entity.is_transient:
                columns.insert(0, m.pk)
                values = (entity.id, *values)
            placeholders = ", ".join("?" for _ in columns)
            cur = self._conn.execute(
                f"INSERT INTO {m.table} ({', '.join(columns)}) VALUES ({placeholders})",
                values,
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError(f"SQLite insert failed: no lastrowid (table: {m.table})")
            inserted.append((entity, int(rowid)))
            return 1

        if change.kind is ChangeKind.UPDATE:
            assignments = ", ".join(f"{col} = ?" for col in m.columns.values())
            cur = self._conn.execute(
                f"UPDATE {m.table} SET {assignments} WHERE {m.pk} = ?",
                (*m.to_row(entity), entity.id),
            )
        else:
            cur = self._conn.execute(f"DELETE FROM {m.table} WHERE {m.pk} = ?", (entity.id,))
        if cur.rowcount == 0:
            raise _Conflict(f"{change.kind.value} matched no row with id={entity.id}")
        return cur.rowcount

    def _rollback(self) -> None:
        self._conn.execute(f"ROLLBACK TO SAVEPOINT {_SAVEPOINT}")
        self._conn.execute(f"RELEASE SAVEPOINT {_SAVEPOINT}")
