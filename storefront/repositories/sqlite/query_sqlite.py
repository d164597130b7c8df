from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar

from storefront.domain.specifications.base import Criterion, Operator, OrderBy, Paging

E = TypeVar("E")

CASEFOLD_SQL_FUNCTION = "casefold"


def _casefold(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


def register_functions(conn: sqlite3.Connection) -> None:
    """Register the SQL helpers :class:`SqliteQuery` relies on."""
    conn.create_function(CASEFOLD_SQL_FUNCTION, 1, _casefold, deterministic=True)


@dataclass(frozen=True)
class TableMapping(Generic[E]):
    """Maps an entity type onto one table.

    ``columns`` maps entity fields (except ``id``) to column names in the
    order used by ``to_row``. ``from_row`` receives ``(pk, *columns)``.
    ``encoders`` convert Python values to their stored form per field.
    """

    table: str
    pk: str
    columns: Mapping[str, str]
    to_row: Callable[[E], tuple[Any, ...]]
    from_row: Callable[[Sequence[Any]], E]
    encoders: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    @property
    def select_list(self) -> str:
        return ", ".join([self.pk, *self.columns.values()])

    def column(self, field_name: str) -> str:
        if field_name == "id":
            return self.pk
        try:
            return self.columns[field_name]
        except KeyError:
            raise ValueError(f"Unknown field {field_name!r} for table {self.table}") from None

    def encode(self, field_name: str, value: Any) -> Any:
        encoder = self.encoders.get(field_name)
        return encoder(value) if encoder is not None else value


class SqliteQuery(Generic[E]):
    """:class:`~storefront.repositories.query.QuerySource` backed by a ``SELECT``.

    The primary key is always the last sort key, so rows with equal sort
    values come back in identifier order. Criteria and ordering must be
    added before paging, and only one paging window is accepted.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        mapping: TableMapping[E],
        *,
        criteria: tuple[Criterion, ...] = (),
        orders: tuple[OrderBy, ...] = (),
        paging: Optional[Paging] = None,
    ) -> None:
        self._conn = conn
        self._mapping = mapping
        self._criteria = criteria
        self._orders = orders
        self._paging = paging

    def _derive(self, **changes: Any) -> "SqliteQuery[E]":
        state: dict[str, Any] = {
            "criteria": self._criteria,
            "orders": self._orders,
            "paging": self._paging,
        }
        state.update(changes)
        return SqliteQuery(self._conn, self._mapping, **state)

    def where(self, criteria: Sequence[Criterion]) -> "SqliteQuery[E]":
        if self._paging is not None:
            raise ValueError("Criteria must be applied before paging")
        return self._derive(criteria=self._criteria + tuple(criteria))

    def order_by(self, ordering: OrderBy) -> "SqliteQuery[E]":
        if self._paging is not None:
            raise ValueError("Ordering must be applied before paging")
        # Newest ordering becomes the primary key, earlier ones break ties
        return self._derive(orders=(ordering, *self._orders))

    def page(self, paging: Paging) -> "SqliteQuery[E]":
        if self._paging is not None:
            raise ValueError("Paging has already been applied")
        return self._derive(paging=paging)

    def _where_sql(self) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        for c in self._criteria:
            column = self._mapping.column(c.field)
            if c.op is Operator.EQ:
                clauses.append(f"{column} = ?")
                params.append(self._mapping.encode(c.field, c.value))
            elif not c.value:
                clauses.append("0")
            else:
                values = sorted(c.value, key=str)
                placeholders = ", ".join("?" for _ in values)
                clauses.append(f"{CASEFOLD_SQL_FUNCTION}({column}) IN ({placeholders})")
                params.extend(values)
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    def _order_sql(self) -> str:
        parts: list[str] = []
        seen: set[str] = set()
        for o in self._orders:
            column = self._mapping.column(o.field)
            if column in seen:
                continue
            seen.add(column)
            parts.append(f"{column} {'DESC' if o.descending else 'ASC'}")
        if self._mapping.pk not in seen:
            parts.append(f"{self._mapping.pk} ASC")
        return " ORDER BY " + ", ".join(parts)

    def _select_sql(self) -> tuple[str, list[Any]]:
        where, params = self._where_sql()
        sql = f"SELECT {self._mapping.select_list} FROM {self._mapping.table}{where}"
        sql += self._order_sql()
        if self._paging is not None:
            sql += " LIMIT ? OFFSET ?"
            params = [*params, self._paging.take, self._paging.skip]
        return sql, params

    def to_list(self) -> list[E]:
        sql, params = self._select_sql()
        cur = self._conn.execute(sql, params)
        return [self._mapping.from_row(row) for row in cur.fetchall()]

    def count(self) -> int:
        if self._paging is not None:
            inner, params = self._select_sql()
            sql = f"SELECT COUNT(*) FROM ({inner})"
        else:
            where, params = self._where_sql()
            sql = f"SELECT COUNT(*) FROM {self._mapping.table}{where}"
        row = self._conn.execute(sql, params).fetchone()
        return int(row[0]) if row else 0
