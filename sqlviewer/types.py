"""
Core data types shared by the viewer components.
"""

import base64
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

# A single SQLite cell: NULL, INTEGER, REAL, TEXT or BLOB.
SQLValue = Union[None, int, float, str, bytes]
Row = Dict[str, SQLValue]


class StatementKind(Enum):
    """How a statement is run against the engine."""
    READ = "READ"
    WRITE = "WRITE"

    @classmethod
    def classify(cls, sql: str) -> "StatementKind":
        """Statements starting with SELECT are reads, everything else is a write."""
        if sql.strip().lower().startswith("select"):
            return cls.READ
        return cls.WRITE


@dataclass
class DatabaseFile:
    """A database file known to the registry."""
    name: str
    path: str
    is_active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": self.path, "current": self.is_active}


@dataclass
class ColumnInfo:
    """Represents one column as reported by PRAGMA table_info."""
    position: int
    name: str
    declared_type: str
    not_null: bool = False
    is_primary_key: bool = False
    default_value: Optional[str] = None

    @classmethod
    def from_pragma(cls, row: tuple) -> "ColumnInfo":
        cid, name, declared_type, notnull, default_value, pk = row
        return cls(
            position=cid,
            name=name,
            declared_type=declared_type or "",
            not_null=bool(notnull),
            is_primary_key=bool(pk),
            default_value=default_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cid": self.position,
            "name": self.name,
            "type": self.declared_type,
            "not_null": self.not_null,
            "is_primary": self.is_primary_key,
            "default": self.default_value,
        }


TableSchema = Dict[str, List[ColumnInfo]]


@dataclass
class QueryResult:
    """Outcome of one statement.

    Reads fill ``rows``; writes fill ``changes`` and ``last_insert_id``.
    """
    kind: StatementKind
    duration_ms: float
    rows: List[Row] = field(default_factory=list)
    changes: int = 0
    last_insert_id: int = 0

    @property
    def is_read(self) -> bool:
        return self.kind is StatementKind.READ

    def to_results(self) -> List[Dict[str, Any]]:
        """Shape used by the query endpoint: rows, or one write summary."""
        if self.is_read:
            return [{key: jsonable(value) for key, value in row.items()} for row in self.rows]
        return [{"changes": self.changes, "lastInsertId": self.last_insert_id}]


@dataclass
class BrowseRequest:
    """A paginated, optionally filtered listing of one table."""
    table: str
    page: int = 0
    page_size: int = 50
    search_term: str = ""


@dataclass
class BrowseQueries:
    """The COUNT and page statements derived from a BrowseRequest."""
    count_sql: str
    select_sql: str


@dataclass
class BrowsePage:
    """One page of a browse listing."""
    table: str
    page: int
    page_size: int
    search_term: str
    total_records: int
    rows: List[Row]
    duration_ms: float

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_records / self.page_size))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": self.table,
            "page": self.page,
            "page_size": self.page_size,
            "search": self.search_term,
            "total_records": self.total_records,
            "total_pages": self.total_pages,
            "rows": [{key: jsonable(value) for key, value in row.items()} for row in self.rows],
            "duration": self.duration_ms,
        }


def jsonable(value: SQLValue) -> Any:
    """Render BLOB cells as base64 text; other SQLite values pass through."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value
