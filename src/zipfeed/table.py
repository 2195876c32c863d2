"""
Minimal tabular sink that receives the rows produced by archive assembly and REST projection.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Tuple


class TableSink(ABC):
    """
    Anything that accepts rows, one at a time, in order.
    """

    @abstractmethod
    def append_row(self, row: Sequence[Any]):
        raise NotImplementedError

    def extend(self, rows: Iterable[Sequence[Any]]) -> 'TableSink':
        for row in rows:
            self.append_row(row)

        return self


class Table(TableSink):
    columns: Tuple[str, ...]
    rows: List[tuple]

    def __init__(self, columns: Iterable[str], rows: Iterable[Sequence[Any]] = ()):
        self.columns = tuple(columns)
        self.rows = []

        if len(set(self.columns)) != len(self.columns):
            raise ValueError(f"Duplicate column names in {self.columns!r}")

        self.extend(rows)

    def append_row(self, row: Sequence[Any]):
        row = tuple(row)

        if len(row) != len(self.columns):
            raise ValueError(f"Row has {len(row)} values, but the table has {len(self.columns)} columns")

        self.rows.append(row)

    def column(self, name: str) -> List[Any]:
        index = self.columns.index(name)

        return [row[index] for row in self.rows]

    def as_dicts(self) -> List[Dict[str, Any]]:
        return [dict(zip(self.columns, row)) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"Table(columns={self.columns!r}, rows=<{len(self.rows)} rows>)"
