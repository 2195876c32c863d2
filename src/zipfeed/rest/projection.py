"""
Projection of JSON records (objects) to table rows.
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from zipfeed.table import Table, TableSink


class ProjectionError(ValueError):
    pass


def project_records(records: Iterable[Any], columns: Sequence[str], sink: Optional[TableSink] = None) -> TableSink:
    """
    Projects each record to a row with one value per column.

    A column is either a field name or a dot-separated path into nested objects (e.g. ``"owner.name"``). Fields that are
    missing, or paths that run into a non-object value, yield None.

    Raises:
        ProjectionError: If a record is not a JSON object.
    """

    if sink is None:
        sink = Table(columns)

    paths = [column.split('.') for column in columns]

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ProjectionError(f"Record #{index} is a {type(record).__name__}, not an object")

        sink.append_row(tuple(_lookup_path(record, path) for path in paths))

    return sink


def _lookup_path(record: Mapping[str, Any], path: List[str]) -> Any:
    value = record

    for key in path:
        if not isinstance(value, Mapping):
            return None

        value = value.get(key)

    return value


def infer_columns(records: Iterable[Any]) -> List[str]:
    """
    Collects the top-level fields of all the records, in the order they are first seen.
    """
    columns = dict()

    for record in records:
        if isinstance(record, Mapping):
            for key in record.keys():
                columns.setdefault(key, None)

    return list(columns.keys())
