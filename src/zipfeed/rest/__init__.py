"""
Glue for paginated JSON REST APIs: building query URLs, walking through pages of records and projecting the records to
table rows.
"""

from typing import Any, Mapping, Optional, Sequence

from zipfeed.config import ClientConfig
from zipfeed.fetch import ByteSource
from zipfeed.table import Table
from zipfeed.rest.query import build_query_url
from zipfeed.rest.pagination import iter_records
from zipfeed.rest.projection import infer_columns, project_records


def query_table(
    source: ByteSource, config: ClientConfig, path: str = '', params: Optional[Mapping[str, Any]] = None,
    columns: Optional[Sequence[str]] = None,
) -> Table:
    """
    Runs a paginated query against the API described by `config` and collects all records into a table.

    If `columns` is not given, the columns are the top-level fields of the records, in the order they are first seen.
    """
    if config.base_url is None:
        raise ValueError("No base URL configured for the REST API")

    records = list(iter_records(
        source.fetch_json,
        build_query_url(config.base_url, path),
        params=params,
        page_size=config.page_size,
        offset_param=config.offset_param,
        limit_param=config.limit_param,
        records_field=config.records_field,
        total_field=config.total_field,
        max_pages=config.max_pages,
    ))

    return project_records(records, columns if columns is not None else infer_columns(records))
