"""
Offset/limit pagination over a JSON API.

Every page is expected to be a JSON object holding the page's records in an array field, and optionally the total
number of records available in an integer field::

    {"records": [{...}, {...}], "total": 1234}
"""

from dataclasses import dataclass
from functools import lru_cache
from logging import getLogger
from typing import Any, Callable, Iterator, List, Mapping, Optional

import jsonschema

import zipfeed.json_schema.definition_helpers as SH

from zipfeed.json_schema.codec import SchemaParser, describe_validation_error
from zipfeed.rest.query import build_query_url


logger = getLogger(__name__)


class PageFormatError(ValueError):
    pass


@dataclass(frozen=True)
class Page:
    number: int
    offset: int
    records: List[Any]
    total: Optional[int] = None


@dataclass(frozen=True)
class _RawPage:
    records: List[Any]
    total: Optional[int]


@lru_cache(maxsize=None)
def _page_parser(records_field: str, total_field: Optional[str]) -> SchemaParser[_RawPage]:
    # Records may be any JSON value here; turning them into rows is the projection's job
    schema = SH.obj(
        {records_field: SH.array()},
        optional={} if total_field is None else {total_field: SH.nullable(SH.uint())},
        open=True,
    )

    return SchemaParser(schema, lambda json_data: _RawPage(
        records=json_data[records_field],
        total=json_data.get(total_field) if total_field is not None else None,
    ))


def parse_page_document(
    json_data: Any, records_field: str = 'records', total_field: Optional[str] = 'total'
) -> _RawPage:
    try:
        return _page_parser(records_field, total_field).parse(json_data)
    except jsonschema.exceptions.ValidationError as e:
        raise PageFormatError(f"Unexpected page format {describe_validation_error(e)}") from e


def iter_pages(
    fetch_json: Callable[[str], Any], url: str, params: Optional[Mapping[str, Any]] = None, page_size: int = 100,
    offset_param: str = 'offset', limit_param: str = 'limit', records_field: str = 'records',
    total_field: Optional[str] = 'total', max_pages: Optional[int] = None,
) -> Iterator[Page]:
    """
    Walks through the pages of a query, requesting `page_size` records at a time.

    The walk stops when a page has fewer than `page_size` records, when the offset reaches the total reported by the
    API (if any), or after `max_pages` pages.

    Args:
        fetch_json: Function that fetches a URL and returns the decoded JSON document
        url: The query URL, without the paging parameters
        params: Further query parameters, added to every page request

    Raises:
        PageFormatError: If a page does not have the expected structure.
    """

    if page_size < 1:
        raise ValueError(f"Page size must be strictly positive (is: {page_size})")

    offset = 0
    number = 0

    while (max_pages is None) or (number < max_pages):
        page_url = build_query_url(url, params={**(params or {}), offset_param: offset, limit_param: page_size})
        raw_page = parse_page_document(fetch_json(page_url), records_field, total_field)

        page = Page(number=number, offset=offset, records=raw_page.records, total=raw_page.total)
        logger.debug(f"Page {number} at offset {offset}: {len(page.records)} records")

        yield page

        number += 1
        offset += len(page.records)

        if len(page.records) < page_size:
            break
        if (page.total is not None) and (offset >= page.total):
            break


def iter_records(fetch_json: Callable[[str], Any], url: str, **kwargs) -> Iterator[Any]:
    for page in iter_pages(fetch_json, url, **kwargs):
        yield from page.records
