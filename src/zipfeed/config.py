"""
Client configuration: where the REST API lives, how to page through it and how to talk HTTP to it.

Configuration is read from JSON (usually a file) and validated against a schema before use::

    {
        "base_url": "https://api.example.com/v2",
        "timeout": 10,
        "headers": {"Authorization": "Bearer ..."},
        "page_size": 500,
        "records_field": "items"
    }

All keys are optional.
"""

import json

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional, Union

import zipfeed.json_schema.definition_helpers as SH

from zipfeed.fetch import DEFAULT_TIMEOUT
from zipfeed.json_schema.codec import SchemaParser


@dataclass(frozen=True)
class ClientConfig:
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    headers: Dict[str, str] = field(default_factory=dict)
    page_size: int = 100
    max_pages: Optional[int] = None
    offset_param: str = 'offset'
    limit_param: str = 'limit'
    records_field: str = 'records'
    total_field: Optional[str] = 'total'

    def with_overrides(self, **kwargs) -> 'ClientConfig':
        """
        Returns a copy of the config with some fields replaced. Arguments that are None are ignored, so that unset
        command-line options can be passed through as-is.
        """
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


CLIENT_CONFIG_SCHEMA = SH.obj(optional=dict(
    base_url=SH.http_url(),
    timeout=SH.positive_number(),
    headers=SH.str_map(),
    page_size=SH.nat(),
    max_pages=SH.nullable(SH.nat()),
    offset_param=SH.non_empty_str(),
    limit_param=SH.non_empty_str(),
    records_field=SH.non_empty_str(),
    total_field=SH.nullable(SH.non_empty_str()),
))


_CLIENT_CONFIG_PARSER = SchemaParser(CLIENT_CONFIG_SCHEMA, lambda json_data: ClientConfig(**json_data))


def parse_config(json_data: dict) -> ClientConfig:
    """
    Raises:
        jsonschema.exceptions.ValidationError: If the data does not describe a valid configuration.
    """
    return _CLIENT_CONFIG_PARSER.parse(json_data)


def load_config(path: Union[str, Path]) -> ClientConfig:
    with open(path, 'r', encoding='utf-8') as f:
        return parse_config(json.load(f))
