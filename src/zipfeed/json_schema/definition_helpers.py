"""
Builders for the JSON schemas of the documents this package reads: configuration files and REST API pages.

Import this using::

    import zipfeed.json_schema.definition_helpers as SH
"""

from typing import Dict, Optional

from zipfeed.json_schema import JSONSchema


def _typed(json_type: str, **constraints) -> JSONSchema:
    return dict(type=json_type, **{k: v for k, v in constraints.items() if v is not None})


def uint() -> JSONSchema:
    return _typed('integer', minimum=0)


def nat() -> JSONSchema:
    return _typed('integer', minimum=1)


def positive_number() -> JSONSchema:
    return _typed('number', exclusiveMinimum=0)


def string(min_len: Optional[int] = None) -> JSONSchema:
    return _typed('string', minLength=min_len)


def non_empty_str() -> JSONSchema:
    return string(min_len=1)


def http_url() -> JSONSchema:
    return _typed('string', pattern='^https?://')


def array(item_type: Optional[JSONSchema] = None) -> JSONSchema:
    """
    An array schema. Without `item_type`, the items may be any JSON value.
    """
    return _typed('array', items=item_type)


def obj(
    required: Optional[Dict[str, JSONSchema]] = None,
    optional: Optional[Dict[str, JSONSchema]] = None,
    open: bool = False
) -> JSONSchema:
    """
    An object schema with some `required` and some `optional` properties. Unless `open` is set, other properties are
    rejected, so that misspelled configuration keys are reported instead of ignored.
    """
    required = required or {}

    schema = _typed('object', properties={**required, **(optional or {})})
    if len(required) > 0:
        schema['required'] = list(required)
    if not open:
        schema['additionalProperties'] = False

    return schema


def str_map() -> JSONSchema:
    """
    An object whose values are all strings, e.g. a set of HTTP headers.
    """
    return _typed('object', additionalProperties=string())


def nullable(schema: JSONSchema) -> JSONSchema:
    return dict(anyOf=[dict(type='null'), schema])
