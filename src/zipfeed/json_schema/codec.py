"""
Schema-checked conversion of JSON documents into Python objects.

A `SchemaParser` pairs a JSON schema with a function that builds an object from a document. The document is validated
first, so the builder can index into it without checking the structure again.
"""

from typing import Any, Callable, Generic, TypeVar

from jsonschema.exceptions import ValidationError, best_match
from jsonschema.validators import validator_for

from zipfeed.json_schema import JSONSchema


T = TypeVar('T')


class SchemaParser(Generic[T]):
    schema: JSONSchema

    def __init__(self, schema: JSONSchema, build: Callable[[Any], T]):
        validator_class = validator_for(schema)
        validator_class.check_schema(schema)

        self.schema = schema
        self._validator = validator_class(schema)
        self._build = build

    def parse(self, json_data: Any) -> T:
        """
        Raises:
            jsonschema.exceptions.ValidationError: The most relevant of the problems found in the document.
        """
        error = best_match(self._validator.iter_errors(json_data))
        if error is not None:
            raise error

        return self._build(json_data)


def describe_validation_error(error: ValidationError) -> str:
    """
    Renders a validation error along with the location of the offending value, e.g. ``"at records/3: 5 is not of type
    'object'"``.
    """
    location = '/'.join(str(part) for part in error.absolute_path)

    return error.message if location == '' else f"at {location}: {error.message}"
