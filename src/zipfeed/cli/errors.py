"""
Error reporting for the command-line program.

Errors the user can act on, such as an unreachable URL or a truncated archive, are reported with a short description
built by `describe_error`. Anything else is a bug and is shown with its traceback.
"""

import sys

from functools import singledispatch, wraps
from textwrap import dedent, indent
from typing import Callable, NoReturn, Optional

from zipfeed.binary.BinaryCursor import BinaryCursorFormatError, BinaryCursorMissingDataError, \
    BinaryCursorReadPastEndError
from zipfeed.cli.console import console
from zipfeed.error_utils import format_exception_head, format_exception_trace
from zipfeed.fetch import FetchError
from zipfeed.rest.pagination import PageFormatError
from zipfeed.rest.projection import ProjectionError


class DescriptiveError(RuntimeError):
    """
    Raised by the command-line layer for problems that the message fully explains. Shown without a traceback.
    """


def fail(message: str) -> NoReturn:
    raise DescriptiveError(dedent(message).strip())


@singledispatch
def describe_error(exception: BaseException) -> Optional[str]:
    """
    Returns a user-facing description of the error, or None if the error is not one the user can do anything about.
    """
    return None


@describe_error.register(DescriptiveError)
def _(exception: DescriptiveError) -> str:
    return str(exception) or "Operation failed"


@describe_error.register(FetchError)
def _(exception: FetchError) -> str:
    cause = exception.__cause__
    if cause is None:
        return str(exception)

    return f"Could not fetch {exception.url}\n" + indent(format_exception_head(cause), '  ')


@describe_error.register(BinaryCursorFormatError)
def _(exception: BinaryCursorFormatError) -> str:
    return f"Archive is corrupt: {exception}"


@describe_error.register(BinaryCursorReadPastEndError)
def _(exception: BinaryCursorReadPastEndError) -> str:
    return (
        f"Archive is truncated: the {exception.meaning or 'data'} at offset {exception.position} needs "
        f"{exception.expected_length} bytes, but only {exception.actual_length} remain"
    )


@describe_error.register(BinaryCursorMissingDataError)
def _(exception: BinaryCursorMissingDataError) -> str:
    return f"Archive is truncated: it ends at offset {exception.position}, where a {exception.meaning or 'value'} " \
        f"was expected"


@describe_error.register(PageFormatError)
@describe_error.register(ProjectionError)
def _(exception: ValueError) -> str:
    return f"The API returned unusable data: {exception}"


@describe_error.register(OSError)
def _(exception: OSError) -> str:
    if exception.filename is not None and exception.strerror is not None:
        return f"{exception.strerror}: {exception.filename}"

    return str(exception)


def print_exception(exception: BaseException):
    description = describe_error(exception)
    if description is not None:
        console.print_error(description)
        return

    while exception is not None:
        console.print_error(format_exception_head(exception))
        console.print_error(indent(format_exception_trace(exception), '  '))

        exception = exception.__cause__
        if exception is not None:
            console.print_error("Caused by:")


def pretty_unhandled(main_method: Callable) -> Callable:
    """
    Decorator for the program's entry point. Errors that escape it are printed with `print_exception` and the program
    exits with status -1. An interrupt by the user is reported with a single line.
    """

    @wraps(main_method)
    def wrapper(*args, **kwargs):
        try:
            return main_method(*args, **kwargs)
        except KeyboardInterrupt:
            console.print_warning("Stopped by user")
            sys.exit(1)
        except Exception as e:
            print_exception(e)
            sys.exit(-1)

    return wrapper
