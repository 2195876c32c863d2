"""
Utilities for formatting exceptions for display.
"""

import traceback

from textwrap import dedent


def format_exception_head(exception: BaseException) -> str:
    """
    Formats the head of an exception (i.e. the class and message, without the traceback) as it would appear when printed
    by Python's exception handler. There is no newline at the end.
    """
    return ''.join(traceback.format_exception_only(exception.__class__, exception)).rstrip()


def format_exception_trace(exception: BaseException) -> str:
    """
    Formats the traceback part of an exception as it would appear when printed by Python's exception handler, without
    the ``'Traceback:'`` header and with a base indent of 0.
    """
    return dedent(''.join(traceback.format_list(traceback.extract_tb(exception.__traceback__))).rstrip())

