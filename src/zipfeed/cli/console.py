"""
Status messages for the user of the command-line program.

Info, progress and success messages go to stdout. Warnings and errors go to stderr. When the program writes its actual
output to stdout (e.g. JSON lines), `pipe_mode()` keeps the status messages out of the data.

Text that the output stream cannot encode is shown as backslash escapes. Entry names read from an archive may carry
undecodable bytes (see `zipfeed.zip.entries`), and listing them must not crash the program::

    from zipfeed.cli.console import console

    console.print_progress("Fetching archive...")
"""

import sys

from typing import NamedTuple, Optional, TextIO

import colorama

from termcolor import cprint


class _Style(NamedTuple):
    to_stderr: bool
    color: Optional[str] = None


_STYLES = dict(
    info=_Style(to_stderr=False),
    progress=_Style(to_stderr=False, color='cyan'),
    success=_Style(to_stderr=False, color='green'),
    warning=_Style(to_stderr=True, color='yellow'),
    error=_Style(to_stderr=True, color='red'),
)


class Console:
    """
    Use the `console` singleton instead of creating instances of this.
    """

    _stdout_enabled: bool

    def __init__(self):
        self._stdout_enabled = True

    def print_info(self, message: str) -> 'Console':
        return self._print('info', message)

    def print_progress(self, message: str) -> 'Console':
        return self._print('progress', message)

    def print_success(self, message: str) -> 'Console':
        return self._print('success', message)

    def print_warning(self, message: str) -> 'Console':
        return self._print('warning', message)

    def print_error(self, message: str) -> 'Console':
        return self._print('error', message)

    def pipe_mode(self, enabled: bool = True) -> 'Console':
        """
        While pipe mode is on, messages that would go to stdout are dropped. Warnings and errors are still shown.
        """
        self._stdout_enabled = not enabled
        return self

    def _print(self, kind: str, message: str) -> 'Console':
        style = _STYLES[kind]

        if not (style.to_stderr or self._stdout_enabled):
            return self

        channel = sys.stderr if style.to_stderr else sys.stdout
        text = _printable(message, channel)

        if style.color is None:
            print(text, file=channel)
        else:
            cprint(text, style.color, attrs=['bold'], file=channel)

        return self


def _printable(text: str, channel: TextIO) -> str:
    encoding = getattr(channel, 'encoding', None) or 'utf-8'

    return text.encode(encoding, 'backslashreplace').decode(encoding)


colorama.just_fix_windows_console()

console = Console()
