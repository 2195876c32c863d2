"""
The ``zipfeed`` program.

Usage::

    zipfeed unzip URL [--extract DIR]
    zipfeed query PATH [--param KEY=VALUE ...] [--column NAME ...]

Common options (``--config``, ``--timeout``, ``-v``/``-q``, ``--pipe``) go before the command name.
"""

import json
import sys

from argparse import ArgumentParser, Namespace
from base64 import b64encode
from logging import getLogger
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Sequence

import jsonschema

from zipfeed.assemble import ArchiveRow, unzip_url
from zipfeed.cli.console import console
from zipfeed.cli.errors import fail, pretty_unhandled
from zipfeed.config import ClientConfig, load_config
from zipfeed.fetch import ByteSource
from zipfeed.json_schema.codec import describe_validation_error
from zipfeed.log_setup import init_console_friendly_logging, verbosity_to_level
from zipfeed.rest import query_table


logger = getLogger(__name__)


def build_argument_parser() -> ArgumentParser:
    parser = ArgumentParser(prog='zipfeed', description="Fetch ZIP archives and paginated JSON feeds over HTTP")

    parser.add_argument('--config', type=Path, help="JSON configuration file")
    parser.add_argument('--timeout', type=float, help="HTTP timeout in seconds")
    parser.add_argument('-v', '--verbose', action='store_true', help="Show debug messages")
    parser.add_argument('-q', '--quiet', action='store_true', help="Only show warnings and errors")
    parser.add_argument('--pipe', action='store_true', help="Do not print status messages on stdout")

    commands = parser.add_subparsers(dest='command', required=True)

    unzip_parser = commands.add_parser('unzip', help="Fetch an archive and list or extract its entries")
    unzip_parser.add_argument('url', help="Location of the archive")
    unzip_parser.add_argument('--extract', type=Path, metavar='DIR', help="Write the entries under this directory")

    query_parser = commands.add_parser('query', help="Run a paginated query and print the records as JSON lines")
    query_parser.add_argument('path', help="Resource path, relative to the base URL")
    query_parser.add_argument(
        '--param', action='append', default=[], metavar='KEY=VALUE', help="Query parameter (may be repeated)"
    )
    query_parser.add_argument('--column', action='append', metavar='NAME', help="Output column (may be repeated)")
    query_parser.add_argument('--base-url', help="Base URL of the API")
    query_parser.add_argument('--page-size', type=int, help="Number of records requested per page")
    query_parser.add_argument('--max-pages', type=int, help="Stop after this many pages")

    return parser


@pretty_unhandled
def main(argv: Optional[Sequence[str]] = None):
    args = build_argument_parser().parse_args(argv)

    init_console_friendly_logging(verbosity_to_level(args.verbose, args.quiet))
    console.pipe_mode(args.pipe)

    config = _load_client_config(args)

    with ByteSource.from_config(config) as source:
        if args.command == 'unzip':
            _run_unzip(args, source)
        else:
            _run_query(args, config, source)


def _load_client_config(args: Namespace) -> ClientConfig:
    config = ClientConfig()

    if args.config is not None:
        try:
            config = load_config(args.config)
        except jsonschema.exceptions.ValidationError as e:
            fail(f"Invalid configuration file {args.config}: {describe_validation_error(e)}")
        except ValueError as e:
            fail(f"Configuration file {args.config} is not valid JSON: {e}")

    return config.with_overrides(
        timeout=args.timeout,
        base_url=getattr(args, 'base_url', None),
        page_size=getattr(args, 'page_size', None),
        max_pages=getattr(args, 'max_pages', None),
    )


def _run_unzip(args: Namespace, source: ByteSource):
    console.print_progress(f"Fetching {args.url}...")

    rows = unzip_url(args.url, source=source)

    for row in rows:
        if row.content is not None:
            console.print_info(f"{row.file_name}: {len(row.content)} bytes")
        elif row.failure is not None:
            console.print_warning(f"{row.file_name}: no content ({row.failure.reason.value}: {row.failure.detail})")
        else:
            console.print_warning(f"{row.file_name}: no content")

    if args.extract is not None:
        written = extract_rows(rows, args.extract)
        console.print_success(f"Extracted {written} of {len(rows)} entries to {args.extract}")
    else:
        console.print_success(f"{len(rows)} entries")


def extract_rows(rows: List[ArchiveRow], target_dir: Path) -> int:
    """
    Writes the entries that have content under `target_dir`. Entries whose names are absolute or climb out of the
    target directory are skipped with a warning, as are entries without content.

    Returns:
        The number of files written.
    """
    written = 0

    for row in rows:
        relative = _safe_relative_path(row.file_name)

        if relative is None:
            console.print_warning(f"Skipping entry with unsafe name: {row.file_name!r}")
            continue
        if row.content is None:
            continue

        path = target_dir.joinpath(*relative.parts)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(row.content)

        logger.debug(f"Wrote {path}")
        written += 1

    return written


def _safe_relative_path(name: str) -> Optional[PurePosixPath]:
    path = PurePosixPath(name.replace('\\', '/'))

    if path.is_absolute() or ('..' in path.parts) or (len(path.parts) == 0):
        return None
    if ':' in path.parts[0]:
        return None

    return path


def _run_query(args: Namespace, config: ClientConfig, source: ByteSource):
    if config.base_url is None:
        fail("No base URL given; use --base-url or set base_url in the configuration file")

    console.pipe_mode()

    table = query_table(source, config, args.path, params=parse_params(args.param), columns=args.column)

    for record in table.as_dicts():
        print(json.dumps(record, default=_json_fallback), file=sys.stdout)

    console.print_success(f"{len(table)} records")


def parse_params(raw_params: Sequence[str]) -> Dict[str, List[str]]:
    params = dict()

    for raw_param in raw_params:
        key, sep, value = raw_param.partition('=')
        if sep == '' or key == '':
            fail(f"Invalid query parameter {raw_param!r}, expected KEY=VALUE")

        params.setdefault(key, []).append(value)

    return params


def _json_fallback(value):
    if isinstance(value, bytes):
        return b64encode(value).decode('ascii')

    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
