import logging


def init_console_friendly_logging(level: int = logging.INFO):
    """
    Initializes logging for running in a console:

    - Messages go to stderr, so that they never mix with data written to stdout
    - A timestamp and the level (INFO, ERROR etc) are attached to each message
    """
    logging.basicConfig(
        level=level,
        style='{',
        format='[{asctime}] {levelname}: {message}',
        datefmt='%Y-%m-%d %H:%M:%S'  # We omit the milliseconds by default
    )


def verbosity_to_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING

    return logging.INFO
