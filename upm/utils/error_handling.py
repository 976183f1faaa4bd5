"""Top-level error handling for the upm console script."""
import sys
from contextlib import contextmanager
from typing import Generator

from upm.utils.exceptions import UpmError
from upm.utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Turn errors escaping the click group into exit codes.

    UpmError prints its message on stderr and exits 1; Ctrl-C exits 130.
    Commands report their own failures first, so this only sees errors
    raised outside them (for example while loading a broken config.yaml).

    Usage:
        def main():
            with cli_error_handler():
                cli(prog_name='upm')
    """
    try:
        yield
    except UpmError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)
