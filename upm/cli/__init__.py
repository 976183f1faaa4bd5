"""CLI modules for command-line interface."""

from ..utils.error_handling import cli_error_handler
from .commands import cli
from .formatters import Formatter


def main() -> None:
    """Console-script entry point."""
    with cli_error_handler():
        cli(prog_name='upm')


__all__ = ['cli', 'main', 'Formatter']
