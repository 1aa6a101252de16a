"""
Process entry point: argv in, exit code out.

Exit codes
- 0: the command succeeded (including help output).
- 1: the command ran but reported an unsuccessful outcome.
- any other value: a fault was raised; its exit_code decides (see faults.ExitCode).
"""
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

from .command import route
from .faults import ExitCode, NotionFault, report
from .invocation import Notion
from .session import Session

logger = logging.getLogger(__name__)


def configure_logging(verbose=False, environ=os.environ):
    """
    Send notion's log records to stderr through rich.

    --verbose selects DEBUG; otherwise NOTION_LOG names the level (default WARNING).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelNamesMapping().get(environ.get("NOTION_LOG", "WARNING").upper(), logging.WARNING)
    root = logging.getLogger("notion")
    root.handlers[:] = [RichHandler(console=Console(stderr=True), show_path=False)]
    root.setLevel(level)
    root.propagate = False


def run(argv, /, session=None):
    """
    Run one notion invocation and return its exit code.
    """
    try:
        notion = Notion.from_argv(argv)
        configure_logging(notion.verbose)
        session = session if session is not None else Session.from_environment()
        success = route(notion.command).go(notion, session)
        session.save()
    except NotionFault as fault:
        logger.debug("fault %s raised", fault.code.name, exc_info=fault)
        return report(fault)
    return ExitCode.SUCCESS if success else ExitCode.FAILURE


def main():
    sys.exit(int(run(sys.argv)))


__all__ = (
    "configure_logging",
    "run",
    "main",
)
