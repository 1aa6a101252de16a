"""
Notion command layer: name, parse and run subcommands.

What this package provides
- CommandName: the closed set of subcommands with exact lowercase tokens both ways.
- Command: the contract every subcommand implements
  • Args: dataclass the usage grammar deserializes argv into.
  • USAGE: usage text; the single source of truth for the grammar and the help output.
  • help(): the distinguished “print my help” instance, built without any Args.
  • parse(notion, args): contract-level validation into a full command.
  • run(session): side effects; True → exit 0, False → exit 1, faults propagate.
  • go(notion, session): shared driver (grammar parse → parse → run).
- route(name): exhaustive CommandName → Command type mapping.

Help requests
- The grammar reports -h/--help as a HelpRequest failure; go() normalizes it into
  help().run(session) so help output flows through the same session plumbing as
  any other command. Every other grammar failure becomes a CliParseError.
"""
import enum
import logging
import textwrap
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import assert_never

from .. import usage
from ..faults import CliParseError, UsageError
from ..utils import Unset

logger = logging.getLogger(__name__)


class UnrecognizedCommandName(ValueError):
    """
    Raised by CommandName.parse() for any token outside the fixed set.
    """


class CommandName(enum.Enum):
    """
    The set of notion command names.
    """
    INSTALL = "install"
    UNINSTALL = "uninstall"
    USE = "use"
    CONFIG = "config"
    CURRENT = "current"
    DEACTIVATE = "deactivate"
    DEFAULT = "default"
    SHIM = "shim"
    HELP = "help"
    VERSION = "version"

    def display(self):
        return self.value

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, token, /):
        """
        Exact-match a token to its command name (no prefixes, no case folding).
        """
        if not isinstance(token, str):
            raise TypeError("CommandName.parse() argument must be a string")
        try:
            return cls(token)
        except ValueError:
            raise UnrecognizedCommandName(token) from None


@dataclass(frozen=True)
class Command(ABC):
    """
    A notion command.

    Subclasses are frozen dataclasses whose fields hold the validated arguments.
    The help variant of every command is the instance with helping=True.
    """
    NAME = Unset
    USAGE = ""

    helping: bool = field(default=False, kw_only=True)

    @dataclass
    class Args:
        pass

    @classmethod
    def describe(cls):
        """
        The usage text with leading and trailing whitespace trimmed.
        """
        return textwrap.dedent(cls.USAGE).strip()

    @classmethod
    @abstractmethod
    def help(cls):
        """
        Produce the variant of this command representing `notion <command> --help`.
        """

    @classmethod
    @abstractmethod
    def parse(cls, notion, args, /):
        """
        Promote the deserialized Args into the full command, or raise CliValidationError.
        """

    @abstractmethod
    def run(self, session, /):
        """
        Execute the command. Returns True if the process should exit 0, False for 1;
        faults propagate and the process exits with fault.exit_code.
        """

    def print_help(self, session, /):
        session.console.print(self.describe(), markup=False)
        return True

    @classmethod
    def go(cls, notion, session, /):
        """
        Run this command with the arguments of a notion invocation.
        """
        argv = notion.full_argv()
        logger.debug("dispatching %s with %r", cls.NAME, argv)
        try:
            args = usage.compile(cls.USAGE).deserialize(argv, cls.Args)
        except UsageError as error:
            # the grammar models -h and --help as errors; those are a normal help run
            if not error.is_help():
                raise CliParseError.from_usage(error, command=str(cls.NAME)) from error
            args = Unset

        if args is Unset:
            logger.debug("%s: help requested", cls.NAME)
            return cls.help().run(session)

        command = cls.parse(notion, args)
        logger.debug("%s: running %r", cls.NAME, command)
        return command.run(session)


from .config import Config
from .current import Current
from .deactivate import Deactivate
from .default import Default
from .help import Help
from .install import Install
from .shim import Shim
from .uninstall import Uninstall
from .use import Use
from .version import Version


def route(name, /):
    """
    Return the Command type implementing a command name.
    """
    match name:
        case CommandName.INSTALL:
            return Install
        case CommandName.UNINSTALL:
            return Uninstall
        case CommandName.USE:
            return Use
        case CommandName.CONFIG:
            return Config
        case CommandName.CURRENT:
            return Current
        case CommandName.DEACTIVATE:
            return Deactivate
        case CommandName.DEFAULT:
            return Default
        case CommandName.SHIM:
            return Shim
        case CommandName.HELP:
            return Help
        case CommandName.VERSION:
            return Version
        case _:
            assert_never(name)


# every name must be routed to a command that answers to it
for name in CommandName:
    if route(name).NAME is not name:
        raise TypeError(f"command {name} is routed to {route(name).__name__}")
del name


__all__ = (
    "CommandName",
    "UnrecognizedCommandName",
    "Command",
    "route",
    "Config",
    "Current",
    "Deactivate",
    "Default",
    "Help",
    "Install",
    "Shim",
    "Uninstall",
    "Use",
    "Version",
)
