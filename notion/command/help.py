"""
`notion help`: general or command-specific help.
"""
import difflib
from dataclasses import dataclass

from ..faults import CliValidationError
from . import Command, CommandName, UnrecognizedCommandName


@dataclass(frozen=True)
class Help(Command):
    NAME = CommandName.HELP
    USAGE = """
Display general or command-specific help information

Usage:
    notion help [options] [<command>]
    notion help -h | --help

Options:
    -h, --help     Display this message
"""

    command: CommandName | None = None

    @dataclass
    class Args:
        arg_command: str | None

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        if args.arg_command is None:
            return cls()
        try:
            return cls(CommandName.parse(args.arg_command))
        except UnrecognizedCommandName:
            suggestions = difflib.get_close_matches(args.arg_command, [str(name) for name in CommandName], 3)
            raise CliValidationError(
                "unknown command %r" % args.arg_command,
                command=str(cls.NAME),
                input=args.arg_command,
                suggestions=suggestions,
                hint="did you mean %r?" % suggestions[0] if suggestions else "run 'notion help' to see every command",
            ) from None

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)
        if self.command is None:
            from ..invocation import USAGE
            session.console.print(USAGE.strip(), markup=False)
        else:
            from . import route
            session.console.print(route(self.command).describe(), markup=False)
        return True
