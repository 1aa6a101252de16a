"""
`notion version`: print the tool version.
"""
from dataclasses import dataclass

from . import Command, CommandName


@dataclass(frozen=True)
class Version(Command):
    NAME = CommandName.VERSION
    USAGE = """
Display version information

Usage:
    notion version [options]

Options:
    -h, --help     Display this message
"""

    @dataclass
    class Args:
        pass

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        return cls()

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)
        from .. import __version__
        session.console.print(__version__)
        return True
