"""
`notion uninstall`: remove a toolchain version from the local catalog.
"""
from dataclasses import dataclass

from . import Command, CommandName
from .install import full_version


@dataclass(frozen=True)
class Uninstall(Command):
    NAME = CommandName.UNINSTALL
    USAGE = """
Uninstall a toolchain from the local machine

Usage:
    notion uninstall [options] <version>
    notion uninstall -h | --help

Options:
    -h, --help     Display this message
"""

    version: str | None = None

    @dataclass
    class Args:
        arg_version: str

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        return cls(full_version(args.arg_version, command=cls.NAME))

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)
        session.uninstall(self.version)
        session.console.print("uninstalled node %s" % self.version)
        return True
