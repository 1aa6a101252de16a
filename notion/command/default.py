"""
`notion default`: get or set the default (global) toolchain.
"""
from dataclasses import dataclass

from ..faults import CliValidationError
from ..session import normalize_version
from . import Command, CommandName


@dataclass(frozen=True)
class Default(Command):
    NAME = CommandName.DEFAULT
    USAGE = """
Get or set the default toolchain

Usage:
    notion default [options] [<version>]
    notion default -h | --help

Options:
    -h, --help     Display this message
"""

    version: str | None = None

    @dataclass
    class Args:
        arg_version: str | None

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        if args.arg_version is None:
            return cls()
        version = normalize_version(args.arg_version)
        if version is None:
            raise CliValidationError(
                "%r is not a version" % args.arg_version,
                command=str(cls.NAME),
                input=args.arg_version,
                hint="use MAJOR[.MINOR[.PATCH]] (for example: notion default 10)",
            )
        return cls(version)

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)
        if self.version is None:
            if session.default is None:
                session.console.print("no default toolchain set")
                return False
            session.console.print("v%s" % session.default)
            return True
        version = session.resolve(self.version)
        session.set_default(version)
        session.console.print("default toolchain set to node %s" % version)
        return True
