"""
`notion use`: select the toolchain of the current project, or the global default.
"""
from dataclasses import dataclass

from ..faults import CliValidationError
from ..session import normalize_version
from . import Command, CommandName


@dataclass(frozen=True)
class Use(Command):
    NAME = CommandName.USE
    USAGE = """
Select a toolchain for the current project

Usage:
    notion use [options] <version>
    notion use -h | --help

Options:
    -h, --help     Display this message
    -g, --global   Select a toolchain globally
"""

    version: str | None = None
    globally: bool = False

    @dataclass
    class Args:
        arg_version: str
        flag_global: bool

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        if args.arg_version == "latest":
            raise CliValidationError(
                "'latest' cannot be resolved without a registry",
                command=str(cls.NAME),
                input=args.arg_version,
                hint="name an installed version (for example: notion use 10)",
            )
        version = normalize_version(args.arg_version)
        if version is None:
            raise CliValidationError(
                "%r is not a version" % args.arg_version,
                command=str(cls.NAME),
                input=args.arg_version,
                hint="use MAJOR[.MINOR[.PATCH]] (for example: notion use 10)",
            )
        return cls(version, args.flag_global)

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)
        version = session.resolve(self.version)
        if self.globally:
            session.set_default(version)
            session.console.print("default toolchain set to node %s" % version)
        else:
            path = session.pin(version)
            session.console.print("pinned node %s in %s" % (version, path))
        return True
