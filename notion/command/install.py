"""
`notion install`: add a toolchain version to the local catalog.
"""
from dataclasses import dataclass

from ..faults import CliValidationError
from ..session import normalize_version
from . import Command, CommandName


def full_version(text, /, *, command):
    """
    Validate a MAJOR.MINOR.PATCH version argument, returning its canonical form.
    """
    version = normalize_version(text)
    if version is None or version.count(".") != 2:
        raise CliValidationError(
            "%r is not a full version" % text,
            command=str(command),
            input=text,
            hint="spell it as MAJOR.MINOR.PATCH (for example: notion %s 10.15.3)" % command,
        )
    return version


@dataclass(frozen=True)
class Install(Command):
    NAME = CommandName.INSTALL
    USAGE = """
Install a toolchain to the local machine

Usage:
    notion install [options] <version>
    notion install -h | --help

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
        if session.install(self.version):
            session.console.print("installed node %s" % self.version)
        else:
            session.console.print("node %s is already installed" % self.version)
        return True
