"""
`notion current`: show the active toolchain.

Without flags both the project-local and the global toolchain are shown; the
command soft-fails (exit 1) when none of the requested toolchains is set.
"""
from dataclasses import dataclass

from . import Command, CommandName


@dataclass(frozen=True)
class Current(Command):
    NAME = CommandName.CURRENT
    USAGE = """
Display the currently activated toolchain

Usage:
    notion current [options]

Options:
    -h, --help     Display this message
    -l, --local    Display local toolchain
    -g, --global   Display global toolchain
"""

    local: bool = True
    globally: bool = True

    @dataclass
    class Args:
        flag_local: bool
        flag_global: bool

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        if not (args.flag_local or args.flag_global):
            return cls()
        return cls(args.flag_local, args.flag_global)

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)

        local = session.project_version() if self.local else None
        default = session.default if self.globally else None

        if local:
            session.console.print("local: v%s (active)" % local)
        if default:
            session.console.print("global: v%s%s" % (default, "" if local else " (active)"))
        return bool(local or default)
