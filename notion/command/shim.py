"""
`notion shim`: list, create and delete shims for third-party executables.
"""
import enum
import os
from dataclasses import dataclass

from ..faults import CliValidationError
from . import Command, CommandName


class ShimAction(enum.Enum):
    LIST = "list"
    CREATE = "create"
    DELETE = "delete"


@dataclass(frozen=True)
class Shim(Command):
    NAME = CommandName.SHIM
    USAGE = """
View and manage shims

Usage:
    notion shim list [options]
    notion shim create <shimname> [options]
    notion shim delete <shimname> [options]
    notion shim -h | --help

Options:
    -h, --help     Display this message
    -v, --verbose  Verbose output
"""

    action: ShimAction = ShimAction.LIST
    name: str | None = None
    verbose: bool = False

    @dataclass
    class Args:
        cmd_list: bool
        cmd_create: bool
        cmd_delete: bool
        arg_shimname: str | None
        flag_verbose: bool

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        if args.cmd_list:
            return cls(ShimAction.LIST, verbose=args.flag_verbose)

        name = args.arg_shimname
        if not name or name in (".", "..") or "/" in name or os.sep in name:
            raise CliValidationError(
                "%r is not a valid shim name" % name,
                command=str(cls.NAME),
                input=name,
                hint="a shim is named after the executable it stands for (for example: tsc)",
            )
        action = ShimAction.CREATE if args.cmd_create else ShimAction.DELETE
        return cls(action, name, args.flag_verbose)

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)

        match self.action:
            case ShimAction.LIST:
                for name in session.shims():
                    if self.verbose:
                        session.console.print("%s -> %s" % (name, session.bin_dir / name))
                    else:
                        session.console.print(name)
                return True
            case ShimAction.CREATE:
                if not session.create_shim(self.name):
                    session.console.print("shim %s already exists" % self.name)
                    return False
                if self.verbose:
                    session.console.print("created shim %s" % (session.bin_dir / self.name))
                return True
            case ShimAction.DELETE:
                if not session.delete_shim(self.name):
                    session.console.print("no shim named %s" % self.name)
                    return False
                if self.verbose:
                    session.console.print("deleted shim %s" % (session.bin_dir / self.name))
                return True
