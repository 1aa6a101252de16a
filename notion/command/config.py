"""
`notion config`: get, set, delete and list user configuration values.
"""
import enum
import re
from dataclasses import dataclass

from ..faults import CliValidationError
from . import Command, CommandName

KEY_PATTERN = re.compile(r"[A-Za-z_][\w-]*(\.[A-Za-z_][\w-]*)*")


class ConfigAction(enum.Enum):
    GET = "get"
    SET = "set"
    DELETE = "delete"
    LIST = "list"


@dataclass(frozen=True)
class Config(Command):
    NAME = CommandName.CONFIG
    USAGE = """
Get or set configuration values

Usage:
    notion config get <key>
    notion config set <key> <value>
    notion config delete <key>
    notion config list
    notion config -h | --help

Options:
    -h, --help     Display this message
"""

    action: ConfigAction = ConfigAction.LIST
    key: str | None = None
    value: str | None = None

    @dataclass
    class Args:
        cmd_get: bool
        cmd_set: bool
        cmd_delete: bool
        cmd_list: bool
        arg_key: str | None
        arg_value: str | None

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        if args.cmd_list:
            return cls(ConfigAction.LIST)
        if not KEY_PATTERN.fullmatch(args.arg_key):
            raise CliValidationError(
                "%r is not a configuration key" % args.arg_key,
                command=str(cls.NAME),
                input=args.arg_key,
                hint="keys are dotted names (for example: node.mirror)",
            )
        if args.cmd_get:
            return cls(ConfigAction.GET, args.arg_key)
        if args.cmd_set:
            return cls(ConfigAction.SET, args.arg_key, args.arg_value)
        return cls(ConfigAction.DELETE, args.arg_key)

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)

        match self.action:
            case ConfigAction.GET:
                session.console.print(session.config_get(self.key), markup=False)
            case ConfigAction.SET:
                session.config_set(self.key, self.value)
            case ConfigAction.DELETE:
                session.config_delete(self.key)
            case ConfigAction.LIST:
                for key, value in sorted(session.config.items()):
                    session.console.print("%s = %s" % (key, value), markup=False)
        return True
