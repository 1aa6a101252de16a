"""
The top-level notion invocation.

Notion.from_argv() parses the tool-level grammar (global options first, then the
command name and its raw arguments) and resolves the CommandName. The resulting
object is the read-only view each subcommand's grammar is parsed from: full_argv()
hands back the program name, the command and its arguments.
"""
import difflib

from . import usage
from .command import CommandName, UnrecognizedCommandName
from .faults import CliParseError, UnknownCommandError, UsageError

USAGE = """
Notion: the hassle-free Node.js manager

Usage:
    notion [options] [<command> [<args> ...]]
    notion -h | --help
    notion -V | --version

Options:
    -h, --help     Display this message
    -V, --version  Print version info and exit
    -v, --verbose  Use verbose output

Some common notion commands are:
    install        Install a toolchain to the local machine
    uninstall      Uninstall a toolchain from the local machine
    use            Select a toolchain for the current project
    current        Display the currently activated toolchain
    deactivate     Remove Notion from the current shell
    default        Get or set the default toolchain
    shim           View and manage shims
    config         Get or set configuration values
    help           Display this message
    version        Print version info and exit

See 'notion help <command>' for more information on a specific command.
"""


class Notion:
    """
    An immutable snapshot of one process invocation.
    """
    __slots__ = ("_program", "_command", "_args", "_verbose")

    def __init__(self, command, /, args=(), *, program="notion", verbose=False):
        if not isinstance(command, CommandName):
            raise TypeError("Notion() command must be a command name")
        self._program = program
        self._command = command
        self._args = tuple(args)
        self._verbose = bool(verbose)

    @classmethod
    def from_argv(cls, argv, /):
        """
        Parse a full process argv (program name first).

        Raises
        - UnknownCommandError when the command token is not a command name.
        - CliParseError when the global options are malformed.
        """
        argv = list(argv)
        program = argv[0] if argv else "notion"
        try:
            values = usage.compile(USAGE).parse(["notion", *argv[1:]], options_first=True)
        except UsageError as error:
            if error.is_help():
                return cls(CommandName.HELP, program=program)
            raise CliParseError.from_usage(error, command="notion") from error

        verbose = values["--verbose"]
        if values["--version"]:
            return cls(CommandName.VERSION, program=program, verbose=verbose)
        if values["<command>"] is None:
            return cls(CommandName.HELP, program=program, verbose=verbose)

        token = values["<command>"]
        try:
            command = CommandName.parse(token)
        except UnrecognizedCommandName:
            suggestions = difflib.get_close_matches(token, [str(name) for name in CommandName], 3)
            raise UnknownCommandError(
                "unknown command %r" % token,
                input=token,
                suggestions=suggestions,
                hint="did you mean %r?" % suggestions[0] if suggestions else "run 'notion help' to see every command",
            ) from None
        return cls(command, values["<args>"], program=program, verbose=verbose)

    @property
    def program(self):
        return self._program

    @property
    def command(self):
        return self._command

    @property
    def args(self):
        return self._args

    @property
    def verbose(self):
        return self._verbose

    def full_argv(self):
        """
        The argv a subcommand grammar parses: program, command name, arguments.
        """
        return [self._program, str(self._command), *self._args]

    def __repr__(self):
        return "notion(command=%r, args=%r, verbose=%r)" % (str(self._command), self._args, self._verbose)


__all__ = (
    "USAGE",
    "Notion",
)
