"""
Notion faults (errors) and rendering.

Scope
- ExitCode: the process exit dispositions the front end can produce.
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- NotionFault: base type that carries message + options, knows its exit code and how
  to render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface a fault with extra context.

Taxonomy
- routing:    UnknownCommandError (no subcommand instantiated).
- grammar:    UsageError and its subclasses, raised by the usage collaborator.
              HelpRequest is a UsageError that reports is_help() and is never shown as a failure.
- dispatch:   CliParseError wraps a non-help UsageError with the command being parsed;
              CliValidationError is raised by a command's own parse() step.
- runtime:    NotInstalledError, NoVersionError, ConfigKeyError, StateFileError, EnvironmentFault.

Integration
- Faults are raised from parsing, validation and execution and caught once by the entry
  point, which prints them via rich (see report()) and exits with fault.exit_code.
- report(colorful=False) renders plain text (no styles), as used for captured output.
"""
import copy
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class ExitCode(IntEnum):
    """
    process exit dispositions.

    success and soft failure come from a command's boolean result; every other value
    is carried by a fault and selected by its kind.
    """
    SUCCESS             = 0
    FAILURE             = 1
    UNKNOWN_ERROR       = 2
    INVALID_ARGUMENTS   = 3
    NO_VERSION_MATCH    = 4
    ENVIRONMENT_ERROR   = 6
    FILE_SYSTEM_ERROR   = 7
    CONFIGURATION_ERROR = 8


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - general (110xx)
      • UNEXPECTED
    - routing (111xx)
      • UNKNOWN_COMMAND
    - grammar (112xx)
      • MALFORMED_TOKEN, UNKNOWN_SWITCH, FLAG_ASSIGNMENT, OPTION_VALUE_REQUIRED,
        DUPLICATED_SWITCH, PATTERN_MISMATCH, HELP_REQUESTED, CLI_PARSE
    - validation (113xx)
      • CLI_VALIDATION
    - runtime (114xx)
      • NOT_INSTALLED, NO_VERSION, CONFIG_KEY, STATE_FILE, ENVIRONMENT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- general errors ---
    UNEXPECTED            = 11001

    # --- routing errors ---
    UNKNOWN_COMMAND       = 11101

    # --- grammar errors ---
    MALFORMED_TOKEN       = 11211
    UNKNOWN_SWITCH        = 11212
    FLAG_ASSIGNMENT       = 11213
    OPTION_VALUE_REQUIRED = 11214
    DUPLICATED_SWITCH     = 11215
    PATTERN_MISMATCH      = 11221
    HELP_REQUESTED        = 11231
    CLI_PARSE             = 11241

    # --- validation errors ---
    CLI_VALIDATION        = 11301

    # --- runtime errors ---
    NOT_INSTALLED         = 11401
    NO_VERSION            = 11402
    CONFIG_KEY            = 11411
    STATE_FILE            = 11421
    ENVIRONMENT           = 11431


class NotionFault(Exception):
    """
    base class of every fault the front end surfaces to the user.

    class-level defaults (code, title, exit_code) can be overridden per instance
    through options; any other option is kept as context (command, input, cause...).
    """
    code = FaultCode.UNEXPECTED
    title = "unexpected failure"
    exit_code = ExitCode.UNKNOWN_ERROR

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)
        if "code" in options:
            self.code = options["code"]
        if "title" in options:
            self.title = options["title"]
        if "exit_code" in options:
            self.exit_code = options["exit_code"]

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return coalesce(self.message, self.title)

    def __rich__(self):
        colorful = self.options.get("colorful", True)

        styles = {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), style)

        prog = text("notion", styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(str(self.code.value), styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(coalesce(self.message, ""), styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.options.get("cause")
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(NotionFault):
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"
    exit_code = ExitCode.INVALID_ARGUMENTS


class UsageError(NotionFault):
    """
    a failure reported by the usage grammar collaborator.

    is_help() tells the dispatcher whether the failure is really a help request.
    """
    code = FaultCode.PATTERN_MISMATCH
    title = "invalid usage"
    exit_code = ExitCode.INVALID_ARGUMENTS

    def is_help(self):
        return False


class MalformedTokenError(UsageError):
    code = FaultCode.MALFORMED_TOKEN
    title = "malformed option or flag"


class UnknownSwitchError(UsageError):
    code = FaultCode.UNKNOWN_SWITCH
    title = "unknown option or flag"


class FlagAssignmentError(UsageError):
    code = FaultCode.FLAG_ASSIGNMENT
    title = "flag cannot take a value"


class OptionValueRequiredError(UsageError):
    code = FaultCode.OPTION_VALUE_REQUIRED
    title = "option value required"


class DuplicatedSwitchError(UsageError):
    code = FaultCode.DUPLICATED_SWITCH
    title = "duplicated option or flag"


class PatternMismatchError(UsageError):
    code = FaultCode.PATTERN_MISMATCH
    title = "invalid usage"


class HelpRequest(UsageError):
    code = FaultCode.HELP_REQUESTED
    title = "help requested"
    exit_code = ExitCode.SUCCESS

    def is_help(self):
        return True


class CliParseError(NotionFault):
    """
    a syntax-level failure: argv did not conform to a command's usage grammar.
    """
    code = FaultCode.CLI_PARSE
    title = "invalid arguments"
    exit_code = ExitCode.INVALID_ARGUMENTS

    @classmethod
    def from_usage(cls, error, /, *, command):
        return cls(
            error.message,
            command=command,
            cause=error,
            input=error.options.get("input"),
            hint=error.hint or "run 'notion help %s' to see the expected usage" % command,
        )


class CliValidationError(NotionFault):
    """
    a contract-level failure: the arguments are well formed but inconsistent.
    """
    code = FaultCode.CLI_VALIDATION
    title = "invalid arguments"
    exit_code = ExitCode.INVALID_ARGUMENTS


class NotInstalledError(NotionFault):
    code = FaultCode.NOT_INSTALLED
    title = "version not installed"
    exit_code = ExitCode.NO_VERSION_MATCH


class NoVersionError(NotionFault):
    code = FaultCode.NO_VERSION
    title = "no toolchain installed"
    exit_code = ExitCode.NO_VERSION_MATCH


class ConfigKeyError(NotionFault):
    code = FaultCode.CONFIG_KEY
    title = "unknown configuration key"
    exit_code = ExitCode.CONFIGURATION_ERROR


class StateFileError(NotionFault):
    code = FaultCode.STATE_FILE
    title = "unreadable state file"
    exit_code = ExitCode.FILE_SYSTEM_ERROR


class EnvironmentFault(NotionFault):
    code = FaultCode.ENVIRONMENT
    title = "environment error"
    exit_code = ExitCode.ENVIRONMENT_ERROR


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see NotionFault).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=True the fault is printed through rich; otherwise it is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def report(fault, /, *, console=console, colorful=True):
    """
    print a fault for the user and return the exit code it carries.
    """
    trigger(fault, shell=True, console=console, colorful=colorful)
    return fault.exit_code


__all__ = (
    "ExitCode",
    "FaultCode",
    "NotionFault",
    "UnknownCommandError",
    "UsageError",
    "MalformedTokenError",
    "UnknownSwitchError",
    "FlagAssignmentError",
    "OptionValueRequiredError",
    "DuplicatedSwitchError",
    "PatternMismatchError",
    "HelpRequest",
    "CliParseError",
    "CliValidationError",
    "NotInstalledError",
    "NoVersionError",
    "ConfigKeyError",
    "StateFileError",
    "EnvironmentFault",
    "trigger",
    "report",
)
