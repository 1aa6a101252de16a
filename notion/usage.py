r"""
Notion usage grammars: compile a usage text and parse argv against it.

Overview
- A command describes its accepted arguments with a single usage text, e.g.

      Select a toolchain for the current project

      Usage:
          notion use [options] <version>
          notion use -h | --help

      Options:
          -h, --help     Display this message
          -g, --global   Select a toolchain globally

  The text is the single source of truth: compile() turns it into a Usage whose
  parse() returns a value mapping and whose deserialize() fills an Args dataclass.

- Specs
  • Cardinal: positional, value-bearing argument (<version>, VERSION); repeated with "...".
  • Word: literal command word (list, create); true when matched.
  • Flag: named, presence-only switch (-g/--global).
  • Option: named, value-bearing switch (--shell=<name>, optionally [default: x]).

- Pattern syntax
  • [ ] optional elements, ( ) required groups, | alternatives, ... repetition.
  • [options] matches any option declared in the Options section.
  • The first word of every usage line is the program name and is ignored.

Parsing
- Options are recognized anywhere in argv, before "--": --name=value, --name value,
  -x value and stacked short flags (-lg).
- A declared -h/--help anywhere before "--" raises HelpRequest before anything else.
- Every other failure raises a UsageError subclass carrying a FaultCode, an ordinal
  position and a hint.

Value keys (mirrors the usual docopt conventions)
- <version> and VERSION → "<version>" / "VERSION"; --global → "--global"; list → "list".
- deserialize() maps them onto Args fields: arg_version, flag_global, cmd_list.
"""
import dataclasses
import difflib
import functools
import re
import textwrap
from collections import deque

from .faults import (
    DuplicatedSwitchError,
    FlagAssignmentError,
    HelpRequest,
    MalformedTokenError,
    OptionValueRequiredError,
    PatternMismatchError,
    UnknownSwitchError,
)
from .utils import *

HELP_NAMES = frozenset({"-h", "--help"})


class UsageGrammarError(ValueError):
    """
    Raised for malformed usage texts. This is a programming error, never a user fault.
    """


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


class ArgumentType(type):
    """
    Metaclass giving grammar specs a stable typename, read-only fields and a compact repr.

    - __typename__ is derived from the class name (camel-case split with hyphens).
    - Every name listed in __introspectable__ is exposed through mirror().
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (type(self).__typename__, ", ".join(
                "%s=%r" % (name, getattr(self, name)) for name in type(self).__introspectable__
            ))
        self.__repr__ = __repr__

        return self


class Cardinal(metaclass=ArgumentType):
    __introspectable__ = ("name", "repeated")

    def __init__(self, name, /):
        self._name = name
        self._repeated = False

    @property
    def key(self):
        return self._name

    @property
    def field(self):
        return "arg_" + self._name.strip("<>").lower().replace("-", "_")

    @property
    def default(self):
        return [] if self._repeated else None


class Word(metaclass=ArgumentType):
    __introspectable__ = ("name", "repeated")

    def __init__(self, name, /):
        self._name = name
        self._repeated = False

    @property
    def key(self):
        return self._name

    @property
    def field(self):
        return "cmd_" + self._name.replace("-", "_")

    @property
    def default(self):
        return 0 if self._repeated else False


class Flag(metaclass=ArgumentType):
    __introspectable__ = ("names", "descr")

    def __init__(self, *names, descr=Unset):
        if not names:
            raise UsageGrammarError(f"{type(self).__typename__} must specify at least one name")
        for name in names:
            if not re.fullmatch(r"--?[^\W_](-?[^\W_]+)*", name):
                raise UsageGrammarError(f"{type(self).__typename__} name {name!r} is not a valid option name")
        # long names first, so key is the most descriptive spelling
        self._names = tuple(sorted(names, key=lambda name: (not name.startswith("--"), name)))
        self._descr = coalesce(descr)

    @property
    def key(self):
        return self._names[0]

    @property
    def field(self):
        return "flag_" + self.key.lstrip("-").replace("-", "_")

    @property
    def default(self):
        return False

    @property
    def helper(self):
        return not HELP_NAMES.isdisjoint(self._names)


class Option(Flag):
    __introspectable__ = ("names", "metavar", "value", "descr")

    def __init__(self, *names, metavar, value=Unset, descr=Unset):
        super().__init__(*names, descr=descr)
        self._metavar = metavar
        self._value = coalesce(value)

    @property
    def default(self):
        return self._value


class _Node:
    """
    Pattern tree node. Subclasses implement match() as a generator of every
    (position, values) pair reachable after consuming positional tokens.
    """
    __slots__ = ("children",)

    def __init__(self, *children):
        self.children = children


class _Required(_Node):
    __slots__ = ()

    def match(self, tokens, index, values, present):
        def step(position, index, values):
            if position == len(self.children):
                yield index, values
                return
            for index, values in _match(self.children[position], tokens, index, values, present):
                yield from step(position + 1, index, values)

        yield from step(0, index, values)


class _Optional(_Node):
    __slots__ = ()

    def match(self, tokens, index, values, present):
        # each element is optional on its own, greedy first
        def step(position, index, values):
            if position == len(self.children):
                yield index, values
                return
            for matched, updated in _match(self.children[position], tokens, index, values, present):
                yield from step(position + 1, matched, updated)
            yield from step(position + 1, index, values)

        yield from step(0, index, values)


class _Either(_Node):
    __slots__ = ()

    def match(self, tokens, index, values, present):
        for child in self.children:
            yield from _match(child, tokens, index, values, present)


class _Repeat(_Node):
    __slots__ = ()

    def match(self, tokens, index, values, present):
        # breadth-first over repetitions, so depth does not grow with argv
        child, = self.children
        frontier = [(index, values)]
        reached = []
        while frontier:
            layer = []
            for position, current in frontier:
                for matched, updated in _match(child, tokens, position, current, present):
                    reached.append((matched, updated))
                    if matched > position:
                        layer.append((matched, updated))
            frontier = layer
        # longest repetition first
        yield from sorted(reached, key=lambda pair: pair[0], reverse=True)


class _Shortcut(_Node):
    __slots__ = ()

    def match(self, tokens, index, values, present):
        yield index, values


def _match(node, tokens, index, values, present):
    if isinstance(node, _Node):
        yield from node.match(tokens, index, values, present)
    elif isinstance(node, Flag):
        # options are consumed up front; a reference only requires presence
        if node.key in present:
            yield index, values
    elif index < len(tokens):
        if isinstance(node, Word) and tokens[index] != node.key:
            return
        updated = dict(values)
        if isinstance(node, Cardinal):
            updated[node.key] = [*values[node.key], tokens[index]] if node.repeated else tokens[index]
        else:
            updated[node.key] = values[node.key] + 1 if node.repeated else True
        yield index + 1, updated


def _section(text, name):
    """
    Return the lines of a "Name:" section up to the first blank line.
    """
    lines = []
    inside = False
    for line in text.splitlines():
        if not inside:
            head, colon, tail = line.partition(":")
            if colon and head.strip().lower() == name:
                inside = True
                if tail.strip():
                    lines.append(tail.strip())
            continue
        if not line.strip():
            if lines:
                break
            continue
        lines.append(line.strip())
    return lines


class Usage:
    """
    A compiled usage grammar.

    Build instances through compile(text); they are cached per text and immutable
    once compiled. parse()/deserialize() may be called any number of times.
    """

    def __init__(self, text, /):
        if not isinstance(text, str):
            raise TypeError("usage text must be a string")
        self._text = textwrap.dedent(text).strip()
        self._switches = {}
        self._specs = {}
        self._patterns = []

        for line in _section(self._text, "options"):
            if line.startswith("-"):
                self._declare_option(line)

        lines = _section(self._text, "usage")
        if not lines:
            raise UsageGrammarError("usage text must contain a 'Usage:' section")
        for line in lines:
            tokens = re.sub(r"([\[\]()|]|\.\.\.)", r" \1 ", line).split()
            self._program = tokens[0]
            tokens = deque(tokens[1:])
            pattern = self._parse_expression(tokens)
            if tokens:
                raise UsageGrammarError(f"unexpected {tokens[0]!r} in usage pattern {line!r}")
            self._patterns.append(pattern)

        for pattern in self._patterns:
            self._mark_repeated(pattern, False)

    @property
    def text(self):
        return self._text

    @property
    def program(self):
        return self._program

    @property
    def options(self):
        return tuple({id(spec): spec for spec in self._switches.values()}.values())

    @property
    def helps(self):
        return any(spec.helper for spec in self._switches.values())

    def _declare_option(self, line):
        left, _, descr = line.partition("  ")
        left = left.strip()
        descr = descr.strip()
        names = []
        metavar = None
        for part in re.split(r"[,\s]+", left.replace("=", " ")):
            if part.startswith("-"):
                names.append(part)
            elif part:
                metavar = part
        match = re.search(r"\[default:\s*([^\]]*)\]", descr, flags=re.IGNORECASE)
        if metavar is None:
            spec = Flag(*names, descr=descr or Unset)
        else:
            spec = Option(*names, metavar=metavar, value=match[1].strip() if match else Unset, descr=descr or Unset)
        for name in names:
            if name in self._switches:
                raise UsageGrammarError(f"option name {name!r} is declared twice")
            self._switches[name] = spec
        return spec

    def _reference(self, token, tokens):
        name, equals, metavar = token.partition("=")
        spec = self._switches.get(name)
        if spec is None:
            spec = self._declare_option(f"{name} {metavar}" if equals else name)
        elif isinstance(spec, Option) and not equals and tokens and tokens[0] == spec.metavar:
            tokens.popleft()
        return spec

    def _leaf(self, token):
        kind = Cardinal if (token.startswith("<") and token.endswith(">")) or token.isupper() else Word
        spec = self._specs.setdefault(token, kind(token))
        if not isinstance(spec, kind):
            raise UsageGrammarError(f"usage element {token!r} is used both as argument and command")
        return spec

    def _parse_expression(self, tokens):
        alternatives = [self._parse_sequence(tokens)]
        while tokens and tokens[0] == "|":
            tokens.popleft()
            alternatives.append(self._parse_sequence(tokens))
        return alternatives[0] if len(alternatives) == 1 else _Either(*alternatives)

    def _parse_sequence(self, tokens):
        children = []
        while tokens and tokens[0] not in ("]", ")", "|"):
            atom = self._parse_atom(tokens)
            if tokens and tokens[0] == "...":
                tokens.popleft()
                atom = _Repeat(atom)
            children.append(atom)
        return _Required(*children)

    def _parse_atom(self, tokens):
        token = tokens.popleft()
        if token == "[":
            if list(tokens)[:2] == ["options", "]"]:
                tokens.popleft()
                tokens.popleft()
                return _Shortcut()
            expression = self._parse_expression(tokens)
            self._expect(tokens, "]")
            return _Optional(*expression.children) if isinstance(expression, _Required) else _Optional(expression)
        if token == "(":
            expression = self._parse_expression(tokens)
            self._expect(tokens, ")")
            return expression
        if token.startswith("-") and token != "-":
            return self._reference(token, tokens)
        if token in ("]", ")", "|", "..."):
            raise UsageGrammarError(f"unexpected {token!r} in usage pattern")
        return self._leaf(token)

    @staticmethod
    def _expect(tokens, closing):
        if not tokens or tokens.popleft() != closing:
            raise UsageGrammarError(f"unbalanced usage pattern, expected {closing!r}")

    def _mark_repeated(self, node, repeated):
        if isinstance(node, _Node):
            for child in node.children:
                self._mark_repeated(child, repeated or isinstance(node, _Repeat))
        elif repeated and isinstance(node, Cardinal | Word):
            node._repeated = True

    def _hint(self):
        return "usage: " + " | ".join(_section(self._text, "usage"))

    def _resolve_token(self, token, index):
        """
        normalize a raw switch token into (spec, value) and validate its shape.
        """
        match = re.fullmatch(r"(?P<input>--?[^\W_](-?[^\W_]+)*)(=(?P<value>[^\r\n]*))?", token)
        if not match:
            raise MalformedTokenError(
                "bad form of option or flag %r at %s position" % (token, _ordinal(index)),
                input=token,
                index=index,
                hint="options are spelled -x, --name or --name=value",
            )

        input = match["input"]
        value = match["value"]

        try:
            spec = self._switches[input]
        except KeyError:
            suggestions = difflib.get_close_matches(input, self._switches.keys(), 5)
            try:
                hint = "did you mean %r?" % suggestions[0]
            except IndexError:
                hint = self._hint()
            raise UnknownSwitchError(
                "unknown option or flag %r at %s position" % (input, _ordinal(index)),
                input=input,
                index=index,
                suggestions=suggestions,
                hint=hint,
            ) from None

        if value is not None and not isinstance(spec, Option):
            raise FlagAssignmentError(
                "flag %r at %s position cannot have an inline value" % (input, _ordinal(index)),
                input=input,
                index=index,
                hint="remove everything from '=' (for example: %s)" % input,
            )
        return input, spec, value

    def _expand(self, token):
        # stacked short flags: -lg → -l -g
        if (
                token.startswith("-")
                and not token.startswith("--")
                and len(token) > 2
                and token not in self._switches
                and "=" not in token
                and all("-" + letter in self._switches for letter in token[1:])
        ):
            return ["-" + letter for letter in token[1:]]
        return [token]

    def parse(self, argv, *, options_first=False):
        """
        Parse a full argv (program name first) and return the value mapping.

        With options_first, option parsing stops at the first positional token and
        everything after it is kept verbatim (used by the top-level grammar).

        Raises
        - HelpRequest when a declared -h/--help is present.
        - UsageError subclasses for every other failure.
        """
        arguments = list(argv)[1:]

        if self.helps:
            for token in arguments:
                if token == "--" or (options_first and not token.startswith("-")):
                    break
                if token in HELP_NAMES and token in self._switches:
                    raise HelpRequest("help requested", input=token, usage=self._text)

        tokens = deque(arguments)
        positionals = []
        present = {}
        index = 0
        while tokens:
            token = tokens.popleft()
            index += 1
            if token == "--":
                positionals.extend(tokens)
                break
            if not token.startswith("-") or token == "-":
                positionals.append(token)
                if options_first:
                    positionals.extend(tokens)
                    break
                continue
            for token in self._expand(token):
                input, spec, value = self._resolve_token(token, index)
                if spec.key in present:
                    raise DuplicatedSwitchError(
                        "option %r at %s position was already provided" % (input, _ordinal(index)),
                        input=input,
                        index=index,
                        hint="keep a single %s; each option can be specified only once" % input,
                    )
                if isinstance(spec, Option):
                    if value is None:
                        if not tokens:
                            raise OptionValueRequiredError(
                                "option %r at %s position requires a value" % (input, _ordinal(index)),
                                input=input,
                                index=index,
                                hint="pass it inline (%s=%s) or after a space" % (input, spec.metavar),
                            )
                        value = tokens.popleft()
                        index += 1
                    present[spec.key] = value
                else:
                    present[spec.key] = True

        defaults = {spec.key: spec.default for spec in self._specs.values()}
        defaults |= {spec.key: spec.default for spec in self.options}

        for pattern in self._patterns:
            for matched, values in pattern.match(positionals, 0, defaults, present):
                if matched == len(positionals):
                    return values | present

        raise PatternMismatchError(
            "%r does not match any usage pattern" % " ".join(arguments),
            input=arguments,
            hint=self._hint(),
        )

    def deserialize(self, argv, type, /):
        """
        Parse argv and build an instance of the dataclass type.

        Every field of type must have a counterpart in the grammar; extra grammar
        values are ignored.
        """
        if not dataclasses.is_dataclass(type):
            raise TypeError("deserialize() second argument must be a dataclass type")
        values = self.parse(argv)
        specs = {spec.field: spec for spec in (*self._specs.values(), *self.options)}
        arguments = {}
        for field in dataclasses.fields(type):
            try:
                arguments[field.name] = values[specs[field.name].key]
            except KeyError:
                raise UsageGrammarError(
                    f"{type.__name__} field {field.name!r} has no counterpart in the usage grammar"
                ) from None
        return type(**arguments)


@functools.cache
def compile(text, /):
    """
    Compile (and cache) a usage text.
    """
    return Usage(text)


__all__ = (
    "Cardinal",
    "Word",
    "Flag",
    "Option",
    "Usage",
    "UsageGrammarError",
    "HELP_NAMES",
    "compile",
)
