"""
flatargs parser: declaration registry and parsing engine.

What this module provides
- ArgumentParser: owns an append-only registry of Argument declarations and turns
  a flat list of raw tokens into a Namespace in a single left-to-right pass.
  • add_argument(...) registers a declaration and returns its integer handle.
  • parse(tokens) seeds defaults, scans tokens, checks requirements and
    normalizes absent flags to "0".
  • process parses the running program's own tokens once and memoizes the result.
  • format_help()/print_help() delegate to flatargs.helper.

Scanning rules
- a token is a flag token iff it is non-empty and starts with '-'.
- flag tokens are matched exactly against short and long flags; the first
  declaration in registration order wins.
- STORE options take the next token verbatim (even when it starts with '-');
  greedy STORE options take every token up to the next flag token.
- positional tokens fill the earliest positional declaration without a capture.

Failure is atomic: captures are collected privately and wrapped in a Namespace
only once every check has passed. Any failure raises an ArgumentParserError
subclass carrying "ArgumentParser error: <reason>".

Quick start
    from flatargs import ArgumentParser, Action, ValueType

    parser = ArgumentParser("copy", "Copy a file a number of times")
    parser.add_argument("filename", help="File to copy", required=True)
    parser.add_argument("count", "-c", "--count", "Copies", type=ValueType.INTEGER, default="1")
    parser.add_argument("verbose", "-v", "--verbose", "Chatty output", action=Action.FLAG)

    namespace = parser.parse(["report.txt", "-c", "3"])
    namespace.integer("count")  # 3
"""
import logging
import sys

from .arguments import Action, Argument, ValueType
from .faults import *
from .helper import print_help, render
from .namespace import Namespace
from .utils import Unset, coalesce, parse_integer

logger = logging.getLogger(__name__)

BOOLEANS = frozenset({"true", "false", "1", "0"})


def _is_flag(token):
    return bool(token) and token.startswith("-")


def _process_tokens():
    return sys.argv[1:]


class ArgumentParser:
    """
    Declaration registry plus single-pass parsing engine.

    Lifecycle
    - the registry is built once per instance, before parsing, and only grows.
    - every parse() call builds a fresh Namespace; nothing is shared between calls.
    - `process` is computed lazily from `source` at most once per instance.
      First access is not synchronized; pre-warm it before sharing the
      instance between threads.
    """

    def __init__(self, prog="program", description="", /, *, source=Unset, colorful=True):
        """
        Parameters
        - prog: str
          Program name shown in the usage line and in fault headers.
        - description: str
          One-line description shown under the usage line.
        - source: Callable[[], Iterable[str]]
          Supplies the running program's tokens for `process`
          (defaults to sys.argv without the program name).
        - colorful: bool
          Style help output with the rich palette.
        """
        if not isinstance(prog, str):
            raise TypeError("parser 'prog' must be a string")
        if not isinstance(description, str):
            raise TypeError("parser 'description' must be a string")
        if not callable(source := coalesce(source, _process_tokens)):
            raise TypeError("parser 'source' must be callable")

        self._prog = prog
        self._description = description
        self._source = source
        self._colorful = bool(colorful)
        self._declarations = []
        self._process = Unset

    @property
    def prog(self):
        return self._prog

    @property
    def description(self):
        return self._description

    @description.setter
    def description(self, description):
        if not isinstance(description, str):
            raise TypeError("parser 'description' must be a string")
        self._description = description

    @property
    def colorful(self):
        return self._colorful

    @property
    def declarations(self):
        """
        Snapshot of the registry in registration order.
        """
        return tuple(self._declarations)

    def declaration(self, handle, /):
        """
        Return the declaration registered under `handle`.
        """
        if not isinstance(handle, int) or isinstance(handle, bool):
            raise TypeError("declaration handle must be an integer")
        if not 0 <= handle < len(self._declarations):
            raise IndexError("unknown declaration handle %d" % handle)
        return self._declarations[handle]

    def add_argument(
            self,
            name,
            /,
            short="",
            long="",
            help="",
            required=False,
            action=Action.STORE,
            type=ValueType.STRING,
            default="",
            choices=(),
            greedy=False,
    ):
        """
        Register a declaration and return its stable integer handle.

        Parameters mirror Argument(...). Duplicate names are rejected with
        ValueError; invalid combinations are rejected by Argument itself.
        """
        argument = Argument(
            name,
            short=short,
            long=long,
            help=help,
            required=required,
            action=action,
            type=type,
            default=default,
            choices=choices,
            greedy=greedy,
        )
        if any(declared.name == argument.name for declared in self._declarations):
            raise ValueError(f"argument name {argument.name!r} is already in use")

        self._declarations.append(argument)
        logger.debug("registered %r as handle %d", argument, len(self._declarations) - 1)
        return len(self._declarations) - 1

    def _find_by_flag(self, token):
        for argument in self._declarations:
            if argument.matches(token):
                return argument
        return None

    def _check_value(self, argument, flag, value, index):
        """
        validate one stored value against the declaration's choices and type.
        """
        if argument.choices and value not in argument.choices:
            raise InvalidChoiceError(
                "Value for %s not in choices: %s" % (flag, "|".join(argument.choices)),
                prog=self._prog,
                hint="pick one of: %s" % ", ".join(argument.choices),
                token=value,
                argument=argument,
                index=index,
            )

        match argument.type:
            case ValueType.INTEGER:
                try:
                    parse_integer(value)
                except ValueError:
                    raise InvalidValueTypeError(
                        "Value for %s must be Integer" % flag,
                        prog=self._prog,
                        hint="pass a base-10 whole number (for example: %s 5)" % flag,
                        token=value,
                        argument=argument,
                        index=index,
                    ) from None
            case ValueType.BOOLEAN:
                if value.lower() not in BOOLEANS:
                    raise InvalidValueTypeError(
                        "Value for %s must be Boolean" % flag,
                        prog=self._prog,
                        hint="pass one of: true, false, 1, 0",
                        token=value,
                        argument=argument,
                        index=index,
                    )

    def parse(self, tokens, /):
        """
        Convert raw tokens (as they follow the program name) into a Namespace.

        phases
        - seed: declarations with a non-empty default start as (default,).
        - scan: flag tokens resolve to declarations; positional tokens fill the
          earliest positional declaration without a capture.
        - required: every required declaration must be captured.
        - normalize: absent FLAG declarations are captured as ("0",).

        raises
        - TypeError when a token is not a string.
        - UnknownOptionError, OptionValueRequiredError, InvalidChoiceError,
          InvalidValueTypeError, UnexpectedPositionalError, MissingRequiredError
          (all ArgumentParserError) on invalid input.
        """
        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() tokens must be strings")

        logger.debug("parsing %d token(s) against %d declaration(s)", len(tokens), len(self._declarations))

        captures = {}
        for argument in self._declarations:
            if argument.default:
                captures[argument.name] = (argument.default,)
        if captures:
            logger.debug("seeded defaults for %s", ", ".join(captures))

        index = 0
        while index < len(tokens):
            token = tokens[index]

            if not _is_flag(token):
                for argument in self._declarations:
                    if argument.positional and argument.name not in captures:
                        captures[argument.name] = (token,)
                        break
                else:
                    raise UnexpectedPositionalError(
                        "Unexpected positional argument: %s" % token,
                        prog=self._prog,
                        hint="remove it or quote it together with the value it belongs to",
                        token=token,
                        index=index,
                    )
                index += 1
                continue

            if (argument := self._find_by_flag(token)) is None:
                raise UnknownOptionError(
                    "Unknown option: %s" % token,
                    prog=self._prog,
                    hint="try '%s --help' to see all available options" % self._prog,
                    token=token,
                    index=index,
                )

            if argument.action is Action.FLAG:
                captures[argument.name] = ()
                index += 1
                continue

            if argument.greedy:
                values = []
                cursor = index + 1
                while cursor < len(tokens) and not _is_flag(tokens[cursor]):
                    self._check_value(argument, token, tokens[cursor], cursor)
                    values.append(tokens[cursor])
                    cursor += 1
                captures[argument.name] = tuple(values)
                index = cursor
                continue

            if index + 1 >= len(tokens):
                raise OptionValueRequiredError(
                    "Option %s requires a value" % token,
                    prog=self._prog,
                    hint="pass it after a space (for example: %s <value>)" % token,
                    token=token,
                    argument=argument,
                    index=index,
                )

            self._check_value(argument, token, value := tokens[index + 1], index + 1)
            captures[argument.name] = (value,)
            index += 2

        for argument in self._declarations:
            if argument.required and argument.name not in captures:
                raise MissingRequiredError(
                    "Argument required: %s" % argument.name,
                    prog=self._prog,
                    hint="supply %s" % ("a value for %r" % argument.name if argument.positional else argument.label),
                    argument=argument,
                )

        for argument in self._declarations:
            if argument.action is Action.FLAG and argument.name not in captures:
                captures[argument.name] = ("0",)

        logger.debug("parsed %d capture(s)", len(captures))
        return Namespace(captures)

    @property
    def process(self):
        """
        Namespace parsed from the running program's tokens, computed once.

        A failed parse is raised to the caller and not memoized.
        """
        if self._process is Unset:
            tokens = list(self._source())
            logger.debug("parsing process tokens for %r", self._prog)
            self._process = self.parse(tokens)
        return self._process

    def format_help(self):
        return render(self._prog, self._description, self._declarations)

    def print_help(self, console=Unset, /):
        print_help(self._prog, self._description, self._declarations, console=console, colorful=self._colorful)


__all__ = (
    "ArgumentParser",
)
