"""
flatargs faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- ArgumentParserError: the single catchable error kind raised by
  ArgumentParser.parse(). Subclasses refine the reason without breaking
  `except ArgumentParserError`.
- report(): print a fault through rich (stderr by default). It never exits;
  termination stays with the host program.

Message shape
- str(error) and error.message always read "ArgumentParser error: <reason>".
- error.reason carries the bare reason, error.hint one actionable next step.

Integration
- The parser raises faults at the point of detection; the host catches
  ArgumentParserError, calls report(error) and optionally parser.print_help().
"""
import functools
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

PREFIX = "ArgumentParser error: "


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - options (1111x)
      • UNKNOWN_OPTION, OPTION_VALUE_REQUIRED
    - values (1112x)
      • INVALID_CHOICE, INVALID_VALUE_TYPE
    - positionals (1113x)
      • UNEXPECTED_POSITIONAL
    - completeness (1114x)
      • MISSING_REQUIRED
    """
    # --- option errors (1111x) ---
    UNKNOWN_OPTION              = 11112
    OPTION_VALUE_REQUIRED       = 11117

    # --- value errors (1112x) ---
    INVALID_CHOICE              = 11124
    INVALID_VALUE_TYPE          = 11126

    # --- positional errors (1113x) ---
    UNEXPECTED_POSITIONAL       = 11131

    # --- completeness errors (1114x) ---
    MISSING_REQUIRED            = 11141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentParserError(Exception):
    """
    parse failure carrying one human-readable message.

    attributes
    - reason: bare reason ("Unknown option: --bogus").
    - message: prefixed message ("ArgumentParser error: Unknown option: --bogus").
    - options: read-only context (code, title, hint, token, argument, index, ...).
    """
    code = Unset
    title = "argument parser error"

    def __init__(self, reason, /, **options):
        if not isinstance(reason, str):
            raise TypeError("%s reason must be a string" % type(self).__name__)
        self.reason = reason
        self.message = PREFIX + reason
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    def __reduce__(self):
        # args holds the prefixed message; rebuild from the bare reason.
        return functools.partial(type(self), self.reason, **self.options), ()

    @property
    def hint(self):
        return self.options.get("hint", "")

    @property
    def token(self):
        return self.options.get("token")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = coalesce(self.options.get("prog", Unset), getattr(main, "__prog__", "program"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(code, "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))
        return Group(*renders)


class UnknownOptionError(ArgumentParserError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"


class OptionValueRequiredError(ArgumentParserError):
    code = FaultCode.OPTION_VALUE_REQUIRED
    title = "option requires a value"


class InvalidChoiceError(ArgumentParserError):
    code = FaultCode.INVALID_CHOICE
    title = "invalid choice"


class InvalidValueTypeError(ArgumentParserError):
    code = FaultCode.INVALID_VALUE_TYPE
    title = "invalid value type"


class UnexpectedPositionalError(ArgumentParserError):
    code = FaultCode.UNEXPECTED_POSITIONAL
    title = "unexpected positional argument"


class MissingRequiredError(ArgumentParserError):
    code = FaultCode.MISSING_REQUIRED
    title = "argument required"


def report(fault, /, *, prog=Unset, console=Unset, colorful=True):
    """
    print a fault through rich.

    contract
    - fault must be an ArgumentParserError.
    - prog overrides the program name shown in the header (falls back to
      the one recorded on the fault, then __main__.__prog__, then "program").
    - console defaults to a stderr console; colorful=False strips styles.
    - never exits: the host decides how to terminate.
    """
    if not isinstance(fault, ArgumentParserError):
        raise TypeError("report() argument must be an argument parser error")
    options = dict(fault.options, colorful=colorful)
    if prog is not Unset:
        options["prog"] = prog
    fault = type(fault)(fault.reason, **options)
    if console is Unset:
        console = Console(stderr=True)
    console.print(fault, highlight=False, soft_wrap=True)


__all__ = (
    "FaultCode",
    "ArgumentParserError",
    "UnknownOptionError",
    "OptionValueRequiredError",
    "InvalidChoiceError",
    "InvalidValueTypeError",
    "UnexpectedPositionalError",
    "MissingRequiredError",
    "report",
)
