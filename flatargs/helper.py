"""
flatargs help renderer.

Layout (fixed, one line per declaration in registration order)

    Usage: <prog> [options]
    <description>
    <blank line>
    Options:
      -c, --count          Number of repetitions
      mode                 Output mode (fast|safe)

- the description line is omitted when empty.
- labels are the flags joined by ", " (or the bare name for positionals),
  left-justified to a fixed column; longer labels are not truncated.
- allowed choices are appended in parentheses, joined by "|".

render() is the plain, deterministic form; render_text() carries the same
characters as a styled rich Text; print_help() writes it to a console.

Palette keys
- usage-label, program-name, description-section, group-label
- option-name, positional-name, argument-description, choice

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .arguments import Argument
from .utils import Unset

COLUMN = 20


def render_text(prog, description, declarations, /, *, colorful=True):
    """
    Build the help screen as a rich Text.

    The plain text of the result is exactly render(prog, description, declarations).
    """
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Declarations ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for flagged arguments
        "positional-name": "bold #FFD600",  # AMBER for positionals
        "argument-description": "#9CA3AF",  # Muted gray
        "choice": "bold #FF4D94",  # MAGENTA → choices stand out
    } | getattr(__import__('__main__'), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    help = Text()
    help.append("Usage", styler("usage-label")).append(": ")
    help.append(str(prog), styler("program-name")).append(" [options]\n")

    if description:
        help.append(str(description), styler("description-section")).append("\n")

    help.append("\n")
    help.append("Options", styler("group-label")).append(":\n")

    for argument in declarations:
        if not isinstance(argument, Argument):
            raise TypeError("help declarations must be arguments")

        # Pad the label column as a whole so wide labels keep a single separator.
        label = argument.label
        help.append("  ")
        help.append(label, styler("positional-name" if argument.positional else "option-name"))
        help.append(" " * (max(COLUMN - len(label), 0) + 1))
        help.append(argument.help, styler("argument-description"))

        if argument.choices:
            help.append(" (")
            for index, choice in enumerate(argument.choices):
                if index:
                    help.append("|")
                help.append(choice, styler("choice"))
            help.append(")")
        help.append("\n")

    return help


def render(prog, description, declarations, /):
    """
    Return the help screen as plain text (no styles, trailing newline included).
    """
    return render_text(prog, description, declarations, colorful=False).plain


def print_help(prog, description, declarations, /, *, console=Unset, colorful=True):
    """
    Print the help screen to a rich console (stdout unless one is supplied).
    """
    if console is Unset:
        console = Console()
    console.print(
        render_text(prog, description, declarations, colorful=colorful),
        end="",
        highlight=False,
        soft_wrap=True,
    )


__all__ = (
    "render",
    "render_text",
    "print_help",
)
