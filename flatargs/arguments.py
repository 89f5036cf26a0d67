r"""
flatargs argument declarations.

Overview
- Enums
  • Action: STORE (consumes the following token) or FLAG (presence-only marker).
  • ValueType: STRING, INTEGER or BOOLEAN; checked while parsing stored values
    and used as a hint by the typed accessors of the result set.

- Declaration
  • Argument: immutable description of one accepted argument (name, flags,
    help, requiredness, action, value type, default, choices, greedy).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ via read-only properties (see utils.view).

Metadata (sanitized on construction)
- Text fields
  • name: non-empty string (trimmed); the lookup key for results.
  • short/long: strings; both empty means positional. Flag syntax is not validated.
  • help/default: strings; an empty default means "no default".
- Semantic fields
  • action: Action | "store" | "flag".
  • type: ValueType | "string" | "integer" | "boolean".
  • choices: iterable of strings, duplicates rejected; sets are sorted for a
    stable display order.
  • greedy: bool; a greedy STORE option collects every token up to the next flag token.

Validation highlights
- A FLAG argument cannot be positional, cannot declare choices and cannot be greedy.
- A positional argument cannot be greedy.

Quick example:
    >>> count = Argument("count", "-c", "--count", type=ValueType.INTEGER, default="1")
    >>> count.label
    '-c, --count'
    >>> count.positional
    False
"""
import functools
import operator
import re
from collections.abc import Iterable, Set
from enum import StrEnum

from .utils import *


class Action(StrEnum):
    """
    what a declaration does with the token stream when its flag is seen.
    """
    STORE = "store"
    FLAG = "flag"


class ValueType(StrEnum):
    """
    interpretation of a stored value.
    """
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"


class ArgumentType(type):
    """
    Metaclass that turns declarations into introspectable, read-only records.

    Responsibilities
    - Expose selected fields as read-only properties using view() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
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
                name: view(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(name='verbose', short='-v', long='--verbose', ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the text fields of a declaration.

    - name: must be a non-empty string after trimming; stored trimmed.
    - short/long/help/default: must be strings; stored verbatim.

    Raises
    - TypeError: when a field is not a string.
    - ValueError: when the name is empty after trimming.

    Notes
    - This function mutates the provided metadata dict in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    metadata["name"] = name

    for field in ("short", "long", "help", "default"):
        if not isinstance(metadata[field], str):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")


def _sanitize_semantic_metadata(cls, metadata, /):
    """
    Internal: validate action/type/choices/greedy and their combinations.

    Responsibilities
    - action/type: accept the enum members or their string spellings.
    - choices: iterable of strings (a bare string is rejected); duplicates
      are rejected unless a Set is given, which is sorted for stable display.
    - combinations: FLAG cannot be positional, carry choices or be greedy;
      positional arguments cannot be greedy.

    Side effects
    - Mutates the provided metadata dict in place.
    """
    def lowered(object):
        return object.lower() if isinstance(object, str) else object

    try:
        metadata["action"] = Action(lowered(metadata["action"]))
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'action' must be one of {', '.join(map(repr, map(str, Action)))}") from None

    try:
        metadata["type"] = ValueType(lowered(metadata["type"]))
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'type' must be one of {', '.join(map(repr, map(str, ValueType)))}") from None

    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    sanitized = []
    for choice in sorted(choices) if isinstance(choices, Set) else choices:
        if not isinstance(choice, str):
            raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
        if choice in sanitized:
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    metadata["choices"] = tuple(sanitized)

    positional = not metadata["short"] and not metadata["long"]

    if metadata["action"] is Action.FLAG:
        if positional:
            raise TypeError(f"flag {cls.__typename__} {metadata['name']!r} must declare a short or long flag")
        if metadata["choices"]:
            raise TypeError(f"flag {cls.__typename__} {metadata['name']!r} cannot have 'choices'")
        if metadata["greedy"]:
            raise TypeError(f"flag {cls.__typename__} {metadata['name']!r} cannot be greedy")

    if positional and metadata["greedy"]:
        raise TypeError(f"positional {cls.__typename__} {metadata['name']!r} cannot be greedy")


class Argument(StorageGuard, metaclass=ArgumentType):
    """
    Immutable declaration of one accepted argument.

    Highlights
    - Positional when both flags are empty; matched by registration order.
    - STORE consumes the following token; FLAG only records presence.
    - The value type is checked while parsing stored values; the result set
      converts on read.
    - Defaults are strings seeded before parsing; an empty default means none.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      mirroring the sanitized metadata values.
    """

    __introspectable__ = (
        "name",
        "short",
        "long",
        "help",
        "required",
        "action",
        "type",
        "default",
        "choices",
        "greedy",
    )

    def __new__(
            cls,
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
        Construct a declaration with the provided metadata.

        Parameters
        - name: str
          Logical name, e.g. "verbose" or "filename". Must be non-empty.
        - short, long: str
          Flag strings such as "-v" and "--verbose". Both empty means positional.
        - help: str
          Text displayed by the help renderer.
        - required: bool
          Parsing fails when the argument is neither supplied nor defaulted.
        - action: Action | str
          STORE expects a value after the flag (--count 5); FLAG records presence (--verbose).
        - type: ValueType | str
          STRING, INTEGER or BOOLEAN.
        - default: str
          Value used when the argument is absent; empty means no default.
        - choices: Iterable[str]
          Allowed values; empty means unconstrained.
        - greedy: bool
          Collect every following token up to the next flag token (STORE options only).
        """
        metadata = {
            "name": name,
            "short": short,
            "long": long,
            "help": help,
            "required": bool(required),
            "action": action,
            "type": type,
            "default": default,
            "choices": choices,
            "greedy": bool(greedy),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_semantic_metadata(cls, metadata)

        with super().__new__(cls) as self:
            for field, object in metadata.items():
                setattr(self, "-" + field, object)
        return self

    def __reduce__(self):
        return type(self), tuple(getattr(self, field) for field in type(self).__introspectable__)

    @property
    def positional(self):
        """
        True when the declaration has neither a short nor a long flag.
        """
        return not self.short and not self.long

    @property
    def flags(self):
        """
        Non-empty flag strings, short form first.
        """
        return tuple(flag for flag in (self.short, self.long) if flag)

    @property
    def label(self):
        """
        Flags joined by ", " or the bare name for positionals (help column).
        """
        return ", ".join(self.flags) or self.name

    def matches(self, token, /):
        """
        Exact-string match of a flag token against the short and long forms.
        """
        return bool(token) and token in self.flags


__all__ = (
    "Action",
    "ValueType",
    "Argument",
)

# Not part of the public API.
del ArgumentType
