"""
flatargs utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the declaration, result-set and parser layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level modules.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/().

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated getters for clean tracebacks.

- StorageGuard / view("field")
  • Write-once backing storage under non-identifier names ('-field') plus read-only
    properties that hand out immutable views of it.

- parse_integer(text)
  • Strict base-10 integer parsing shared by validation and the typed accessors.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> parse_integer("-42")
    -42
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from contextlib import contextmanager
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None (or an empty string) is a legitimate user value, but
    the API needs a way to distinguish “not provided” from “provided”. A single
    instance, Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or () are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name)           -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


class StorageGuard:
    """
    internal mixin to protect backing storage and control mutation.

    intent
    - used by declarations to store construction-time metadata under
      non-identifier backing names (prefixed with '-') that must not be
      readable or writable after build.

    rules
    - any attribute whose name starts with '-' is considered internal backing and:
      • cannot be read (AttributeError),
      • cannot be written unless during the guarded build phase.

    build phase
    - this class provides a context-managed __new__ so subclasses can write
      backing fields safely:
        with super().__new__(cls) as self:
            setattr(self, "-field", value)
        # after the 'with' block, backing fields are locked (read-only).
    """
    __slots__ = ("__building", "__dict__")

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        self.__building = True
        try:
            yield self
        finally:
            self.__building = False

    def __getattribute__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if isinstance(name, str) and name.startswith("-"):
            # backing fields are writable only while building
            if not self.__building:
                raise AttributeError("internal storage is read-only")
        return object.__setattr__(self, name, value)


def view(name, /):
    """
    build a read-only property over a StorageGuard backing field.

    the value lives under '-' + name; the property hands out an immutable view:
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - other types       → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("view() argument must be a string")

    @rename(name)
    def getter(self):
        value = object.__getattribute__(self, "-" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_integer(text, /):
    """
    parse a base-10 integer with an optional sign.

    stricter than int(): surrounding whitespace, underscores and non-ASCII
    digits are rejected.

    raises
    - TypeError when text is not a string.
    - ValueError when text is not a base-10 integer.
    """
    if not isinstance(text, str):
        raise TypeError("parse_integer() argument must be a string")
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid base-10 integer: %r" % text)
    return int(text)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Singleton, distinct from None, falsey. Pair with coalesce(value, default) to
materialize a fallback only when the value is Unset.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "view",
    "parse_integer",

    # Types
    "UnsetType",
    "StorageGuard",

    # Constants
    "Unset",
)
