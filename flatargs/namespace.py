"""
flatargs result set.

A Namespace maps argument names to the raw string tokens captured for them
during one parse call:

- absent key      → not supplied and no default applied.
- empty tuple     → flag present, no value.
- non-empty tuple → captured value(s), in input order.

The mapping is read-only; conversion happens on read through the typed
accessors (string, integer, boolean, values). Conversion failures never
raise: the caller-supplied fallback is returned instead.
"""
from collections.abc import Mapping
from types import MappingProxyType

from .utils import parse_integer

FALSY = frozenset({"false", "0"})


class Namespace(Mapping):
    """
    Read-only mapping from argument name to a tuple of captured raw strings.

    Instances are produced by ArgumentParser.parse(); building one by hand is
    supported for tests and host code (`Namespace({"count": ("5",)})`).
    """
    __slots__ = ("_captures",)

    def __init__(self, captures=(), /):
        captures = dict(captures)
        for name, values in captures.items():
            if not isinstance(name, str):
                raise TypeError("namespace keys must be strings")
            if isinstance(values, str):
                raise TypeError("namespace values must be sequences of strings")
            values = tuple(values)
            if not all(isinstance(value, str) for value in values):
                raise TypeError("namespace values must be sequences of strings")
            captures[name] = values
        self._captures = MappingProxyType(captures)

    def __getitem__(self, name, /):
        return self._captures[name]

    def __iter__(self):
        return iter(self._captures)

    def __len__(self):
        return len(self._captures)

    def __repr__(self):
        return f"namespace({dict(self._captures)!r})"

    def __rich_repr__(self):
        yield from self._captures.items()

    def has(self, name, /):
        return name in self._captures

    def all(self, name, /, fallback=()):
        """
        all captured tokens for `name`, or `fallback` when absent.
        """
        return self._captures.get(name, fallback)

    def string(self, name, /, fallback=""):
        """
        first captured token, or `fallback` when absent or captured without value.
        """
        if values := self._captures.get(name):
            return values[0]
        return fallback

    def integer(self, name, /, fallback=0):
        """
        first captured token as a base-10 integer.

        absence and unparsable tokens both yield `fallback`.
        """
        if not (values := self._captures.get(name)):
            return fallback
        try:
            return parse_integer(values[0])
        except ValueError:
            return fallback

    def boolean(self, name, /, fallback=False):
        """
        presence-aware truth value.

        - absent key             → fallback
        - captured without value → True
        - "false"/"0" (any case) → False
        - anything else          → True
        """
        try:
            values = self._captures[name]
        except KeyError:
            return fallback
        if not values:
            return True
        return values[0].lower() not in FALSY


__all__ = (
    "Namespace",
)
