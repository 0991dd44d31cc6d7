"""
Optnaut utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the option, container, parser and formatter
  layers so that every layer speaks the same sentinel and string conventions.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None or "".
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr); containers
    are handed out as immutable snapshots (tuple / MappingProxyType / frozenset).

- stringify(value)
  • Normalize defaults, constants and overrides into the stored string form.

- basename(path) / columns()
  • Program-name derivation from argv[0] and the default terminal-width provider.

Stability and contract
- Names not in __all__ are internal and may change without notice.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> stringify(True)
    '1'
    >>> basename("/usr/local/bin/tool/")
    'tool'
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final

from rich.console import Console


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None or an empty string is a legitimate user value, but the
    API needs a way to distinguish “not provided” from “provided”. A single
    instance, Unset, is exposed for use as the default in parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
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

    Returns the given object unless it is Unset, in which case the provided
    default is returned. Falsey values like None, 0 or "" are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce("", "fallback")     -> ""
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name) -> decorator

    Notes
    - Only metadata changes; behavior is untouched.
    - Built-in callables refuse attribute updates and raise TypeError.
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


def _freeze(object):
    """
    Shallow immutable snapshot of a backing value.

    - Sequence (non-string) → tuple
    - Mapping               → MappingProxyType over a copy
    - Set                   → frozenset
    - anything else         → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns an
    immutable snapshot for container types, so callers cannot mutate the
    registry state behind the indices.

    Example
    - Given self._choices, declare choices = mirror("choices").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def stringify(object, /):
    """
    Convert a default, constant or override into the stored string form.

    Every value the engine stores is text; typed defaults are accepted for
    convenience and normalized here.

    Rules
    - str   → unchanged
    - bool  → "1" / "0" (checked before int, bool is an int subclass)
    - other → str(object)
    """
    if isinstance(object, str):
        return object
    if isinstance(object, bool):
        return "1" if object else "0"
    return str(object)


def basename(path, /):
    """
    Base name of a program path, ignoring trailing slashes ("/" stays "/").
    """
    if not isinstance(path, str):
        raise TypeError("basename() argument must be a string")
    stripped = path.rstrip("/")
    if not stripped:
        return path[:1]
    return stripped.rsplit("/", 1)[-1]


def columns():
    """
    Default terminal-width provider.

    rich resolves the width from the attached terminal, then from the COLUMNS
    environment variable, and falls back to 80 columns.
    """
    return Console().width


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Falsey: bool(Unset) is False, but it is not equivalent to None or "".
- Typical pattern: value = coalesce(user_value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "stringify",
    "basename",
    "columns",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
