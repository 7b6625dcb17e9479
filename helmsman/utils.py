"""
Helmsman utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the descriptor, option-set and command layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated helpers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) with defensive copies
    for containers to discourage accidental mutation of public state.

- aliases(value)
  • Normalize a `|`-delimited alias string (or an iterable of names) into an ordered tuple.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> aliases("incremental|opt-9")
    ('incremental', 'opt-9')
"""
import builtins
import functools
from collections.abc import Iterable, Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.
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
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
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


def _immortalize(object):
    """
    Recursively copy container values so callers never hold the backing store.

    - Sequence (non-string) → new list
    - Mapping               → new dict (keys preserved)
    - Set                   → new set
    - anything else         → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance. Containers are
    copied on the way out (tuples stay tuples so alias lists remain hashable).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        object = getattr(self, "_" + name)
        if isinstance(object, tuple):
            return object
        return _immortalize(object)

    return property(getter)


def aliases(value, /):
    """
    Normalize option aliases into an ordered tuple of unique, non-empty names.

    Accepted inputs
    - str: `|`-delimited names, e.g. "i|j" → ("i", "j"); "" → ()
    - Iterable[str]: each item is one name

    Raises
    - TypeError: when the value is neither a string nor an iterable of strings.
    - ValueError: when a name repeats.
    """
    if isinstance(value, str):
        value = value.split("|")
    elif not isinstance(value, Iterable):
        raise TypeError("aliases must be a string or an iterable of strings")

    names = []
    for name in value:
        if not isinstance(name, str):
            raise TypeError("aliases must be a string or an iterable of strings")
        if not (name := name.strip()):
            continue
        if name in names:
            raise ValueError(f"alias {name!r} is repeated")
        names.append(name)
    return tuple(names)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Singleton, distinct from None and falsey. Materialize with coalesce().
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "aliases",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
