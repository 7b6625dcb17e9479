r"""
Helmsman option descriptors.

Overview
- Option: immutable declaration of one program option (names, kind, default,
  description, environment variable, conversion and validation rules).
- Kind: what the option stores and how a raw string is turned into it.
- DuplicatePolicy: what happens when a scalar-like option is given twice.

Kinds
  • SCALAR       one value converted by 'type' (str, int, float, enums, ...).
  • BOOLEAN      presence flag; an optional literal "true"/"false" may follow.
  • INCREMENTAL  integer counter, bumped by one on every occurrence.
  • ARRAY        list of 'type' values; each occurrence appends, split on 'separator'.
  • MAP          dict of 'keytype' → 'type'; "k=v" fragments split on 'separator'.
  • CUSTOM       any other type built from a string, or any option with a 'parser'.

When 'kind' is omitted it is inferred: bool → BOOLEAN, a configured parser or
a non-builtin type → CUSTOM, everything else → SCALAR.

Names
- name: primary identifier; also the default long name.
- long: `|`-delimited string or iterable of long aliases ("incremental|opt-9").
  An empty string removes every long alias (environment-only options).
- short: `|`-delimited string or iterable of one-character aliases ("i|j").
- Long names match case-insensitively and short names case-sensitively,
  unless configured otherwise.

Quick example:
    >>> from helmsman.arguments import Option, Kind, DuplicatePolicy
    >>> Option("opt-1", short="a", descr="first option", duplicates=DuplicatePolicy.FIRST_ONE_WINS)
    ...
    >>> Option("opt-9", int, short="i|j", long="incremental|opt-9", kind=Kind.INCREMENTAL)
    ...
    >>> Option("opt-12", int, keytype=int, kind=Kind.MAP, separator="::")
    ...
"""
import builtins
import enum
import functools
import operator
import re

from .utils import *

# Builtin scalar types; anything else (without an explicit kind) is CUSTOM.
_SCALARS = (str, int, float, complex)


class Kind(enum.Enum):
    SCALAR = "scalar"
    BOOLEAN = "boolean"
    INCREMENTAL = "incremental"
    ARRAY = "array"
    MAP = "map"
    CUSTOM = "custom"


class DuplicatePolicy(enum.Enum):
    """
    Rule applied when the same scalar-like option shows up again in one parse.

    - REJECT: raise DuplicateArgumentError.
    - FIRST_ONE_WINS: keep the first value and drop the later ones.
    - LAST_ONE_WINS: every occurrence overwrites the previous value.

    Arrays, maps and incrementals always accumulate and ignore the policy.
    """
    REJECT = "reject"
    FIRST_ONE_WINS = "first-one-wins"
    LAST_ONE_WINS = "last-one-wins"


class OptionType(type):
    """
    Metaclass that turns descriptor classes into introspectable records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by a private "_<name>" field (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name (camel-case split with hyphens).
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='opt-1', long=('opt-1',), short=('a',), ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the primary name and normalize the long/short aliases.

    Rules
    - name: non-empty string without whitespace or '='.
    - long: defaults to (name,); each alias must not start with '-' nor contain
      whitespace or '='.
    - short: defaults to (); each alias is exactly one character other than
      '-' or '='.

    Raises
    - TypeError: non-string names.
    - ValueError: empty, repeated, or badly shaped names.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"[^\s=]+", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty string without spaces or '='")

    long = aliases(coalesce(metadata["long"], name))
    for alias in long:
        if not re.fullmatch(r"[^\s=-][^\s=]*", alias):
            raise ValueError(f"{cls.__typename__} long name {alias!r} is not a valid option name")

    short = aliases(coalesce(metadata["short"], ""))
    for alias in short:
        if len(alias) != 1 or alias in "-=":
            raise ValueError(f"{cls.__typename__} short name {alias!r} must be a single character other than '-' or '='")

    metadata["long"] = long
    metadata["short"] = short


def _sanitize_kind(cls, metadata, /):
    """
    Internal: validate converters and infer or check the option kind.

    - type/keytype must be callable.
    - kind defaults to BOOLEAN for bool, CUSTOM for a parser or a non-builtin
      type (enums are builtin-like), SCALAR otherwise.
    - INCREMENTAL requires an integral type.
    """
    if not callable(type := metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")
    if not callable(metadata["keytype"]):
        raise TypeError(f"{cls.__typename__} 'keytype' must be callable")

    for name in ("validator", "parser"):
        if not (metadata[name] is Unset or callable(metadata[name])):
            raise TypeError(f"{cls.__typename__} {name!r} must be callable")

    if (kind := metadata["kind"]) is Unset:
        if type is bool:
            kind = Kind.BOOLEAN
        elif metadata["parser"] is not Unset:
            kind = Kind.CUSTOM
        elif type in _SCALARS or (isinstance(type, builtins.type) and issubclass(type, enum.Enum)):
            kind = Kind.SCALAR
        else:
            kind = Kind.CUSTOM
    elif not isinstance(kind, Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")

    if kind is Kind.INCREMENTAL and not (
            isinstance(type, builtins.type) and issubclass(type, int) and type is not bool
    ):
        raise TypeError(f"{cls.__typename__} {metadata['name']!r} is incremental, incrementals must be of integral type")

    metadata["kind"] = kind


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the remaining presentation and behavior fields.

    - descr: Unset or a non-blank string (becomes None when Unset).
    - envvar: Unset or a non-empty string without '=' (becomes None when Unset).
    - separator: non-empty string.
    - duplicates: a DuplicatePolicy.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not descr.strip():
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if not isinstance(envvar := metadata["envvar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'envvar' must be a string")
    elif isinstance(envvar, str) and not re.fullmatch(r"[^\s=]+", envvar):
        raise ValueError(f"{cls.__typename__} 'envvar' must be a non-empty string without spaces or '='")
    metadata["envvar"] = coalesce(envvar)

    if not isinstance(separator := metadata["separator"], str):
        raise TypeError(f"{cls.__typename__} 'separator' must be a string")
    elif not separator:
        raise ValueError(f"{cls.__typename__} 'separator' cannot be empty")

    if not isinstance(metadata["duplicates"], DuplicatePolicy):
        raise TypeError(f"{cls.__typename__} 'duplicates' must be a DuplicatePolicy")


class Option(metaclass=OptionType):
    """
    Immutable declaration of one program option.

    An Option never holds a parsed value; the owning OptionSet keeps the value
    store. The descriptor only answers questions about itself: which names it
    answers to, what its zero and initial values are, and how it is shown.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    - primary_long / primary_short: the first alias of each family, or None.
    - identifier: the name as a Python identifier ("opt-1" → "opt_1").
    """

    __introspectable__ = (
        "name",
        "long",
        "short",
        "kind",
        "type",
        "keytype",
        "default",
        "descr",
        "envvar",
        "case_sensitive_long",
        "case_sensitive_short",
        "validator",
        "parser",
        "separator",
        "bundleable",
        "duplicates",
    )
    __displayable__ = (
        "name",
        "long",
        "short",
        "kind",
        "default",
        "envvar",
        "duplicates",
    )

    def __new__(
            cls,
            name,
            /,
            type=str,
            *,
            long=Unset,
            short=Unset,
            kind=Unset,
            keytype=str,
            default=Unset,
            descr=Unset,
            envvar=Unset,
            case_sensitive_long=False,
            case_sensitive_short=True,
            validator=Unset,
            parser=Unset,
            separator=",",
            bundleable=True,
            duplicates=DuplicatePolicy.REJECT,
    ):
        """
        Construct an Option with the provided metadata.

        Parameters
        - name: str (positional-only)
          Primary identifier, unique within an OptionSet; default long name.
        - type: Callable[[str], T]
          Value converter (element converter for arrays, value converter for maps).
        - long / short: str | Iterable[str]
          Aliases; `|`-delimited when given as a string.
        - kind: Kind
          Storage kind; inferred when omitted.
        - keytype: Callable[[str], K]
          Key converter for maps.
        - default: Any
          Initial value; the kind's zero value when omitted.
        - descr: str
          Help text; may span several lines.
        - envvar: str
          Environment variable that seeds the option before argv parsing.
        - case_sensitive_long / case_sensitive_short: bool
        - validator: Callable[[T], bool]
          Predicate over each converted value; false raises InvalidArgumentError.
        - parser: Callable[[str], T]
          Replaces the generic type(value) conversion.
        - separator: str
          Splits array and map values.
        - bundleable: bool
          Whether the short names may be bundled ("-xyz").
        - duplicates: DuplicatePolicy
        """
        metadata = {
            "name": name,
            "long": long,
            "short": short,
            "kind": kind,
            "type": type,
            "keytype": keytype,
            "default": default,
            "descr": descr,
            "envvar": envvar,
            "case_sensitive_long": bool(case_sensitive_long),
            "case_sensitive_short": bool(case_sensitive_short),
            "validator": validator,
            "parser": parser,
            "separator": separator,
            "bundleable": bool(bundleable),
            "duplicates": duplicates,
        }
        _sanitize_names(cls, metadata)
        _sanitize_kind(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    @property
    def primary_long(self):
        return self._long[0] if self._long else None

    @property
    def primary_short(self):
        return self._short[0] if self._short else None

    @property
    def identifier(self):
        return re.sub(r"\W", "_", self._name)

    @property
    def valueless(self):
        """
        True when the option can stand alone without a following value.
        """
        return self._kind in (Kind.BOOLEAN, Kind.INCREMENTAL)

    def matches(self, name, /, *, short):
        """
        Check whether 'name' is one of this option's short or long aliases.

        Case rules follow case_sensitive_short / case_sensitive_long.
        """
        if short:
            names, sensitive = self._short, self._case_sensitive_short
        else:
            names, sensitive = self._long, self._case_sensitive_long
        if sensitive:
            return name in names
        return name.casefold() in (alias.casefold() for alias in names)

    def zero(self):
        """
        Return a fresh "empty" value of this option's kind.

        Used by the first-encounter reset and by environment seeding.
        """
        match self._kind:
            case Kind.ARRAY:
                return []
            case Kind.MAP:
                return {}
            case Kind.INCREMENTAL:
                return 0
            case Kind.BOOLEAN:
                return False
            case _:
                return self._type() if self._type in _SCALARS else None

    def initial(self):
        """
        Return the value an OptionSet starts with: a copy of the default, or zero().
        """
        if self._default is Unset:
            return self.zero()
        match self._kind:
            case Kind.ARRAY:
                return list(self._default)
            case Kind.MAP:
                return dict(self._default)
            case _:
                return self._default


__all__ = (
    "Option",
    "Kind",
    "DuplicatePolicy",
)


# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del OptionType
