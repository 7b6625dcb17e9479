r"""
Helmsman option sets: declare options, parse argv, read back typed values.

An OptionSet owns an ordered tuple of Option descriptors (a synthetic
"help"/"h" flag always comes first) and a value store. Parsing walks argv with
the tokenizer, hands every matched name to the assignment engine and routes
anything it does not recognize to an optional fallback.

Parse cycle
1. forget which options were encountered during the previous parse.
2. seed options declaring an 'envvar' from the environment.
3. skip argv[0] when it names the running program (sys.argv may be passed whole).
4. read tokens until argv is exhausted or "--" is met.

Leftovers
- parse() returns the tokens after "--" when a terminator was seen, and the
  stray (non-option) tokens otherwise.
- Every token handed to the fallback is also recorded in 'unknowns'.
- A fallback returning a truthy value stops the parse with a
  MalformedArgumentError.

Quick example:
    >>> from helmsman import Option, OptionSet
    >>> options = OptionSet(
    ...     Option("name", short="n", descr="who to greet"),
    ...     Option("count", int, short="c", default=1),
    ... )
    >>> options.parse(["-n", "world", "--count=2", "rest"])
    ['rest']
    >>> options.name, options["count"]
    ('world', 2)
"""
import logging
import os.path
import sys
from collections.abc import Iterable
from types import MappingProxyType

from .arguments import Option
from .assignment import Outcome, Store, assign
from .environment import resolve
from .faults import *
from .helptext import render
from .tokens import Form, read
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)

HELP = Option("help", bool, short="h", descr="Displays this help message")


def _check_conflicts(options):
    """
    Internal: reject repeated primary names and overlapping aliases.

    Two options overlap when either one answers to one of the other's long
    (or short) aliases under its own case rules.
    """
    names = set()
    for option in options:
        if option.name in names:
            raise ValueError(f"option-set option {option.name!r} is declared more than once")
        names.add(option.name)

    for index, option in enumerate(options):
        for other in options[:index]:
            for short, prefix in ((False, "--"), (True, "-")):
                for alias in (*(other.short if short else other.long), *(option.short if short else option.long)):
                    if option.matches(alias, short=short) and other.matches(alias, short=short):
                        raise ValueError(
                            f"option-set option {option.name!r} overlaps {other.name!r} on {prefix}{alias}"
                        )


def _sanitized(args):
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("parse() argument must be an iterable of strings")
    args = list(args)
    for arg in args:
        if not isinstance(arg, str):
            raise TypeError("parse() argument must be an iterable of strings")
    return args


class OptionSet:
    """
    Ordered collection of options plus their current values.

    Parameters
    - *options: Option
      Declared options, in help order (after the synthetic help flag).
    - fallback: Callable[[str], bool]
      Called with every unrecognized token; a truthy result aborts the parse.
    - environ: Mapping[str, str]
      Environment used for envvar seeding; os.environ when omitted.

    Access
    - options["opt-1"] / options.opt_1: current value of an option.
    - values(): read-only snapshot of every value.
    - helptext: rendered help (see helmsman.helptext).
    """
    __typename__ = "option-set"

    def __init__(self, *options, fallback=Unset, environ=Unset):
        for option in options:
            if not isinstance(option, Option):
                raise TypeError(f"{self.__typename__} arguments must be options, got {type(option).__name__}")
        if not (fallback is Unset or callable(fallback)):
            raise TypeError(f"{self.__typename__} fallback must be callable")

        options = (HELP, *options)
        _check_conflicts(options)

        self._options = options
        self._store = Store(options)
        self._fallback = fallback
        self._environ = coalesce(environ, None)
        self._unknowns = []

    @property
    def options(self):
        return self._options

    @property
    def unknowns(self):
        """
        Tokens reported as unknown during the last parse.
        """
        return list(self._unknowns)

    @property
    def helptext(self):
        return render(self._options)

    def fallback(self, fallback, /):
        """
        Register the handler for unrecognized tokens.

        Returns the same callable, enabling decorator-style usage:
        @options.fallback
        """
        if not callable(fallback):
            raise TypeError(f"{self.__typename__} fallback must be callable")
        self._fallback = fallback
        return fallback

    def lookup(self, name, /, *, short):
        """
        Return the option answering to 'name' (a short or long alias), or None.
        """
        for option in self._options:
            if option.matches(name, short=short):
                return option
        return None

    def values(self):
        return MappingProxyType(dict(self._store.values))

    def _unknown(self, text):
        self._unknowns.append(text)
        logger.debug("unknown argument %r", text)
        if self._fallback is not Unset and self._fallback(text):
            raise MalformedArgumentError(
                f"unknown argument {text!r}",
                code=FaultCode.UNKNOWN_ARGUMENT,
                token=text,
            )

    def parse(self, args, /, *, environ=Unset):
        """
        Parse 'args' into this option set.

        Parameters
        - args: Iterable[str]
          Tokens to parse; a leading program name is skipped.
        - environ: Mapping[str, str]
          Overrides the environment used for envvar seeding in this call.

        Returns
        - list[str]: tokens after "--", or the stray tokens when there is none.

        Raises
        - MalformedArgumentError, InvalidArgumentError, DuplicateArgumentError,
          MissingArgumentError: see helmsman.faults. Values assigned before the
          failure are kept.
        """
        args = _sanitized(args)
        self._store.reset()
        self._unknowns = []
        resolve(self._options, self._store, coalesce(environ, self._environ))

        index = 0
        if args and sys.argv and sys.argv[0] and os.path.basename(args[0]) == os.path.basename(sys.argv[0]):
            index = 1

        leftovers = []
        while index < len(args):
            token = read(args, index, self)
            match token.form:
                case Form.TERMINATOR:
                    logger.debug("terminator found, leaving %r", args[index + 1:])
                    return args[index + 1:]
                case Form.STRAY:
                    self._unknown(token.text)
                    leftovers.append(token.text)
                    steps = 1
                case Form.SWITCH:
                    consumed = False
                    for name in token.names or (None,):
                        option = None if name is None else self.lookup(name, short=token.short)
                        outcome = Outcome.NO_MATCH if option is None else assign(option, self._store, token.value)
                        if outcome is Outcome.NO_MATCH:
                            self._unknown(token.text)
                            break
                        consumed = consumed or outcome is Outcome.CONSUMED
                    # a value shared by a bundle is used when any name consumed it
                    steps = token.steps if consumed else 1
            index += steps
        return leftovers

    def __getitem__(self, name, /):
        try:
            return self._store.values[name]
        except KeyError:
            raise KeyError(f"{self.__typename__} has no option {name!r}") from None

    def __getattr__(self, name, /):
        for option in self.__dict__.get("_options", ()):
            if option.identifier == name:
                return self._store.values[option.name]
        raise AttributeError(f"{self.__typename__} has no option {name!r}")

    def __contains__(self, name, /):
        return name in self._store.values

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __str__(self):
        return "{ " + ", ".join(f"{name}: {value}" for name, value in self._store.values.items()) + " }"

    def __repr__(self):
        return f"{self.__typename__}({', '.join(f'{name}={value!r}' for name, value in self.__rich_repr__())})"

    def __rich_repr__(self):
        yield from self._store.values.items()


__all__ = (
    "OptionSet",
)
