r"""
Helmsman assignment engine: turn raw text into typed option values.

One generic engine is driven by Option.kind:

  BOOLEAN      set True; a following "true"/"false" literal (any case) is used
               and consumed, anything else is left for the next round.
  INCREMENTAL  add one, never consume a value.
  ARRAY        split on the separator, drop empty fragments, convert and
               validate each element, append in order.
  MAP          split on the separator, split each fragment on the first '=',
               convert key and value, insert or overwrite by key.
  SCALAR       parser(value) when configured, else type(value); enums are
  CUSTOM       looked up by member name; then the validator.

Parse-time state lives in a Store: the current values and the names
encountered during the ongoing parse call. The first encounter of an option
resets its value to the kind's zero value, so defaults and environment values
never leak into values given on the command line.
"""
import enum
import logging

from .arguments import Kind, DuplicatePolicy
from .faults import *
from .utils import Unset

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """
    Result of offering a value to an option.

    - CONSUMED: the value text was used.
    - UNCONSUMED: the option was set but the value text was left alone.
    - NO_MATCH: no option answers to the name (reported by the option set).
    """
    CONSUMED = "consumed"
    UNCONSUMED = "unconsumed"
    NO_MATCH = "no-match"


class Store:
    """
    Mutable value store of an option set.

    - values: option name → current typed value.
    - encountered: names assigned from argv during the current parse call.
    """

    def __init__(self, options=(), /):
        self.values = {option.name: option.initial() for option in options}
        self.encountered = set()

    def reset(self):
        """
        Forget which options were encountered; values are kept.
        """
        self.encountered.clear()

    def __repr__(self):
        return f"store(values={self.values!r}, encountered={sorted(self.encountered)!r})"


def _literal(value):
    """
    Return True/False for a boolean literal, None for anything else.
    """
    if isinstance(value, str):
        match value.lower():
            case "true":
                return True
            case "false":
                return False
    return None


def _cast(option, converter, text):
    try:
        if isinstance(converter, type) and issubclass(converter, enum.Enum):
            return converter[text]
        return converter(text)
    except OptionException:
        raise
    except Exception as error:
        raise MalformedArgumentError(
            f"cannot convert {text!r} for option {option.name!r}",
            code=FaultCode.UNCONVERTIBLE_ARGUMENT,
            option=option.name,
            token=text,
        ) from error


def _validate(option, value):
    if option.validator is not Unset and not option.validator(value):
        raise InvalidArgumentError(
            f"value {value!r} is not valid for option {option.name!r}",
            option=option.name,
        )
    return value


def _element(option, text):
    converter = option.parser if option.parser is not Unset else option.type
    return _validate(option, _cast(option, converter, text))


def convert(option, current, text, /):
    """
    Apply 'text' to the 'current' value of 'option' according to its kind.

    Returns
    - (value, consumed): the new value, and whether 'text' was used.

    Raises
    - MalformedArgumentError: conversion failed, or a map fragment has no '='.
    - InvalidArgumentError: the validator rejected a converted value.
    - MissingArgumentError: a value-taking option was offered no text.
    """
    match option.kind:
        case Kind.BOOLEAN:
            literal = _literal(text)
            return (True if literal is None else literal), literal is not None
        case Kind.INCREMENTAL:
            return current + 1, False

    if text is None:
        raise MissingArgumentError(f"option {option.name!r} requires a value", option=option.name)

    match option.kind:
        case Kind.ARRAY:
            fragments = (fragment for fragment in text.split(option.separator) if fragment)
            return [*current, *(_element(option, fragment) for fragment in fragments)], True
        case Kind.MAP:
            mapping = dict(current)
            for fragment in text.split(option.separator):
                if not fragment:
                    continue
                key, equals, value = fragment.partition("=")
                if not equals:
                    raise MalformedArgumentError(
                        f"expected 'key=value' for option {option.name!r}, got {fragment!r}",
                        code=FaultCode.MALFORMED_PAIR,
                        option=option.name,
                        token=fragment,
                    )
                mapping[_cast(option, option.keytype, key)] = _cast(option, option.type, value)
            return mapping, True
        case _:
            return _element(option, text), True


def assign(option, store, value, /):
    """
    Offer 'value' (text or None) to a matched 'option' and update 'store'.

    Steps
    1. first encounter in this parse: reset to the zero value and mark it.
    2. later encounters of SCALAR/BOOLEAN/CUSTOM options follow the duplicate
       policy (arrays, maps and incrementals always accumulate).
    3. convert by kind (see convert()).

    Returns
    - Outcome.CONSUMED or Outcome.UNCONSUMED.

    Raises
    - DuplicateArgumentError: REJECT policy and the option was already given.
    - anything convert() raises.
    """
    name = option.name
    if name not in store.encountered:
        store.values[name] = option.zero()
        store.encountered.add(name)
    elif option.kind in (Kind.SCALAR, Kind.BOOLEAN, Kind.CUSTOM):
        match option.duplicates:
            case DuplicatePolicy.REJECT:
                raise DuplicateArgumentError(
                    f"option {name!r} was given more than once",
                    option=name,
                    hint=f"give {name!r} only once",
                )
            case DuplicatePolicy.FIRST_ONE_WINS:
                if option.kind is Kind.BOOLEAN and _literal(value) is None:
                    outcome = Outcome.UNCONSUMED
                else:
                    outcome = Outcome.CONSUMED
                logger.debug("kept first value of %r, %s", name, outcome.value)
                return outcome

    store.values[name], consumed = convert(option, store.values[name], value)
    outcome = Outcome.CONSUMED if consumed else Outcome.UNCONSUMED
    logger.debug("assigned %r = %r, %s", name, store.values[name], outcome.value)
    return outcome


__all__ = (
    "Outcome",
    "Store",
    "convert",
    "assign",
)
