"""
Environment fallback for options declaring an 'envvar'.

Seeding happens before argv is read: the variable's text is converted from the
option's zero value without marking the option encountered, so a later argv
occurrence still resets and fully overrides it.
"""
import logging
import os

from .assignment import convert
from .faults import MalformedArgumentError

logger = logging.getLogger(__name__)


def resolve(options, store, environ=None, /):
    """
    Seed 'store' from the environment for every option with an envvar.

    Parameters
    - options: iterable of Option descriptors.
    - store: the Store receiving the values.
    - environ: mapping of variable names to text; os.environ when None.

    Variables that are missing or empty are ignored.

    Raises
    - MalformedArgumentError: the variable's text cannot be converted.
    - InvalidArgumentError: the validator rejected the converted value.
    """
    if environ is None:
        environ = os.environ
    for option in options:
        if option.envvar is None or not (text := environ.get(option.envvar)):
            continue
        try:
            store.values[option.name], _ = convert(option, option.zero(), text)
        except MalformedArgumentError as fault:
            raise MalformedArgumentError(
                f"could not set {option.envvar!r} to {text!r}: {fault}",
                code=fault.options["code"],
                option=option.name,
                envvar=option.envvar,
                token=text,
            ) from fault
        logger.debug("seeded %r from $%s = %r", option.name, option.envvar, store.values[option.name])


__all__ = (
    "resolve",
)
