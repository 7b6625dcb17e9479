r"""
Helmsman tokenizer: classify one argv token and pair it with its value.

Grammar
  --                 terminator; everything after it is left to the caller
  --name=value       long name with an inline value (1 token)
  --name value       long name with the following token as value (2 tokens)
  -x value           single short name (2 tokens)
  -xyz value         bundle of bundleable short flags sharing the next token (2 tokens)
  -xvalue / -x=value single short name with a stuck value (1 token)
  -xyzvalue          bundle sharing a stuck value (1 token)
  -xyz=value         bundle sharing an inline value (1 token)
  anything else      stray token (including a lone "-")

Notes
- The tokenizer never assigns anything; it only reports which names were
  given and which text may serve as their value. The assignment engine decides
  whether a following token was actually consumed.
- A lexicon answers lookup(name, short=...) with the matching Option or None.
- When a separate value is required but argv is exhausted, a bundle made only
  of boolean/incremental options gets no value instead of failing.
"""
import enum
import logging
from collections import namedtuple

from .faults import *
from .utils import Unset

logger = logging.getLogger(__name__)


class Form(enum.Enum):
    TERMINATOR = "terminator"
    STRAY = "stray"
    SWITCH = "switch"


Token = namedtuple("Token", (
    "form",
    "text",
    "names",
    "value",
    "steps",
    "short",
))
Token.__doc__ = """
One classified argv token.

- form: Form of the token.
- text: the raw token as found in argv.
- names: option names carried by a SWITCH (empty for unknown short regions).
- value: candidate value text, or None when there is none.
- steps: argv positions covered, assuming the value is consumed.
- short: True when the names are short names.
"""


def _prefix(rest, predicate):
    """
    Longest prefix of 'rest' whose every character satisfies 'predicate'.
    """
    for index, character in enumerate(rest):
        if not predicate(character):
            return rest[:index]
    return rest


def _separate(text, names, following, lexicon, /, *, short):
    # names expecting the next argv entry as their value
    if following is not Unset:
        return Token(Form.SWITCH, text, names, following, 2, short)

    options = [lexicon.lookup(name, short=short) for name in names]
    if all(option is not None for option in options) and not all(option.valueless for option in options):
        raise MissingArgumentError(
            f"option {text!r} requires a value",
            token=text,
            hint=f"pass a value after {text!r}",
        )
    return Token(Form.SWITCH, text, names, None, 1, short)


def read(args, index, lexicon, /):
    """
    Classify args[index] and return the resulting Token.

    Raises
    - MissingArgumentError: a known option requiring a separate value ends argv.
    - MalformedArgumentError: a short bundle mixes bundleable and non-bundleable
      names.
    """
    text = args[index]
    following = args[index + 1] if index + 1 < len(args) else Unset

    if text == "--":
        token = Token(Form.TERMINATOR, text, (), None, 1, False)

    elif text.startswith("--"):
        name, equals, value = text[2:].partition("=")
        if equals:
            token = Token(Form.SWITCH, text, (name,), value, 1, False)
        else:
            token = _separate(text, (name,), following, lexicon, short=False)

    elif text.startswith("-") and len(text) > 1:
        rest = text[1:]
        if len(rest) == 1:
            token = _separate(text, (rest,), following, lexicon, short=True)
        else:
            def known(character):
                return lexicon.lookup(character, short=True) is not None

            def bundleable(character):
                return (option := lexicon.lookup(character, short=True)) is not None and option.bundleable

            bundle, shorts = _prefix(rest, bundleable), _prefix(rest, known)
            if not shorts:
                # unknown leading short name, reported by the caller
                token = Token(Form.SWITCH, text, (), None, 1, True)
            elif bundle == rest:
                token = _separate(text, tuple(rest), following, lexicon, short=True)
            elif len(shorts) != 1 and len(shorts) != len(bundle):
                raise MalformedArgumentError(
                    f"bundled args are not all bundleable in {text!r}",
                    code=FaultCode.UNBUNDLEABLE_ARGUMENT,
                    token=text,
                    hint="give non-bundleable short options separately",
                )
            else:
                value = rest[len(shorts):]
                if value.startswith("="):
                    value = value[1:]
                token = Token(Form.SWITCH, text, tuple(shorts), value, 1, True)

    else:
        token = Token(Form.STRAY, text, (), None, 1, False)

    logger.debug("read %r as %s %r (value=%r, steps=%d)", text, token.form.value, token.names, token.value, token.steps)
    return token


__all__ = (
    "Form",
    "Token",
    "read",
)
