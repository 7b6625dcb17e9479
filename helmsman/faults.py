"""
Helmsman faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse error.
- OptionException: base type carrying a message plus keyword context; knows
  how to render itself through rich in a friendly, lowercased way.
- MalformedArgumentError / InvalidArgumentError / DuplicateArgumentError /
  MissingArgumentError: the four error kinds raised by the parsing engine.
- trigger(): surface a fault, raising it or (in shell mode) printing it and exiting.

Error kinds
- malformed: unparseable token, invalid bundling, a conversion failure, or an
  unknown argument the host asked to stop on.
- invalid: a validator rejected a converted value.
- duplicate: an option with the reject policy was given twice.
- missing: an option requiring a separate value was the last token.

Integration
- The engine always raises; nothing is retried. Hosts that want terminal
  output call trigger(fault, shell=True, ...) or go through invoke().
- Host styling can be tuned by a __styles__ mapping in __main__, codes remapped
  by __codes__, and the displayed program name set by __prog__.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - tokens (1111x)
      • MALFORMED_ARGUMENT, UNBUNDLEABLE_ARGUMENT, UNKNOWN_ARGUMENT
    - values (1112x)
      • MISSING_ARGUMENT, INVALID_ARGUMENT, UNCONVERTIBLE_ARGUMENT, MALFORMED_PAIR
    - repetitions (1113x)
      • DUPLICATE_ARGUMENT
    """
    # --- token errors ---
    MALFORMED_ARGUMENT          = 11111
    UNBUNDLEABLE_ARGUMENT       = 11112
    UNKNOWN_ARGUMENT            = 11113

    # --- value errors ---
    MISSING_ARGUMENT            = 11121
    INVALID_ARGUMENT            = 11122
    UNCONVERTIBLE_ARGUMENT      = 11123
    MALFORMED_PAIR              = 11124

    # --- repetition errors ---
    DUPLICATE_ARGUMENT          = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionException(Exception):
    """
    base class of every parse error.

    carries a message and a read-only mapping of keyword context. the
    subclasses fill in default 'code' and 'title' entries so that a bare
    MissingArgumentError("...") still renders sensibly.
    """
    __code__ = FaultCode.MALFORMED_ARGUMENT
    __title__ = "bad argument"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).__code__,
            "title": type(self).__title__,
        } | options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(
            getattr(main, "__prog__", self.options.get("prog") or os.path.basename(sys.argv[0]) or "helmsman"),
            styler("prog-name")
        )

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        body = [message]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*body), title=header, title_align="left")

        return Group(header, *body)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class MalformedArgumentError(OptionException):
    __code__ = FaultCode.MALFORMED_ARGUMENT
    __title__ = "malformed argument"


class InvalidArgumentError(OptionException):
    __code__ = FaultCode.INVALID_ARGUMENT
    __title__ = "invalid argument"


class DuplicateArgumentError(OptionException):
    __code__ = FaultCode.DUPLICATE_ARGUMENT
    __title__ = "duplicate argument"


class MissingArgumentError(OptionException):
    __code__ = FaultCode.MISSING_ARGUMENT
    __title__ = "missing argument"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see OptionException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=True the fault is printed to stderr and the process exits with
      status 1; otherwise the (replaced) fault is raised.

    typical options
    - shell, fancy, colorful, prog, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "OptionException",
    "MalformedArgumentError",
    "InvalidArgumentError",
    "DuplicateArgumentError",
    "MissingArgumentError",
    "trigger",
)
