"""
Helmsman command layer: nested commands, handler dispatch, and the CLI runner.

What this module provides
- Command: a named node carrying an optional payload (an OptionSet for its own
  options, or a CommandTree for sub-commands), a description and a handler.
- CommandTree: optional global options plus an ordered list of commands.
- invoke(target, prompt): parse a prompt, print help on request, dispatch
  handlers, and surface faults the way a shell user expects.

Core ideas
- Matching is by position: the first token equal to a command name splits
  argv into the parent's region and the command's region.
- Order matters only for help text and handler dispatch, never for matching.
- Every parse resets the active flags of the whole tree first.

Quick start
    from helmsman import Command, CommandTree, Option, OptionSet, invoke

    tree = CommandTree(
        Command("build", OptionSet(Option("jobs", int, short="j", default=1)), descr="compile"),
        options=OptionSet(Option("verbose", bool, short="v")),
    )

    @tree.command("clean", descr="remove artifacts")
    def clean(command):
        print("cleaning")

    if __name__ == "__main__":
        invoke(tree, shell=True)

See also
- helmsman.options for the option-set parse cycle.
- helmsman.faults for fault codes and rendering behavior.
"""
import logging
import re
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .faults import *
from .helptext import render_commands
from .options import OptionSet
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)

console = Console()


class Command:
    """
    One named command of a CommandTree.

    Parameters
    - name: str (positional-only)
      Matched case-sensitively against argv tokens; unique among siblings.
    - payload: OptionSet | CommandTree
      Options owned by the command, or a tree of sub-commands.
    - descr: str
      One-line description shown in the "Commands:" section.
    - handler: Callable[[Command], Any]
      Called with the command when it is active during dispatch().

    State
    - active: True when the last parse of the owning tree selected this
      command; bool(command) reads the same flag.
    """
    __typename__ = "command"

    def __init__(self, name, /, payload=Unset, *, descr=Unset, handler=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} 'name' must be a string")
        elif not re.fullmatch(r"[^\s-][^\s]*", name):
            raise ValueError(f"{self.__typename__} 'name' must be a non-empty string without spaces, not starting with '-'")
        if not isinstance(payload, OptionSet | CommandTree | Unset):
            raise TypeError(f"{self.__typename__} 'payload' must be an option-set or a command-tree")
        if not isinstance(descr, str | Unset):
            raise TypeError(f"{self.__typename__} 'descr' must be a string")
        if not (handler is Unset or callable(handler)):
            raise TypeError(f"{self.__typename__} 'handler' must be callable")

        self._name = name
        self._payload = coalesce(payload)
        self._descr = coalesce(descr) or None
        self._handler = coalesce(handler)
        self._active = False

    @property
    def name(self):
        return self._name

    @property
    def descr(self):
        return self._descr

    @property
    def payload(self):
        return self._payload

    @property
    def handler(self):
        return self._handler

    @property
    def active(self):
        return self._active

    @property
    def options(self):
        """
        The command's own options: its OptionSet payload, or the global options
        of its sub-command tree. None when there are none.
        """
        if isinstance(self._payload, CommandTree):
            return self._payload.options
        return self._payload

    @property
    def subtree(self):
        return self._payload if isinstance(self._payload, CommandTree) else None

    def __bool__(self):
        return self._active

    def __getattr__(self, name, /):
        # sub-commands are reachable directly: tree.cmd3.sub1
        if isinstance(payload := self.__dict__.get("_payload"), CommandTree):
            return getattr(payload, name)
        raise AttributeError(f"{self.__typename__} {self.__dict__.get('_name')!r} has no sub-command {name!r}")

    def __str__(self):
        parts = [f"active: {self._active}"]
        if isinstance(self._payload, OptionSet):
            parts.append(f"options: {self._payload}")
        elif isinstance(self._payload, CommandTree):
            parts.append(f"commands: {self._payload}")
        return "{ " + ", ".join(parts) + " }"

    def __repr__(self):
        return f"{self.__typename__}({', '.join(f'{name}={value!r}' for name, value in self.__rich_repr__())})"

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "active", self._active
        yield "payload", self._payload


class CommandTree:
    """
    Optional global options plus an ordered list of uniquely named commands.

    Parameters
    - *commands: Command
    - options: OptionSet
      Global options, parsed from the tokens before the first command name.

    Access
    - tree["cmd"] / tree.cmd: child command ('-' in names reads as '_').
    - tree.options: global OptionSet, or None.
    - tree.helptext: rendered help (see helmsman.helptext.render_commands).
    """
    __typename__ = "command-tree"

    def __init__(self, *commands, options=Unset):
        if not isinstance(options, OptionSet | Unset):
            raise TypeError(f"{self.__typename__} 'options' must be an option-set")
        self._options = coalesce(options)
        self._commands = {}
        for command in commands:
            self._attach(command)

    def _attach(self, command):
        if not isinstance(command, Command):
            raise TypeError(f"{self.__typename__} arguments must be commands, got {type(command).__name__}")
        if command.name in self._commands:
            raise ValueError(f"{self.__typename__} command {command.name!r} is declared more than once")
        self._commands[command.name] = command
        return command

    @property
    def options(self):
        return self._options

    @property
    def commands(self):
        return tuple(self._commands.values())

    @property
    def helptext(self):
        return render_commands(self)

    def command(self, name, /, payload=Unset, *, descr=Unset):
        """
        Decorator registering a handler as a new command of this tree.

        Returns the created Command:

            @tree.command("clean", descr="remove artifacts")
            def clean(command): ...
        """
        def wrapper(handler, /):
            return self._attach(Command(name, payload, descr=descr, handler=handler))
        return wrapper

    def reset(self):
        """
        Deactivate every command of the tree, recursively.
        """
        for command in self._commands.values():
            command._active = False
            if command.subtree is not None:
                command.subtree.reset()

    def parse(self, args, /):
        """
        Parse 'args' against the tree.

        Steps
        1. deactivate every command of the tree.
        2. split argv at the first token equal to a command name.
        3. feed the leading tokens to the global options, if any.
        4. activate the found command and feed it the remaining tokens (its
           OptionSet parses them, its CommandTree recurses, no payload ignores
           them).

        Returns
        - list[str]: leftovers of the global options, or the leading tokens
          when there are no global options.
        """
        if isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        args = list(args)
        self.reset()

        cut = next((index for index, arg in enumerate(args) if arg in self._commands), None)
        leading = args if cut is None else args[:cut]
        leftovers = self._options.parse(leading) if self._options is not None else leading

        if cut is not None:
            command = self._commands[args[cut]]
            command._active = True
            logger.debug("activated command %r", command.name)
            if command.payload is not None:
                command.payload.parse(args[cut + 1:])
        return leftovers

    def dispatch(self):
        """
        Call the handler of every active command, in declared order, then
        dispatch its sub-command tree. Handler exceptions propagate.
        """
        for command in self._commands.values():
            if not command.active:
                continue
            if command.handler is not None:
                logger.debug("dispatching command %r", command.name)
                command.handler(command)
            if command.subtree is not None:
                command.subtree.dispatch()

    def __getitem__(self, name, /):
        try:
            return self._commands[name]
        except KeyError:
            raise KeyError(f"{self.__typename__} has no command {name!r}") from None

    def __getattr__(self, name, /):
        for command in self.__dict__.get("_commands", {}).values():
            if command.name == name or re.sub(r"\W", "_", command.name) == name:
                return command
        raise AttributeError(f"{self.__typename__} has no command {name!r}")

    def __contains__(self, name, /):
        return name in self._commands

    def __iter__(self):
        return iter(self._commands.values())

    def __len__(self):
        return len(self._commands)

    def __str__(self):
        parts = [f"options: {self._options}"] if self._options is not None else []
        parts += [f"{command.name}: {command}" for command in self._commands.values()]
        return "{ " + ", ".join(parts) + " }"

    def __repr__(self):
        return f"{self.__typename__}({', '.join(f'{name}={value!r}' for name, value in self.__rich_repr__())})"

    def __rich_repr__(self):
        yield "commands", self.commands
        yield "options", self._options


def _tokenize(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    elif isinstance(prompt, str):
        return shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("invoke() prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("invoke() prompt must be a string or an iterable of strings")


def invoke(target, prompt=Unset, /, *, shell=False, fancy=False, colorful=False):
    """
    Convenience runner for option sets and command trees.

    Parameters
    - target: OptionSet | CommandTree
    - prompt:
      • Unset: read sys.argv[1:].
      • str: split with shlex.split.
      • Iterable[str]: use items as tokens (each must be str).
    - shell: print faults to stderr and exit with status 1 instead of raising.
    - fancy / colorful: fault rendering options (see helmsman.faults).

    Behavior
    - Parse the tokens; when the global "help" flag was given, print the help
      text to stdout and stop; otherwise dispatch handlers (trees only).

    Returns
    - list[str]: leftovers of the global options.
    """
    if not isinstance(target, OptionSet | CommandTree):
        raise TypeError("invoke() first argument must be an option-set or a command-tree")
    tokens = _tokenize(prompt)

    try:
        leftovers = target.parse(tokens)
    except OptionException as fault:
        if not shell:
            raise
        trigger(fault, shell=True, fancy=fancy, colorful=colorful)

    options = target if isinstance(target, OptionSet) else target.options
    if options is not None and options["help"]:
        console.print(Text(target.helptext), soft_wrap=True)
        return leftovers

    if isinstance(target, CommandTree):
        target.dispatch()
    return leftovers


__all__ = (
    "Command",
    "CommandTree",
    "invoke",
)
