r"""
Helmsman help renderer: plain-text help for option sets and command trees.

Layout (column widths are computed from the options that carry a description)

    Options:
      -h  --help          Displays this help message
      -a  --opt-1         This is the description for option 1
          --opt-6
      -i  --incremental   sets some level incremental thingy

    Environment Vars:
      OPT_4    See: --opt-4
      OPT_16   THis one only takes an environment variable

- Short column: "-x" or two blanks; long column: "--name" padded to the widest
  described long name; descriptions start three spaces later and wrap at
  column 80 with continuation lines aligned under the description column.
- Environment entries show the option's own description when the option has
  no flags, otherwise a "See: --long" (or "See: -x") pointer.

The output is a deterministic function of the option list.
"""
import re

START = 2
SHORT = 2
GAP = 2
DESCRIPTION_GAP = 3
WIDTH = 80


def wrap(indent, text, /, width=WIDTH):
    """
    Word-wrap 'text' for a column starting at 'indent'.

    - Existing newlines are kept; each line starts again at 'indent'.
    - Words are split on single whitespace characters, so leading
      indentation inside a line survives.
    - The running column counts word lengths; once it passes 'width' the
      next word goes to a new line indented by 'indent'.
    """
    rows = []
    for line in text.splitlines():
        words = re.split(r"\s", line)
        row, column = [], indent
        for index, word in enumerate(words):
            row.append(word)
            column += len(word)
            if column > width and index < len(words) - 1:
                rows.append(" ".join(row).rstrip())
                row, column = [], indent
        rows.append(" ".join(row).rstrip())
    return ("\n" + " " * indent).join(rows)


def render(options, /):
    """
    Render the "Options:" and "Environment Vars:" sections for 'options'.

    'options' is any iterable of Option descriptors, usually an OptionSet.
    """
    options = list(options)
    described = [option for option in options if option.descr]
    long_width = max((len(option.primary_long or "") for option in described), default=0) + 2
    envvar_width = max((len(option.envvar or "") for option in described), default=0)
    indent = START + SHORT + GAP + long_width + DESCRIPTION_GAP

    lines, environment = [], []
    for option in options:
        flagged = bool(option.primary_short or option.primary_long)
        linked = ""
        if flagged:
            if not lines:
                lines.append("Options:")
            short = f"-{option.primary_short}" if option.primary_short else " " * SHORT
            long = f"--{option.primary_long}" if option.primary_long else ""
            linked = long or short
            line = " " * START + short + " " * GAP + long.ljust(long_width) + " " * DESCRIPTION_GAP
            if option.descr:
                line += wrap(indent, option.descr)
            else:
                line = line.rstrip()
            lines.append(line)
        if option.envvar is not None:
            environment.append((option, flagged, linked))

    text = "\n".join(lines)
    for index, (option, flagged, linked) in enumerate(environment):
        if index == 0:
            if text:
                text += "\n\n"
            text += "Environment Vars:"
        text += "\n" + " " * START + option.envvar.ljust(envvar_width) + " " * DESCRIPTION_GAP
        if not flagged and option.descr:
            text += wrap(START + envvar_width + DESCRIPTION_GAP, option.descr)
        else:
            text += "See: " + linked
    return text


def render_commands(tree, /):
    """
    Render the help of a command tree: the root option help (when the tree
    has an option set), then a "Commands:" section listing each command and
    its description in declared order.
    """
    text = ""
    if tree.options is not None:
        text += render(tree.options) + "\n"
    if len(tree):
        text += "Commands:\n"
    text += "\n".join(
        f"  {command.name}" + (f"  {command.descr}" if command.descr else "")
        for command in tree
    )
    return text


__all__ = (
    "wrap",
    "render",
    "render_commands",
)
