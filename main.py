from rich.pretty import pprint

from helmsman import *


def build(command):
    pprint(command.options.values())


tree = CommandTree(
    Command(
        "build",
        OptionSet(
            Option("jobs", int, short="j", default=1, descr="Number of parallel jobs"),
            Option("define", kind=Kind.MAP, short="D", descr="Extra variables as key=value pairs"),
        ),
        descr="Compile the project",
        handler=build,
    ),
    options=OptionSet(
        Option("verbose", int, short="v", kind=Kind.INCREMENTAL, descr="Increase output verbosity"),
        Option("profile", envvar="HELMSMAN_PROFILE", descr="Settings profile to load"),
    ),
)


@tree.command("clean", descr="Remove build artifacts")
def clean(command):
    pprint(command)


if __name__ == '__main__':
    invoke(tree, shell=True, fancy=True, colorful=True)
