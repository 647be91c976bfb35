"""Demonstrate classic inheritance idioms of prototype-based object models."""

import argparse
import sys
import textwrap
from typing import List, Sequence, TextIO

from icontract import require

import inheritance_idioms
from inheritance_idioms import idioms
from inheritance_idioms.objects import (
    MemberNotFoundError,
    MethodNotFoundError,
    UninitializedReceiverError,
)

assert inheritance_idioms.__doc__ == __doc__


class Parameters:
    """Represent the program parameters."""

    @require(lambda strategies: len(strategies) > 0)
    @require(lambda strategies: len(set(strategies)) == len(strategies))
    def __init__(
        self,
        strategies: Sequence[idioms.Strategy],
        explain: bool,
    ) -> None:
        """Initialize with the given values."""
        self.strategies = strategies
        self.explain = explain


# fmt: off
@require(
    lambda errors: all(
        len(error) > 0 and not error.startswith("\n")
        # This is necessary so that we do not have double bullet point.
        and not error.startswith("*") and not error.endswith("\n")
        for error in errors
    )
)
@require(lambda message: not message.endswith(":"))
@require(lambda message: not message.endswith("\n"))
@require(lambda message: not message.startswith("\n") and not message.startswith("*"))
# fmt: on
def write_error_report(message: str, errors: Sequence[str], stderr: TextIO) -> None:
    """
    Write the report (main ``message`` and details as ``errors``) to ``stderr``.

    This method helps us to have a unified way of showing errors.
    """
    stderr.write(f"{message}:\n")
    for error in errors:
        indented = textwrap.indent(error, "  ")
        indented = "* " + indented[2:]
        stderr.write(f"{indented}\n")


def write_tradeoffs(tradeoffs: idioms.Tradeoffs, stdout: TextIO) -> None:
    """Write the ``tradeoffs`` as wrapped paragraphs to ``stdout``."""
    stdout.write(f"== {tradeoffs.title} ==\n")

    paragraphs = [
        ("Advantages", tradeoffs.advantages),
        ("Disadvantages", tradeoffs.disadvantages),
    ]
    if tradeoffs.suitable_for is not None:
        paragraphs.append(("Suitable for", tradeoffs.suitable_for))

    for heading, text in paragraphs:
        stdout.write(
            textwrap.fill(f"{heading}: {text}", width=79, subsequent_indent="  ")
        )
        stdout.write("\n")


def execute(params: Parameters, stdout: TextIO, stderr: TextIO) -> int:
    """Run the program."""
    demonstrator = idioms.Demonstrator(stdout=stdout)

    for i, strategy in enumerate(params.strategies):
        if i > 0:
            stdout.write("\n")

        if params.explain:
            write_tradeoffs(
                tradeoffs=idioms.idiom_class(strategy).tradeoffs, stdout=stdout
            )

        try:
            demonstrator.idiom(strategy).demonstrate()
        except (
            MemberNotFoundError,
            MethodNotFoundError,
            UninitializedReceiverError,
        ) as exception:
            write_error_report(
                message=f"Failed to demonstrate the strategy {strategy.value}",
                errors=[str(exception)],
                stderr=stderr,
            )
            return 1

    return 0


def list_strategies(stdout: TextIO) -> None:
    """Write the available strategies to ``stdout``, one per line."""
    for cls in idioms.IDIOM_CLASSES:
        stdout.write(
            f"{cls.strategy.value} {cls.strategy.name.lower()}: "
            f"{cls.tradeoffs.title}\n"
        )


def parse_strategy(text: str) -> idioms.Strategy:
    """
    Parse the strategy given either by its number or by its name.

    :raise: :py:class:`ValueError` if ``text`` denotes no strategy
    """
    if text.isdigit():
        return idioms.Strategy(int(text))

    name = text.upper().replace("-", "_")
    if name not in idioms.Strategy.__members__:
        raise ValueError(f"Unexpected strategy: {text}")

    return idioms.Strategy[name]


def main(prog: str) -> int:
    """
    Execute the main routine.

    :param prog: name of the program to be displayed in the help
    :return: exit code
    """
    parser = argparse.ArgumentParser(prog=prog, description=__doc__)
    parser.add_argument(
        "--strategy",
        help=(
            "strategies to demonstrate, given by their number or their name; "
            "if not specified, all the strategies are demonstrated in order"
        ),
        nargs="+",
        metavar="STRATEGY",
    )
    parser.add_argument(
        "--explain",
        help="write the advantages and disadvantages before each demonstration",
        action="store_true",
    )
    parser.add_argument(
        "--list", help="list the available strategies and exit", action="store_true"
    )
    parser.add_argument(
        "--version", help="show the current version and exit", action="store_true"
    )

    # NOTE (mristin, 2022-01-14):
    # The module ``argparse`` is not flexible enough to understand special options such
    # as ``--version`` so we manually hard-wire.
    if "--version" in sys.argv and "--help" not in sys.argv:
        print(inheritance_idioms.__version__)
        return 0

    args = parser.parse_args()

    if args.list:
        list_strategies(stdout=sys.stdout)
        return 0

    strategies = []  # type: List[idioms.Strategy]
    if args.strategy is None:
        strategies = list(idioms.Strategy)
    else:
        errors = []  # type: List[str]
        for text in args.strategy:
            try:
                strategy = parse_strategy(text)
            except ValueError as exception:
                errors.append(str(exception))
                continue

            if strategy not in strategies:
                strategies.append(strategy)

        if len(errors) > 0:
            write_error_report(
                message="Failed to parse the --strategy",
                errors=errors,
                stderr=sys.stderr,
            )
            return 1

    params = Parameters(strategies=strategies, explain=bool(args.explain))

    return execute(params=params, stdout=sys.stdout, stderr=sys.stderr)


def entry_point() -> int:
    """Provide an entry point for a console script."""
    return main(prog="inheritance-idioms")


if __name__ == "__main__":
    sys.exit(main(prog="inheritance-idioms"))
