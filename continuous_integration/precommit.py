#!/usr/bin/env python3

"""Run pre-commit checks on the repository."""
import argparse
import enum
import os
import pathlib
import shlex
import subprocess
import sys
from typing import Optional, Mapping, Sequence

# pylint: disable=unnecessary-comprehension

#: Directories and files checked by the formatters and the linters
TARGETS = ["inheritance_idioms", "continuous_integration", "tests", "setup.py"]


class Step(enum.Enum):
    """Enumerate different pre-commit steps."""

    REFORMAT = "reformat"
    MYPY = "mypy"
    PYLINT = "pylint"
    TEST = "test"
    DOCTEST = "doctest"
    CHECK_INIT_AND_SETUP_COINCIDE = "check-init-and-setup-coincide"


def call_and_report(
    verb: str,
    cmd: Sequence[str],
    cwd: Optional[pathlib.Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Wrap a subprocess call with the reporting to STDERR if it failed.

    Return 1 if there is an error and 0 otherwise.
    """
    exit_code = subprocess.call(cmd, cwd=str(cwd) if cwd is not None else None, env=env)

    if exit_code != 0:
        cmd_str = " ".join(shlex.quote(part) for part in cmd)
        print(
            f"Failed to {verb} with exit code {exit_code}: {cmd_str}", file=sys.stderr
        )

    return exit_code


def run_step(step: Step, overwrite: bool, repo_root: pathlib.Path) -> int:
    """Execute a single pre-commit ``step`` and return its exit code."""
    if step is Step.REFORMAT:
        print("Re-formatting...")
        if overwrite:
            return call_and_report(
                verb="black", cmd=["black"] + TARGETS, cwd=repo_root
            )

        return call_and_report(
            verb="check with black", cmd=["black", "--check"] + TARGETS, cwd=repo_root
        )

    if step is Step.MYPY:
        print("Mypy'ing...")
        config_file = pathlib.Path("continuous_integration") / "mypy.ini"
        return call_and_report(
            verb="mypy",
            cmd=["mypy", "--strict", "--config-file", str(config_file)]
            + [target for target in TARGETS if target != "setup.py"],
            cwd=repo_root,
        )

    if step is Step.PYLINT:
        print("Pylint'ing...")
        rcfile = pathlib.Path("continuous_integration") / "pylint.rc"
        return call_and_report(
            verb="pylint",
            cmd=["pylint", f"--rcfile={rcfile}"]
            + [target for target in TARGETS if target != "setup.py"],
            cwd=repo_root,
        )

    if step is Step.TEST:
        print("Testing...")
        env = os.environ.copy()
        env["ICONTRACT_SLOW"] = "true"

        exit_code = call_and_report(
            verb="execute unit tests",
            cmd=[
                "coverage",
                "run",
                "--source",
                "inheritance_idioms",
                "-m",
                "unittest",
                "discover",
            ],
            cwd=repo_root,
            env=env,
        )
        if exit_code != 0:
            return exit_code

        return call_and_report(
            verb="report the coverage", cmd=["coverage", "report"], cwd=repo_root
        )

    if step is Step.DOCTEST:
        print("Doctest'ing...")
        return call_and_report(
            verb="doctest",
            cmd=[sys.executable, "-m", "doctest", "README.rst"],
            cwd=repo_root,
        )

    if step is Step.CHECK_INIT_AND_SETUP_COINCIDE:
        print("Checking that inheritance_idioms/__init__.py and setup.py coincide...")
        return call_and_report(
            verb="check that inheritance_idioms/__init__.py and setup.py coincide",
            cmd=[
                sys.executable,
                "continuous_integration/check_init_and_setup_coincide.py",
            ],
            cwd=repo_root,
        )

    raise AssertionError(f"Unhandled step: {step}")


def main() -> int:
    """Execute entry_point routine."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--overwrite",
        help="Try to automatically fix the offending files (e.g., by re-formatting).",
        action="store_true",
    )
    parser.add_argument(
        "--select",
        help=(
            "If set, only the selected steps are executed. "
            "The steps are given as a space-separated list of: "
            + " ".join(value.value for value in Step)
        ),
        metavar="",
        nargs="+",
        choices=[value.value for value in Step],
    )
    parser.add_argument(
        "--skip",
        help=(
            "If set, skips the specified steps. "
            "The steps are given as a space-separated list of: "
            + " ".join(value.value for value in Step)
        ),
        metavar="",
        nargs="+",
        choices=[value.value for value in Step],
    )

    args = parser.parse_args()

    selects = (
        [Step(value) for value in args.select]
        if args.select is not None
        else [value for value in Step]
    )
    skips = [Step(value) for value in args.skip] if args.skip is not None else []

    repo_root = pathlib.Path(os.path.realpath(__file__)).parent.parent

    for step in Step:
        if step not in selects or step in skips:
            print(f"Skipped {step.value}.")
            continue

        if run_step(step=step, overwrite=bool(args.overwrite), repo_root=repo_root):
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
