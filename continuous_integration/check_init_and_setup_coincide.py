#!/usr/bin/env python3

"""Check that setup.py and inheritance_idioms/__init__.py carry the same metadata."""
import os
import pathlib
import subprocess
import sys
from typing import List, Mapping, Optional

import inheritance_idioms

#: Map the distribution status classifier to the ``__status__`` in __init__.py
STATUS_MAP: Mapping[str, str] = {
    "Development Status :: 1 - Planning": "Planning",
    "Development Status :: 2 - Pre-Alpha": "Pre-Alpha",
    "Development Status :: 3 - Alpha": "Alpha",
    "Development Status :: 4 - Beta": "Beta",
    "Development Status :: 5 - Production/Stable": "Production/Stable",
    "Development Status :: 6 - Mature": "Mature",
    "Development Status :: 7 - Inactive": "Inactive",
}


def query_setup_py(setup_py_pth: pathlib.Path, field: str) -> str:
    """Retrieve the ``field`` of the distribution by calling ``setup.py``."""
    return subprocess.check_output(
        [sys.executable, str(setup_py_pth), f"--{field}"], encoding="utf-8"
    ).strip()


def main() -> int:
    """Execute the main routine."""
    repo_root = pathlib.Path(os.path.realpath(__file__)).parent.parent

    setup_py_pth = repo_root / "setup.py"
    if not setup_py_pth.exists():
        raise RuntimeError(f"Could not find the setup.py: {setup_py_pth}")

    errors = []  # type: List[str]

    expected_in_init = {
        "version": inheritance_idioms.__version__,
        "author": inheritance_idioms.__author__,
        "license": inheritance_idioms.__license__,
        "description": inheritance_idioms.__doc__,
    }

    for field, init_value in expected_in_init.items():
        setup_value = query_setup_py(setup_py_pth, field)
        if setup_value != init_value:
            errors.append(
                f"The {field} in the setup.py is {setup_value!r}, "
                f"while the {field} in inheritance_idioms/__init__.py "
                f"is {init_value!r}"
            )

    classifiers = query_setup_py(setup_py_pth, "classifiers").splitlines()

    status_classifier = next(
        (classifier for classifier in classifiers if classifier in STATUS_MAP), None
    )  # type: Optional[str]

    if status_classifier is None:
        errors.append(
            "Expected a status classifier in setup.py "
            "(e.g., 'Development Status :: 3 - Alpha'), but found none."
        )
    elif STATUS_MAP[status_classifier] != inheritance_idioms.__status__:
        errors.append(
            f"Expected status {STATUS_MAP[status_classifier]!r} "
            f"according to setup.py in inheritance_idioms/__init__.py, "
            f"but found: {inheritance_idioms.__status__!r}"
        )

    for error in errors:
        print(error, file=sys.stderr)

    return -1 if len(errors) > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
