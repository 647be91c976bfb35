"""Run inheritance-idioms as Python module."""

import sys

import inheritance_idioms.main

if __name__ == "__main__":
    # The ``prog`` needs to be set in the argparse.
    # Otherwise the program name in the help shown to the user will be ``__main__``.
    sys.exit(inheritance_idioms.main.main(prog="inheritance_idioms"))
