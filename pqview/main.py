"""CLI entry point: argument parsing and dispatch."""

import argparse
import sys

from . import __version__
from .dashboard import cmd_dashboard


def main():
    parser = argparse.ArgumentParser(
        prog="pqview",
        description="Inspect and prune the Postfix mail queue",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args()
    sys.exit(cmd_dashboard(args))
