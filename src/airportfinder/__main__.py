"""Console entrypoint for the airportfinder application.

This module delegates to :mod:`airportfinder.cli` so that running
``python -m airportfinder`` or the installed ``airportfinder`` console
script executes the same code.
"""

from __future__ import annotations

import sys

from airportfinder.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`airportfinder.cli.main`)."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
