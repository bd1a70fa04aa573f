"""Module entrypoint for running manuscript as ``python -m manuscript``."""

from __future__ import annotations

from manuscript.cli import main


if __name__ == "__main__":
    main()
