"""Module entry point for the save codec CLI."""
from __future__ import annotations

from .presentation.cli.main import main


if __name__ == "__main__":
    raise SystemExit(main())
