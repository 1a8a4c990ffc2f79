"""mentry CLI entry point.

Allows running via `python -m mentry` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from .errors import MentryError


def get_version_string() -> str:
    try:
        return f"mentry {version('mentry')}"
    except PackageNotFoundError:
        return "mentry (not installed)"


USAGE = "usage: mentry [--version] [--log FILE] [filename]"


def main() -> None:
    # Very small arg parsing: version, optional log file, optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ("--help", "-h"):
        print(USAGE)
        return
    if args and args[0] == "--log":
        if len(args) < 2:
            print(USAGE, file=sys.stderr)
            sys.exit(2)
        # The terminal belongs to the UI, so log records go to a file
        logging.basicConfig(filename=args[1], level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")
        args = args[2:]

    # Lazy import to avoid importing UI deps for --version
    from .app import EntryApp
    try:
        app = EntryApp(args[0] if args else None)
    except MentryError as e:
        print(f"Error loading file: {e}", file=sys.stderr)
        sys.exit(1)
    app.run()


if __name__ == "__main__":  # pragma: no cover
    main()
