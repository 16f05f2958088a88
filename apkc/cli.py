"""Command-line entry point."""

from __future__ import annotations

import sys
import time
from collections.abc import Sequence

from . import log
from .build import build, clean
from .device import run
from .log import ApkcError
from .sdk import doctor, find_sdks

HELP = """
commands:

doctor - check if Android sdk is accessible
create - create a new project
build  - build apk
run    - build apk and run the available device
clean  - delete build/ dir
"""


def print_help() -> None:
    """Print the list of commands."""
    print(HELP, end="")


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command; return the process exit status."""
    start = time.monotonic()
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print_help()
        return 0

    try:
        paths = find_sdks()
        command = args[0]
        if command == "doctor":
            doctor(paths)
        elif command == "build":
            build(paths, args[1:])
        elif command == "run":
            run(paths)
        elif command == "clean":
            clean()
    except ApkcError:
        return 1

    log.verbose("apkc", "finished in", f"{time.monotonic() - start:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())