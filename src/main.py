"""Execution script.

Why it exists:
- Lets `python -m main` run the CLI from `src/` during development.
- Keeps a simple entrypoint alongside the console script.
"""

from __future__ import annotations

import sys

# Windows terminals default to cp1252; the progress lines contain emoji.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
