"""``python -m lifecal_app``: opens the preview window unless a subcommand is given."""

from __future__ import annotations

import sys

try:
    from .cli import main as _cli_main
except ImportError:
    # Executed as a plain script (no parent package).
    from lifecal_app.cli import main as _cli_main

DEFAULT_COMMAND = "run"


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    return int(_cli_main(args or [DEFAULT_COMMAND]))


if __name__ == "__main__":
    raise SystemExit(main())
