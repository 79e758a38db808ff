"""Development entry point (no install needed).

Run the CLI with `python -m main ...` from the repository root. The code lives
under `src/` (src layout), so without an editable install Python cannot find
`cli`, `core` or `adapters`; this shim puts `src/` on the path first.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    # Windows consoles default to cp1252; source names in the transcript are CJK.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
