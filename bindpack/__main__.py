from __future__ import annotations

from bindpack.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
