"""Entry point for ``python -m zwcodec``."""

from zwcodec.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
