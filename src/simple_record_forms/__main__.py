"""Module entry point for `python -m simple_record_forms`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
