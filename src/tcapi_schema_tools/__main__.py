"""Module entry point for `python -m tcapi_schema_tools`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
