"""Module entry point for `python -m testrun_orchestrator`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
