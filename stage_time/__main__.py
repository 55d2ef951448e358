"""Module entry point: python -m stage_time ..."""

from __future__ import annotations

from stage_time.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
