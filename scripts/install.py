"""Entry-point script delegating to igniter.commands.install."""

from __future__ import annotations

from igniter.commands.install import main


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
