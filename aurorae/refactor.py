"""Automatic formatting of generated code through rustfmt."""

from __future__ import annotations

import subprocess


def refactor_code(code: str) -> str:
    """Format code with ``rustfmt --emit=stdout`` and return its output."""
    try:
        completed = subprocess.run(
            ["rustfmt", "--emit=stdout"],
            input=code.encode("utf-8"),
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError("Échec de l'exécution de rustfmt") from exc
    return completed.stdout.decode("utf-8", errors="replace")