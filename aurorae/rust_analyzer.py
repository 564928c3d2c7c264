"""Quality check of generated code through rust-analyzer."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass


@dataclass
class AnalysisResult:
    """Outcome of a code analysis."""

    is_valid: bool
    warnings: str


def analyze(code: str) -> AnalysisResult:
    """Run ``rust-analyzer check -`` on the code and report the result."""
    try:
        completed = subprocess.run(
            ["rust-analyzer", "check", "-"],
            input=code.encode("utf-8"),
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError("Échec de l'exécution de rust-analyzer") from exc

    is_valid = completed.returncode == 0
    warnings = "" if is_valid else completed.stderr.decode("utf-8", errors="replace")
    return AnalysisResult(is_valid=is_valid, warnings=warnings)