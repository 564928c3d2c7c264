"""Self-mutation of generated module source code."""

from __future__ import annotations

import re
import uuid
from pathlib import Path

_HELLO_FN = re.compile(r"fn\s+hello\s*\(")


class MutationError(Exception):
    """Raised when a module cannot be mutated."""


def mutate_module_code(path: str | Path) -> str | None:
    """Apply pattern mutations to ``<path>/mod.rs``.

    Returns a fresh mutation id when the file changed, None when nothing
    matched. Raises MutationError when the file is missing or unreadable.
    """
    code_path = Path(path) / "mod.rs"
    if not code_path.exists():
        raise MutationError("mod.rs non trouvé")

    try:
        with open(code_path, encoding="utf-8", newline="") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise MutationError(f"Erreur lecture: {exc}") from exc

    mutated = _HELLO_FN.sub("fn evolved_hello(", content)
    if mutated == content:
        return None

    try:
        with open(code_path, "w", encoding="utf-8", newline="") as handle:
            handle.write(mutated)
    except OSError as exc:
        raise MutationError(f"Erreur d'écriture: {exc}") from exc

    return str(uuid.uuid4())