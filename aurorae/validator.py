"""Validation of system operations and integrity checks of components."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

_FORBIDDEN_MARKERS = ("unsafe", "std::mem::transmute")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ValidationError(Exception):
    """Raised when an operation is rejected by validation."""


@dataclass
class ValidationResult:
    """Outcome of a successful operation validation."""

    operation_type: str
    is_valid: bool
    reasons: list[str]
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    timestamp: str = field(default_factory=_now)


def validate_operation(operation_type: str, content: str) -> ValidationResult:
    """Validate an operation's content, raising ValidationError if it looks dangerous."""
    print(f"[AURORAE++] 🔄 Validation de l'opération: {operation_type}")

    if any(marker in content for marker in _FORBIDDEN_MARKERS):
        print(f"[AURORAE++] ⛔ Opération rejetée: {operation_type}")
        raise ValidationError(
            "Validation échouée: code potentiellement dangereux détecté"
        )

    print(f"[AURORAE++] ✅ Opération validée: {operation_type}")
    return ValidationResult(
        operation_type=operation_type,
        is_valid=True,
        reasons=["Opération conforme aux directives de sécurité"],
    )


class IntegrityStatus(Enum):
    """Integrity state of a component."""

    OPTIMAL = "Optimal"
    GOOD = "Good"
    WARNING = "Warning"
    COMPROMISED = "Compromised"

    @classmethod
    def from_score(cls, score: float) -> IntegrityStatus:
        if score > 0.95:
            return cls.OPTIMAL
        if score > 0.8:
            return cls.GOOD
        if score > 0.6:
            return cls.WARNING
        return cls.COMPROMISED


@dataclass
class IntegrityResult:
    """Outcome of an integrity check."""

    component: str
    status: IntegrityStatus
    integrity_score: float
    timestamp: str = field(default_factory=_now)


def check_integrity(component_name: str) -> IntegrityResult:
    """Run a simulated integrity check scoring between 85% and 100%."""
    print(f"[AURORAE++] 🛡️ Vérification d'intégrité pour: {component_name}")

    score = 0.85 + random.random() * 0.15
    result = IntegrityResult(
        component=component_name,
        status=IntegrityStatus.from_score(score),
        integrity_score=score,
    )

    print(
        f"[AURORAE++] 🔍 Intégrité de {component_name}: "
        f"{result.status.value} ({score * 100.0:.1f}%)"
    )
    return result