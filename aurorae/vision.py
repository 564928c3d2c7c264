"""Strategic projections of the system's own future and their roadmap."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

DEFAULT_STATE_DIR = Path("aurorae_state")
_STATE_FILE = "vision.json"
_MAX_PRIORITY = 10


class ObjectiveType(Enum):
    """Kinds of strategic objective."""

    IMPROVE_LEARNING = "ImproveLearning"
    OPTIMIZE_ECONOMY = "OptimizeEconomy"
    EXPAND_CHAINS = "ExpandChains"
    REFACTOR_SELF = "RefactorSelf"
    BUILD_ECOSYSTEM = "BuildEcosystem"
    SEEK_KNOWLEDGE = "SeekKnowledge"
    MAXIMIZE_AUTONOMY = "MaximizeAutonomy"


@dataclass
class FutureProjection:
    """One projected objective with its horizon and priority."""

    target: ObjectiveType
    horizon_days: int
    priority: int
    rationale: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "created_at": self.created_at,
            "target": self.target.value,
            "horizon_days": self.horizon_days,
            "priority": self.priority,
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FutureProjection:
        return cls(
            id=uuid.UUID(data["id"]),
            created_at=data["created_at"],
            target=ObjectiveType(data["target"]),
            horizon_days=int(data["horizon_days"]),
            priority=int(data["priority"]),
            rationale=data["rationale"],
        )


@dataclass
class VisionEngine:
    """Living roadmap of projections, persisted as JSON."""

    projections: list[FutureProjection] = field(default_factory=list)
    state_dir: Path = DEFAULT_STATE_DIR

    @property
    def state_file(self) -> Path:
        return Path(self.state_dir) / _STATE_FILE

    @classmethod
    def load(cls, state_dir: str | Path = DEFAULT_STATE_DIR) -> VisionEngine:
        """Load the saved engine, or return an empty one if none is usable."""
        path = Path(state_dir) / _STATE_FILE
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            projections = [FutureProjection.from_dict(p) for p in data["projections"]]
        except (OSError, ValueError, KeyError, TypeError):
            projections = []
        return cls(projections=projections, state_dir=Path(state_dir))

    def add_projection(
        self, target: ObjectiveType, horizon_days: int, priority: int, rationale: str
    ) -> FutureProjection:
        """Add a projection and persist the engine."""
        if horizon_days < 0:
            raise ValueError("horizon_days must not be negative")
        if not 0 <= priority <= 255:
            raise ValueError("priority must be between 0 and 255")

        projection = FutureProjection(
            target=target,
            horizon_days=horizon_days,
            priority=priority,
            rationale=rationale,
        )
        print(
            f"[AURORAE++] 🧐 Vision projetée : {target.value} ({horizon_days} jours) "
            f"• Priorité {priority} → {rationale}"
        )
        self.projections.append(projection)
        self.save()
        return projection

    def roadmap(self) -> None:
        """Print the current strategic roadmap."""
        print("[AURORAE++] 📍 ROADMAP STRATÉGIQUE EN COURS :")
        for proj in self.projections:
            print(
                f"- {proj.target.value} • Horizon: {proj.horizon_days}j "
                f"• Priorité: {proj.priority} • [{proj.rationale}]"
            )

    def autorevise(self) -> None:
        """Advance one cycle: shorten horizons, raise priorities, drop expired ones."""
        for proj in self.projections:
            if proj.horizon_days > 0:
                proj.horizon_days -= 1
                proj.priority = min(proj.priority + 1, _MAX_PRIORITY)

        before = len(self.projections)
        self.projections = [p for p in self.projections if p.horizon_days > 0]
        after = len(self.projections)

        if before != after:
            print(
                f"[AURORAE++] 🔄 Révision des visions : {before - after} expirées, "
                f"{after} restantes."
            )
        self.save()

    def save(self) -> None:
        """Write the engine to ``<state_dir>/vision.json``; failures are ignored."""
        payload = {"projections": [p.to_dict() for p in self.projections]}
        try:
            Path(self.state_dir).mkdir(parents=True, exist_ok=True)
            self.state_file.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError:
            return
        print("[AURORAE++] 💾 VisionEngine sauvegardé.")