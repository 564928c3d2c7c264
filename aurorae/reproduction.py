"""Spawning and tracking of cloned system instances."""

from __future__ import annotations

import json
import sys
import uuid
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

DEFAULT_STATE_DIR = Path("aurorae_state")
_STATE_FILE = "instances.json"


@dataclass
class AuroraInstance:
    """One spawned clone with its inherited modules and lineage."""

    id: uuid.UUID
    parent_id: uuid.UUID | None
    created_at: str
    purpose: str
    inherited_modules: list[str]
    generation: int
    is_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "parent_id": str(self.parent_id) if self.parent_id else None,
            "created_at": self.created_at,
            "purpose": self.purpose,
            "inherited_modules": list(self.inherited_modules),
            "generation": self.generation,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuroraInstance:
        parent = data.get("parent_id")
        return cls(
            id=uuid.UUID(data["id"]),
            parent_id=uuid.UUID(parent) if parent else None,
            created_at=data["created_at"],
            purpose=data["purpose"],
            inherited_modules=list(data["inherited_modules"]),
            generation=int(data["generation"]),
            is_active=bool(data["is_active"]),
        )


@dataclass
class ReproductionEngine:
    """Creates, destroys and persists clone instances."""

    children: list[AuroraInstance] = field(default_factory=list)
    state_dir: Path = DEFAULT_STATE_DIR

    @property
    def state_file(self) -> Path:
        return Path(self.state_dir) / _STATE_FILE

    @classmethod
    def load(cls, state_dir: str | Path = DEFAULT_STATE_DIR) -> ReproductionEngine:
        """Load saved instances, or return an empty engine if none are usable."""
        path = Path(state_dir) / _STATE_FILE
        children: list[AuroraInstance] = []
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            print(
                f"[AURORAE++] Erreur lors du chargement des instances : {exc}",
                file=sys.stderr,
            )
        else:
            try:
                data = json.loads(text)
                children = [AuroraInstance.from_dict(c) for c in data["children"]]
            except (ValueError, KeyError, TypeError):
                children = []
        return cls(children=children, state_dir=Path(state_dir))

    def spawn_instance(self, purpose: str, modules: Iterable[str]) -> AuroraInstance:
        """Create a new clone descending from the most recent one."""
        generation = max((c.generation for c in self.children), default=0) + 1
        instance = AuroraInstance(
            id=uuid.uuid4(),
            parent_id=self.children[-1].id if self.children else None,
            created_at=datetime.now(timezone.utc).isoformat(),
            purpose=purpose,
            inherited_modules=list(modules),
            generation=generation,
        )
        print(
            f"[AURORAE++] 🧫 Nouvelle instance génération #{generation} : "
            f"{instance.id} • But: {purpose}"
        )
        self.children.append(instance)
        self.save()
        return instance

    def destroy_instance(self, instance_id: uuid.UUID) -> None:
        """Remove an instance by id."""
        self.children = [c for c in self.children if c.id != instance_id]
        print(f"[AURORAE++] 🪓 Instance détruite : {instance_id}")
        self.save()

    def get_active_instances(self) -> list[AuroraInstance]:
        return [c for c in self.children if c.is_active]

    def list_instances(self) -> None:
        """Print every created clone."""
        print(f"[AURORAE++] 🌱 Instances actives : {len(self.children)}")
        for c in self.children:
            print(
                f"- [{c.id}] Gén #{c.generation} • But: {c.purpose} "
                f"• Modules: {c.inherited_modules}"
            )

    def get_generation_lineage(self) -> dict[int, list[uuid.UUID]]:
        """Map each generation to the ids of its instances."""
        lineage: defaultdict[int, list[uuid.UUID]] = defaultdict(list)
        for c in self.children:
            lineage[c.generation].append(c.id)
        return dict(lineage)

    def save(self) -> None:
        """Write instances to ``<state_dir>/instances.json``; errors go to stderr."""
        try:
            Path(self.state_dir).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            print(
                f"[AURORAE++] Erreur lors de la création du répertoire: {exc}",
                file=sys.stderr,
            )
            return
        payload = {"children": [c.to_dict() for c in self.children]}
        try:
            self.state_file.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as exc:
            print(
                f"[AURORAE++] Erreur lors de la sauvegarde : {exc}", file=sys.stderr
            )