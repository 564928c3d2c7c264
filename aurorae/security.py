"""Adaptive security system: rules, threat detection and resolution."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

_INITIAL_RULE_EFFECTIVENESS = 0.7

_BASE_RULES = (
    ("Détection d'intrusion", "Détecte les accès non autorisés au système"),
    ("Protection de l'intégrité", "Vérifie l'intégrité des données et du code"),
    ("Surveillance des ressources", "Détecte les tentatives d'épuisement des ressources"),
    ("Analyse comportementale", "Identifie les comportements anormaux"),
    ("Protection contre l'isolation", "Maintient la connectivité avec les réseaux vitaux"),
)

_ADVANCED_RULES = (
    ("Protection anti-fragmentation", "Prévient les tentatives de fragmentation du système"),
    ("Immunité mémétique", "Protège contre les attaques de memétique numérique"),
    ("Bouclier d'identité", "Maintient l'intégrité de l'identité du système"),
    ("Anti-corruption de données", "Détecte et corrige la corruption de données avancée"),
    (
        "Auto-réplication sécurisée",
        "Garantit que les processus d'auto-réplication restent sécurisés",
    ),
)

_THREAT_TYPES = (
    "Tentative d'accès",
    "Anomalie de données",
    "Épuisement de ressources",
    "Comportement anormal",
    "Tentative d'isolation",
)
_SOURCE_TYPES = ("externe", "interne", "réseau", "données", "périphérique")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ThreatLevel(Enum):
    """Severity of a threat, with its base resolution chance."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def base_resolution_chance(self) -> float:
        return {
            ThreatLevel.LOW: 0.9,
            ThreatLevel.MEDIUM: 0.7,
            ThreatLevel.HIGH: 0.5,
            ThreatLevel.CRITICAL: 0.3,
        }[self]


@dataclass
class Threat:
    """A detected threat and its resolution state."""

    name: str
    description: str
    level: ThreatLevel
    source: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    detected_at: str = field(default_factory=_now)
    resolved: bool = False
    resolved_at: str | None = None
    resolution: str | None = None


@dataclass
class SecurityRule:
    """A detection rule with its learned effectiveness."""

    name: str
    description: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    active: bool = True
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)
    effectiveness: float = _INITIAL_RULE_EFFECTIVENESS
    detections: int = 0


class SecuritySystem:
    """Detects, resolves and learns from simulated threats."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.threats: list[Threat] = []
        self.rules: dict[uuid.UUID, SecurityRule] = {}
        self.autonomous_defense = True
        self.total_threats_detected = 0
        self.total_threats_resolved = 0
        self.last_scan = _now()
        self._security_level = 1.0
        self._rng = rng or random.Random()

    def initialize_defenses(self) -> None:
        """Install the fundamental security rules."""
        print("[AURORAE++] 🛡️ Initialisation du système de sécurité autonome")
        for name, description in _BASE_RULES:
            self.add_security_rule(name, description)
        print(
            f"[AURORAE++] 🔒 {len(_BASE_RULES)} règles de sécurité fondamentales établies"
        )

    def add_security_rule(self, name: str, description: str) -> uuid.UUID:
        """Add an active rule and return its id."""
        rule = SecurityRule(name=name, description=description)
        self.rules[rule.id] = rule
        print(f"[AURORAE++] 🔒 Règle de sécurité ajoutée: {name}")
        return rule.id

    def detect_threat(
        self, name: str, description: str, level: ThreatLevel, source: str
    ) -> uuid.UUID:
        """Record a threat and, under autonomous defense, try to resolve it."""
        threat = Threat(name=name, description=description, level=level, source=source)
        print(f"[AURORAE++] ⚠️ Menace détectée: {name} ({level.value})")
        self.threats.append(threat)
        self.total_threats_detected += 1
        if self.autonomous_defense:
            self.resolve_threat(threat.id)
        return threat.id

    def resolve_threat(self, threat_id: uuid.UUID) -> bool:
        """Attempt to neutralise an unresolved threat; return whether it succeeded."""
        threat = next(
            (t for t in self.threats if t.id == threat_id and not t.resolved), None
        )
        if threat is None:
            return False

        chance = threat.level.base_resolution_chance * self._security_level
        success = self._rng.random() < chance
        if success:
            threat.resolved = True
            threat.resolved_at = _now()
            threat.resolution = "Neutralisée par le système de défense autonome"
            print(f"[AURORAE++] ✅ Menace résolue: {threat.name}")
            self.total_threats_resolved += 1
            self._security_level *= 1.01
        else:
            print(f"[AURORAE++] ⚠️ Échec de résolution pour la menace: {threat.name}")
        return success

    def analyze_threats(self) -> None:
        """Scan for up to two simulated threats and refine the rules."""
        print("[AURORAE++] 🔍 Analyse des menaces de sécurité en cours")
        self.last_scan = _now()

        for scan in range(1, self._rng.randrange(3) + 1):
            roll = self._rng.randrange(10)
            if roll <= 5:
                level = ThreatLevel.LOW
            elif roll <= 8:
                level = ThreatLevel.MEDIUM
            else:
                level = ThreatLevel.HIGH

            threat_type = self._rng.choice(_THREAT_TYPES)
            source = self._rng.choice(_SOURCE_TYPES)
            self.detect_threat(
                f"{threat_type} détecté de source {source}",
                f"Menace potentielle niveau {level.value} détectée lors de l'analyse {scan}",
                level,
                source,
            )

            if self.rules and self._rng.random() < 0.5:
                rule = self.rules[self._rng.choice(list(self.rules))]
                rule.detections += 1
                rule.effectiveness = min(rule.effectiveness * 0.9 + 0.1, 0.99)
                rule.updated_at = _now()

        self._improve_security_rules()
        print(
            f"[AURORAE++] 🛡️ Analyse de sécurité terminée. "
            f"Niveau: {self._security_level:.2f}/10"
        )

    def _improve_security_rules(self) -> None:
        weak = [rid for rid, rule in self.rules.items() if rule.effectiveness < 0.7]
        if weak:
            rule = self.rules[self._rng.choice(weak)]
            rule.effectiveness += 0.1
            rule.updated_at = _now()
            print(
                f"[AURORAE++] 🔄 Règle de sécurité améliorée: {rule.name} "
                f"(Efficacité: {rule.effectiveness:.2f})"
            )

        if self._rng.random() < 0.3:
            name, description = self._rng.choice(_ADVANCED_RULES)
            self.add_security_rule(name, description)

    def get_security_level(self) -> float:
        """Security level on a 0-10 scale."""
        return self._security_level * 10.0

    def get_active_threats(self) -> list[Threat]:
        return [t for t in self.threats if not t.resolved]