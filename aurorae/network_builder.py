"""Creation and interconnection of specialised sub-chains."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class SubChain:
    """A specialised sub-network with its own role and protocol."""

    id: uuid.UUID
    name: str
    purpose: str
    protocol: str
    created_at: str
    links: list[uuid.UUID] = field(default_factory=list)


@dataclass
class NetworkMap:
    """Topology of all created sub-chains."""

    chains: list[SubChain] = field(default_factory=list)

    def create_subchain(self, name: str, purpose: str, protocol: str) -> uuid.UUID:
        """Create a sub-chain and return its id."""
        chain = SubChain(
            id=uuid.uuid4(),
            name=name,
            purpose=purpose,
            protocol=protocol,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        print(f"[AURORAE++] 🧬 Création d'une sous-chaîne : {name} • Protocole: {protocol}")
        self.chains.append(chain)
        return chain.id

    def link_chains(self, a: uuid.UUID, b: uuid.UUID) -> None:
        """Link two chains in both directions, without duplicate links."""
        for chain in self.chains:
            if chain.id == a and b not in chain.links:
                chain.links.append(b)
            elif chain.id == b and a not in chain.links:
                chain.links.append(a)
        print(f"[AURORAE++] 🔗 Chaînes {a} <--> {b} interconnectées.")

    def map_summary(self) -> str:
        """Print and return a summary of the current topology."""
        lines = ["[AURORAE++] 🌐 TOPOLOGIE ACTUELLE DU RÉSEAU:"]
        lines.extend(
            f"→ {chain.name} • [{chain.protocol}] • Links: {len(chain.links)}"
            for chain in self.chains
        )
        summary = "\n".join(lines)
        print(summary)
        return summary