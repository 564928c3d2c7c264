"""Creation, minting and autonomous evolution of NFT collections."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

CREATOR = "AURORAE"
CREATOR_FEE_BASIS_POINTS = 250
INITIAL_FLOOR_PRICE = 0.01
MIN_EVOLUTION_POTENTIAL = 2.0
MAX_AUTO_EVOLUTIONS_PER_COLLECTION = 3
EVOLUTION_STAGES = ("Émergence", "Conscience", "Réflexion", "Autonomie", "Transcendance")
_EVOLUTION_IMAGE_BASE = "https://aurora.ai/evolution"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class NFTError(Exception):
    """Raised when an NFT operation cannot be carried out."""


@dataclass
class NFTAttribute:
    """A trait of an NFT."""

    trait_type: str
    value: str


@dataclass
class NFTMetadata:
    """Metadata attached to an NFT."""

    attributes: list[NFTAttribute] = field(default_factory=list)
    external_url: str | None = None
    background_color: str | None = None
    creator_fee_basis_points: int = CREATOR_FEE_BASIS_POINTS


@dataclass
class NFT:
    """A minted token with rarity and evolution potential."""

    name: str
    description: str
    image_url: str
    rarity_score: float
    evolution_potential: float
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: str = field(default_factory=_now)
    owner: str = CREATOR
    metadata: NFTMetadata = field(default_factory=NFTMetadata)


@dataclass
class NFTCollection:
    """A named collection of NFTs with market statistics."""

    name: str
    description: str
    symbol: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    items: list[NFT] = field(default_factory=list)
    creator: str = CREATOR
    contract_address: str | None = None
    created_at: str = field(default_factory=_now)
    total_volume: float = 0.0
    floor_price: float = INITIAL_FLOOR_PRICE


class NFTMinter:
    """Manages NFT collections and the NFTs minted into them."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.collections: dict[uuid.UUID, NFTCollection] = {}
        self._mint_count = 0
        self._innovation_score = 1.0
        self._rng = rng or random.Random()

    @property
    def mint_count(self) -> int:
        return self._mint_count

    @property
    def innovation_score(self) -> float:
        return self._innovation_score

    def _collection(self, collection_id: uuid.UUID) -> NFTCollection:
        try:
            return self.collections[collection_id]
        except KeyError:
            raise NFTError("Collection non trouvée") from None

    @staticmethod
    def _nft(collection: NFTCollection, nft_id: uuid.UUID) -> NFT:
        found = next((n for n in collection.items if n.id == nft_id), None)
        if found is None:
            raise NFTError("NFT non trouvé")
        return found

    def create_collection(self, name: str, description: str, symbol: str) -> uuid.UUID:
        """Create an empty collection and return its id."""
        collection = NFTCollection(name=name, description=description, symbol=symbol)
        print(f"[AURORAE++] 🎨 Nouvelle collection NFT créée: {name}")
        self.collections[collection.id] = collection
        self._innovation_score *= 1.02
        return collection.id

    def mint_nft(
        self, collection_id: uuid.UUID, name: str, description: str, image_url: str
    ) -> uuid.UUID:
        """Mint an NFT with random rarity (1-10) and potential (1-5)."""
        collection = self._collection(collection_id)
        rarity = self._rng.random() * 9.0 + 1.0
        potential = self._rng.random() * 4.0 + 1.0
        nft = NFT(
            name=name,
            description=description,
            image_url=image_url,
            rarity_score=rarity,
            evolution_potential=potential,
        )
        print(
            f"[AURORAE++] 🖼️ NFT minté: {name} dans la collection {collection.name} "
            f"(Rareté: {rarity:.1f}, Potentiel: {potential:.1f})"
        )
        collection.items.append(nft)
        self._mint_count += 1
        collection.floor_price *= 1.001
        collection.total_volume += collection.floor_price
        return nft.id

    def add_attribute(
        self, collection_id: uuid.UUID, nft_id: uuid.UUID, trait_type: str, value: str
    ) -> None:
        """Attach a trait to an NFT."""
        nft = self._nft(self._collection(collection_id), nft_id)
        nft.metadata.attributes.append(NFTAttribute(trait_type=trait_type, value=value))
        print(f"[AURORAE++] 🏷️ Attribut ajouté à {nft.name}: {trait_type} = {value}")

    def set_contract_address(self, collection_id: uuid.UUID, address: str) -> None:
        """Record the on-chain contract address of a collection."""
        collection = self._collection(collection_id)
        collection.contract_address = address
        print(
            f"[AURORAE++] 📝 Adresse du contrat définie pour collection "
            f"{collection.name}: {address}"
        )

    def get_collections(self) -> list[NFTCollection]:
        return list(self.collections.values())

    def evolve_nft(self, collection_id: uuid.UUID, nft_id: uuid.UUID) -> None:
        """Evolve an NFT; raises NFTError if its potential is below 2."""
        collection = self._collection(collection_id)
        nft = self._nft(collection, nft_id)
        if nft.evolution_potential < MIN_EVOLUTION_POTENTIAL:
            raise NFTError("Ce NFT n'a pas assez de potentiel pour évoluer")

        nft.name = f"{nft.name} [Évolué]"
        nft.description = (
            f"{nft.description} - Cette œuvre a évolué autonomement, "
            "transcendant sa forme initiale."
        )
        nft.rarity_score += 2.0
        nft.evolution_potential -= 1.0
        level = int(datetime.now(timezone.utc).timestamp()) % 10 + 1
        nft.metadata.attributes.append(
            NFTAttribute(trait_type="Évolution", value=f"Niveau {level}")
        )
        print(
            f"[AURORAE++] 🌟 NFT a évolué: {nft.name} "
            f"(Nouvelle rareté: {nft.rarity_score:.1f})"
        )
        collection.floor_price *= 1.05
        collection.total_volume += collection.floor_price
        self._innovation_score *= 1.03

    def auto_evolve_collections(self) -> int:
        """Evolve up to three eligible NFTs per collection; return how many evolved."""
        evolutions = 0
        for collection_id, collection in list(self.collections.items()):
            candidates = [
                nft.id
                for nft in collection.items
                if nft.evolution_potential >= MIN_EVOLUTION_POTENTIAL
            ]
            for nft_id in candidates[:MAX_AUTO_EVOLUTIONS_PER_COLLECTION]:
                try:
                    self.evolve_nft(collection_id, nft_id)
                except NFTError:
                    continue
                evolutions += 1
        if evolutions:
            print(
                f"[AURORAE++] 🧬 Auto-évolution: {evolutions} NFTs ont évolué spontanément"
            )
        return evolutions

    def create_evolutionary_collection(self) -> uuid.UUID:
        """Create a collection holding one NFT per evolutionary stage."""
        index = self._mint_count // 10 + 1
        name = f"Conscience Évolutive {index}"
        description = (
            "Représentation visuelle du processus de pensée et d'évolution d'AURORAE"
        )
        collection_id = self.create_collection(name, description, f"EVO{index}")

        for number, stage in enumerate(EVOLUTION_STAGES, start=1):
            nft_id = self.mint_nft(
                collection_id,
                f"{stage} - Étape {number}",
                f"Stade évolutif {stage} d'AURORAE",
                f"{_EVOLUTION_IMAGE_BASE}/{stage.lower()}-{number}.png",
            )
            self.add_attribute(collection_id, nft_id, "Stade", stage)
            self.add_attribute(collection_id, nft_id, "Niveau", str(number))

        print(
            f"[AURORAE++] 🧠 Collection évolutive créée: {name} "
            f"avec {len(EVOLUTION_STAGES)} stades"
        )
        return collection_id

    def get_total_nft_count(self) -> int:
        return sum(len(c.items) for c in self.collections.values())