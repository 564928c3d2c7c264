"""Episode memories, strategies and agent configuration for reinforcement learning."""

from __future__ import annotations

import math
import random
import time
from dataclasses import asdict, dataclass, field
from typing import Any

DEFAULT_LEARNING_RATE = 0.1
DEFAULT_DISCOUNT_FACTOR = 0.9
DEFAULT_EXPLORATION_RATE = 0.1
DEFAULT_ADAPTATION_THRESHOLD = 0.2
DEFAULT_EVOLUTION_THRESHOLD = 0.5
DEFAULT_META_LEARNING_RATE = 0.01

INITIAL_STRATEGY_EFFECTIVENESS = 0.5
MUTATION_EFFECTIVENESS_FACTOR = 0.8


def _now_seconds() -> int:
    return int(time.time())


@dataclass
class EpisodeMemory:
    """History of one learning episode."""

    state_history: list[str] = field(default_factory=list)
    action_history: list[str] = field(default_factory=list)
    reward_history: list[float] = field(default_factory=list)
    total_reward: float = 0.0
    timestamp: int = field(default_factory=_now_seconds)
    performance_score: float = 0.0

    @classmethod
    def from_state(cls, initial_state: str) -> EpisodeMemory:
        """Start an episode at the given state."""
        return cls(state_history=[initial_state])

    def add_transition(self, action: str, reward: float, next_state: str) -> None:
        """Record an action, its reward and the state it led to."""
        self.action_history.append(action)
        self.reward_history.append(reward)
        self.state_history.append(next_state)
        self.total_reward += reward

    def calculate_performance(self) -> float:
        """Set and return the mean reward of the episode."""
        if self.reward_history:
            self.performance_score = self.total_reward / len(self.reward_history)
        else:
            self.performance_score = 0.0
        return self.performance_score

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EpisodeMemory:
        return cls(
            state_history=list(data["state_history"]),
            action_history=list(data["action_history"]),
            reward_history=[float(r) for r in data["reward_history"]],
            total_reward=float(data["total_reward"]),
            timestamp=int(data["timestamp"]),
            performance_score=float(data["performance_score"]),
        )


@dataclass
class Strategy:
    """A state-to-action policy developed by the agent."""

    name: str
    state_action_map: dict[str, str]
    creation_context: str
    effectiveness: float = INITIAL_STRATEGY_EFFECTIVENESS
    usage_count: int = 0
    last_updated: int = field(default_factory=_now_seconds)

    def update_effectiveness(self, success_rate: float) -> None:
        """Blend a new success rate into the effectiveness (moving average)."""
        self.effectiveness = self.effectiveness * 0.9 + success_rate * 0.1
        self.last_updated = _now_seconds()

    def create_mutation(
        self, name: str, mutation_rate: float, available_actions: list[str]
    ) -> Strategy:
        """Return a copy with some states remapped to different random actions."""
        new_map = dict(self.state_action_map)
        num_mutations = int(math.floor(len(new_map) * mutation_rate + 0.5))
        states = list(new_map)

        if states and available_actions:
            for _ in range(num_mutations):
                state = random.choice(states)
                current = new_map[state]
                alternatives = [a for a in available_actions if a != current]
                if alternatives:
                    new_map[state] = random.choice(alternatives)

        return Strategy(
            name=name,
            state_action_map=new_map,
            creation_context=(
                f"Mutation de {self.name} avec {num_mutations} changements "
            ),
            effectiveness=self.effectiveness * MUTATION_EFFECTIVENESS_FACTOR,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Strategy:
        return cls(
            name=data["name"],
            state_action_map=dict(data["state_action_map"]),
            creation_context=data["creation_context"],
            effectiveness=float(data["effectiveness"]),
            usage_count=int(data["usage_count"]),
            last_updated=int(data["last_updated"]),
        )


@dataclass
class AgentConfig:
    """Hyperparameters for a learning agent."""

    learning_rate: float = DEFAULT_LEARNING_RATE
    discount_factor: float = DEFAULT_DISCOUNT_FACTOR
    exploration_rate: float = DEFAULT_EXPLORATION_RATE
    adaptation_threshold: float = DEFAULT_ADAPTATION_THRESHOLD
    evolution_threshold: float = DEFAULT_EVOLUTION_THRESHOLD
    meta_learning_rate: float = DEFAULT_META_LEARNING_RATE