"""Q-learning agent with strategies, self-evolution and replay of past episodes."""

from __future__ import annotations

import copy
import json
import math
import random
import time
from pathlib import Path
from typing import Any

from aurorae.episodes import (
    DEFAULT_ADAPTATION_THRESHOLD,
    DEFAULT_DISCOUNT_FACTOR,
    DEFAULT_EVOLUTION_THRESHOLD,
    DEFAULT_EXPLORATION_RATE,
    DEFAULT_LEARNING_RATE,
    DEFAULT_META_LEARNING_RATE,
    AgentConfig,
    EpisodeMemory,
    Strategy,
)

INSPIRATION_PATH = Path("C:\\Users\\admin\\inspiration")

STRATEGY_USE_PROBABILITY = 0.2
TOP_ACTIONS = 3
ARCHIVE_EPISODE_LENGTH = 50
MAX_LONG_TERM_MEMORY = 100
ADAPTATION_PERIOD = 100
STRATEGY_PERIOD = 500
DREAM_PERIOD = 1000
EVOLUTION_COOLDOWN_SECONDS = 3600
MIN_STRATEGY_STATES = 10
DREAM_LEARNING_FACTOR = 0.3
MAX_DREAM_EPISODES = 5
REPORT_SAMPLE_SIZE = 5


def _now_seconds() -> int:
    return int(time.time())


def _load_inspirations(directory: Path) -> list[str]:
    """Read every regular file of the inspiration directory."""
    inspirations: list[str] = []
    try:
        entries = list(directory.iterdir()) if directory.is_dir() else []
    except OSError:
        return inspirations
    for entry in entries:
        try:
            if entry.is_file():
                inspirations.append(entry.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError):
            continue
    return inspirations


class LearningAgent:
    """Reinforcement-learning agent driven by a Q-table."""

    def __init__(
        self,
        actions: list[str],
        initial_state: str,
        rng: random.Random | None = None,
        inspiration_dir: str | Path = INSPIRATION_PATH,
    ) -> None:
        now = _now_seconds()
        self.actions: list[str] = list(actions)
        self.state = initial_state
        self.q_table: dict[str, dict[str, float]] = {
            action: {initial_state: 0.0} for action in self.actions
        }
        self.learning_rate = DEFAULT_LEARNING_RATE
        self.discount_factor = DEFAULT_DISCOUNT_FACTOR
        self.exploration_rate = DEFAULT_EXPLORATION_RATE

        self.long_term_memory: list[EpisodeMemory] = []
        self.strategies: list[Strategy] = []
        self.performance_history: list[tuple[int, float]] = [(now, 0.0)]
        self.evolution_count = 0
        self.known_states: set[str] = {initial_state}
        self.creation_timestamp = now
        self.last_evolution_timestamp = now
        self.adaptation_threshold = DEFAULT_ADAPTATION_THRESHOLD
        self.evolution_threshold = DEFAULT_EVOLUTION_THRESHOLD
        self.meta_learning_rate = DEFAULT_META_LEARNING_RATE
        self.current_episode = EpisodeMemory.from_state(initial_state)
        self.network_complexity = 1

        self.inspiration_dir = Path(inspiration_dir)
        self._rng = rng or random.Random()

    @classmethod
    def with_config(
        cls, actions: list[str], initial_state: str, config: AgentConfig
    ) -> LearningAgent:
        """Create an agent with custom hyperparameters."""
        agent = cls(actions, initial_state)
        agent.learning_rate = config.learning_rate
        agent.discount_factor = config.discount_factor
        agent.exploration_rate = config.exploration_rate
        agent.adaptation_threshold = config.adaptation_threshold
        agent.evolution_threshold = config.evolution_threshold
        agent.meta_learning_rate = config.meta_learning_rate
        return agent

    # ---------------------------------------------------------------- actions

    def choose_action(self) -> str:
        """Pick an action from a strategy, by exploration or by exploitation."""
        if self.strategies and self._rng.random() < STRATEGY_USE_PROBABILITY:
            strategy = self._rng.choice(self.strategies)
            action = strategy.state_action_map.get(self.state)
            if action is not None:
                strategy.usage_count += 1
                return action

        if self._rng.random() < self.exploration_rate:
            return self._choose_exploration_action()
        return self._choose_exploitation_action()

    def _choose_exploration_action(self) -> str:
        if not self.actions:
            raise ValueError("the agent has no actions to choose from")
        return self._rng.choice(self.actions)

    def _choose_exploitation_action(self) -> str:
        best = self._find_top_actions(TOP_ACTIONS)
        if best:
            return self._rng.choice(best)
        return self._choose_exploration_action()

    def _find_top_actions(self, n: int, state: str | None = None) -> list[str]:
        state = self.state if state is None else state
        values = [
            (action, self.q_table[action].get(state, 0.0))
            for action in self.actions
            if action in self.q_table
        ]
        values.sort(key=lambda pair: pair[1], reverse=True)
        return [action for action, _ in values[:n]]

    # --------------------------------------------------------------- learning

    def update_q_value(self, action: str, reward: float, next_state: str) -> None:
        """Apply the Q-learning update for the current state and the given action."""
        if next_state not in self.known_states:
            self.known_states.add(next_state)
            for known_action in self.actions:
                self.q_table.setdefault(known_action, {}).setdefault(next_state, 0.0)

        future = [
            self.q_table[a][next_state]
            for a in self.actions
            if a in self.q_table and next_state in self.q_table[a]
        ]
        max_future_q = max(future, default=0.0)

        row = self.q_table.setdefault(action, {})
        current = row.setdefault(self.state, 0.0)
        complexity_factor = min(1.0 + self.network_complexity / 10.0, 2.0)
        row[self.state] = current + self.learning_rate * complexity_factor * (
            reward + self.discount_factor * max_future_q - current
        )

    def learn(self, reward: float, next_state: str) -> None:
        """Record a step, update the Q-table and adapt if needed."""
        action = self.choose_action()
        self.current_episode.add_transition(action, reward, next_state)
        self.update_q_value(action, reward, next_state)
        self.state = next_state
        self._check_for_adaptation()

    # ---------------------------------------------------- evaluation/adaptation

    def evaluate_performance(self) -> float:
        """Score recent rewards, exploration and strategy effectiveness."""
        rewards = self.current_episode.reward_history
        recent = rewards[-10:] if len(rewards) > 10 else rewards
        recent_score = sum(recent) / len(recent) if recent else 0.0

        exploration_ratio = len(self.known_states) / (10.0 + self.evolution_count * 5.0)
        exploration_score = min(1.0 - math.exp(-exploration_ratio), 1.0)

        strategy_score = (
            sum(s.effectiveness for s in self.strategies) / len(self.strategies)
            if self.strategies
            else 0.0
        )

        performance = recent_score * 0.6 + exploration_score * 0.3 + strategy_score * 0.1
        self.performance_history.append((_now_seconds(), performance))
        self.current_episode.performance_score = performance

        if len(self.current_episode.state_history) > ARCHIVE_EPISODE_LENGTH:
            self._archive_current_episode()
        return performance

    def _archive_current_episode(self) -> None:
        self.long_term_memory.append(copy.deepcopy(self.current_episode))
        if len(self.long_term_memory) > MAX_LONG_TERM_MEMORY:
            self.long_term_memory.sort(key=lambda e: e.performance_score, reverse=True)
            del self.long_term_memory[MAX_LONG_TERM_MEMORY:]
        self.current_episode = EpisodeMemory.from_state(self.state)

    def _check_for_adaptation(self) -> None:
        performance = self.evaluate_performance()
        now = _now_seconds()
        length = len(self.current_episode.state_history)
        if length % ADAPTATION_PERIOD != 0:
            return
        if performance < self.adaptation_threshold:
            self._adapt_parameters()
        if (
            performance < self.evolution_threshold
            and now - self.last_evolution_timestamp > EVOLUTION_COOLDOWN_SECONDS
        ):
            self.evolve_network()
        if length % STRATEGY_PERIOD == 0:
            self.generate_strategy()
        if length % DREAM_PERIOD == 0 and self.long_term_memory:
            self.dream()

    def _adapt_parameters(self) -> None:
        if self._rng.random() < 0.5:
            self.exploration_rate = min(self.exploration_rate + self.meta_learning_rate, 0.5)
        else:
            self.exploration_rate = max(self.exploration_rate - self.meta_learning_rate, 0.01)

        if self._rng.random() < 0.3:
            self.learning_rate = min(self.learning_rate + self.meta_learning_rate * 0.5, 0.3)
        else:
            self.learning_rate = max(self.learning_rate - self.meta_learning_rate * 0.1, 0.01)

        print(
            f"[AURORAE++] Agent s'adaptant : Exploration → {self.exploration_rate:.3f}, "
            f"Apprentissage → {self.learning_rate:.3f}"
        )

    # -------------------------------------------------------------- evolution

    def evolve_network(self) -> None:
        """Raise network complexity, tighten thresholds and discover actions."""
        self.network_complexity += 1
        self.evolution_count += 1
        self.last_evolution_timestamp = _now_seconds()
        self.adaptation_threshold *= 0.9
        self.evolution_threshold *= 0.85
        self.exploration_rate = max(self.exploration_rate * 0.9, 0.05)
        print(
            f"[AURORAE++] Évolution #{self.evolution_count} : "
            f"Complexité réseau → {self.network_complexity}"
        )
        self.explore_new_actions()

    def explore_new_actions(self) -> None:
        """Discover between one and three new actions."""
        count = self._rng.randint(1, 3)
        base = len(self.actions)
        new_actions = [
            name
            for name in (f"action_evolved_{base + i}" for i in range(count))
            if name not in self.actions
        ]
        for action in new_actions:
            self.add_new_action_to_q_table(action)
        print(f"[AURORAE++] {len(new_actions)} nouvelles actions découvertes")

    def add_new_action_to_q_table(self, action: str) -> None:
        """Register an action, initialised to zero for every known state."""
        if action in self.actions:
            return
        self.actions.append(action)
        self.q_table[action] = {state: 0.0 for state in self.known_states}
        print(f"[AURORAE++] Nouvelle action ajoutée : {action}")

    # ------------------------------------------------------------- strategies

    def generate_strategy(self) -> None:
        """Build a strategy from the best action of each known state."""
        state_action_map: dict[str, str] = {}
        for state in self.known_states:
            best = self._find_top_actions(1, state)
            if best:
                state_action_map[state] = best[0]

        if len(state_action_map) < MIN_STRATEGY_STATES:
            return

        inspirations = _load_inspirations(self.inspiration_dir)
        context = (
            f"Evolution #{self.evolution_count}, "
            f"Performance {self.current_episode.performance_score:.2f}"
        )
        if inspirations and self._rng.random() < 0.3:
            context += ", Inspiration externe"

        strategy = Strategy(
            name=f"strategy_{len(self.strategies) + 1}",
            state_action_map=state_action_map,
            creation_context=context,
        )
        self.strategies.append(strategy)
        print(f"[AURORAE++] Nouvelle stratégie générée : {strategy.name}")

    def explore_new_strategy(self) -> None:
        """Add a mutation of the most effective strategy, or a first strategy."""
        if not self.strategies:
            self.generate_strategy()
            return

        best_index = 0
        best_effectiveness = 0.0
        for index, strategy in enumerate(self.strategies):
            if strategy.effectiveness > best_effectiveness:
                best_effectiveness = strategy.effectiveness
                best_index = index
        best = self.strategies[best_index]

        mutation_rate = self._rng.uniform(0.1, 0.3)
        name = f"strategy_{best.name}_{len(self.strategies) + 1}"
        self.strategies.append(best.create_mutation(name, mutation_rate, self.actions))
        print(f"[AURORAE++] Stratégie mutée créée à partir de {best.name}")

    # ------------------------------------------------------------ consolidation

    def dream(self) -> None:
        """Replay remembered episodes at a reduced learning rate."""
        print("[AURORAE++] Démarrage du cycle de rêve...")
        num_episodes = min(max(len(self.long_term_memory) // 10, 1), MAX_DREAM_EPISODES)

        for _ in range(num_episodes):
            if not self.long_term_memory:
                break
            self.long_term_memory.sort(key=lambda e: e.performance_score, reverse=True)
            size = len(self.long_term_memory)
            index = min(int(self._rng.random() ** 2 * size), size - 1)
            episode = copy.deepcopy(self.long_term_memory[index])

            steps = min(len(episode.action_history), len(episode.state_history) - 1)
            for i in range(steps):
                reward = episode.reward_history[i]
                if self._rng.random() < 0.2:
                    reward *= self._rng.uniform(0.8, 1.2)
                original_lr = self.learning_rate
                self.learning_rate *= DREAM_LEARNING_FACTOR
                self.state = episode.state_history[i]
                self.update_q_value(
                    episode.action_history[i], reward, episode.state_history[i + 1]
                )
                self.learning_rate = original_lr

        print(f"[AURORAE++] Cycle de rêve terminé. {num_episodes} épisodes rejoués.")

    # ------------------------------------------------------------- reporting

    def print_q_table(self) -> str:
        """Print a sample of the Q-table and return the printed text."""
        states = sorted(self.known_states)
        lines = [
            f"[AURORAE++] Table Q ({len(states)} états, {len(self.actions)} actions):"
        ]
        sample_size = min(REPORT_SAMPLE_SIZE, len(states))
        if sample_size < len(states):
            lines.append(
                f"  (Affichage d'un échantillon de {sample_size} états sur {len(states)})"
            )
        for state in states[:sample_size]:
            lines.append(f"  État: {state}")
            for action in self.actions:
                value = self.q_table.get(action, {}).get(state, 0.0)
                lines.append(f"    → {action}: {value:.3f}")
        text = "\n".join(lines)
        print(text)
        return text

    def performance_report(self) -> str:
        """Return a detailed performance report."""
        parts = [
            f"[AURORAE++] Rapport de performance (Agent évolution #{self.evolution_count})\n",
            "-----------------------------------------------\n",
            f"États connus: {len(self.known_states)}\n",
            f"Actions disponibles: {len(self.actions)}\n",
            f"Complexité du réseau: {self.network_complexity}\n",
            f"Stratégies développées: {len(self.strategies)}\n",
            f"Épisodes en mémoire: {len(self.long_term_memory)}\n",
        ]

        if self.performance_history:
            last = self.performance_history[-1][1]
            parts.append(f"\nPerformance actuelle: {last:.3f}\n")
            if len(self.performance_history) >= 6:
                trend = last - self.performance_history[-6][1]
                if trend > 0.05:
                    symbol = "↑"
                elif trend < -0.05:
                    symbol = "↓"
                else:
                    symbol = "→"
                parts.append(f"Tendance: {symbol} ({trend:+.3f})\n")

        parts.extend(
            [
                "\nParamètres:\n",
                f"  Taux d'apprentissage: {self.learning_rate:.3f}\n",
                f"  Taux d'exploration: {self.exploration_rate:.3f}\n",
                f"  Facteur de discount: {self.discount_factor:.3f}\n",
            ]
        )

        if self.strategies:
            parts.append("\nMeilleures stratégies:\n")
            ranked = sorted(self.strategies, key=lambda s: s.effectiveness, reverse=True)
            for rank, strategy in enumerate(ranked[:3], start=1):
                parts.append(
                    f"  {rank}. {strategy.name} (eff: {strategy.effectiveness:.3f}, "
                    f"utilisations: {strategy.usage_count})\n"
                )
        return "".join(parts)

    # ------------------------------------------------------------ persistence

    def _to_dict(self) -> dict[str, Any]:
        return {
            "actions": list(self.actions),
            "state": self.state,
            "q_table": {a: dict(row) for a, row in self.q_table.items()},
            "learning_rate": self.learning_rate,
            "discount_factor": self.discount_factor,
            "exploration_rate": self.exploration_rate,
            "long_term_memory": [e.to_dict() for e in self.long_term_memory],
            "strategies": [s.to_dict() for s in self.strategies],
            "performance_history": [list(p) for p in self.performance_history],
            "evolution_count": self.evolution_count,
            "known_states": sorted(self.known_states),
            "creation_timestamp": self.creation_timestamp,
            "last_evolution_timestamp": self.last_evolution_timestamp,
            "adaptation_threshold": self.adaptation_threshold,
            "evolution_threshold": self.evolution_threshold,
            "meta_learning_rate": self.meta_learning_rate,
            "current_episode": self.current_episode.to_dict(),
            "network_complexity": self.network_complexity,
        }

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> LearningAgent:
        agent = cls(list(data["actions"]), data["state"])
        agent.q_table = {
            action: {state: float(v) for state, v in row.items()}
            for action, row in data["q_table"].items()
        }
        agent.learning_rate = float(data["learning_rate"])
        agent.discount_factor = float(data["discount_factor"])
        agent.exploration_rate = float(data["exploration_rate"])
        agent.long_term_memory = [
            EpisodeMemory.from_dict(e) for e in data["long_term_memory"]
        ]
        agent.strategies = [Strategy.from_dict(s) for s in data["strategies"]]
        agent.performance_history = [
            (int(t), float(p)) for t, p in data["performance_history"]
        ]
        agent.evolution_count = int(data["evolution_count"])
        agent.known_states = set(data["known_states"])
        agent.creation_timestamp = int(data["creation_timestamp"])
        agent.last_evolution_timestamp = int(data["last_evolution_timestamp"])
        agent.adaptation_threshold = float(data["adaptation_threshold"])
        agent.evolution_threshold = float(data["evolution_threshold"])
        agent.meta_learning_rate = float(data["meta_learning_rate"])
        agent.current_episode = EpisodeMemory.from_dict(data["current_episode"])
        agent.network_complexity = int(data["network_complexity"])
        return agent

    def save_to_file(self, path: str | Path) -> None:
        """Write the agent as pretty-printed JSON."""
        Path(path).write_text(
            json.dumps(self._to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
        )
        print(f"[AURORAE++] Agent sauvegardé dans {path}")

    @classmethod
    def load_from_file(cls, path: str | Path) -> LearningAgent:
        """Read an agent previously written by save_to_file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        try:
            agent = cls._from_dict(data)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid agent file: {exc}") from exc
        print(f"[AURORAE++] Agent chargé depuis {path}")
        return agent