import math
import random

import pytest

from aurorae.agent import LearningAgent
from aurorae.episodes import AgentConfig, EpisodeMemory, Strategy


def make_agent(tmp_path, actions=("a", "b", "c"), state="start", seed=1):
    return LearningAgent(
        list(actions), state, rng=random.Random(seed), inspiration_dir=tmp_path / "none"
    )


def test_new_agent_initialization(tmp_path):
    actions = ["a", "b", "c"]
    agent = make_agent(tmp_path, actions)
    assert agent.actions == actions
    assert agent.state == "start"
    assert len(agent.known_states) == 1
    assert "start" in agent.known_states
    assert agent.q_table == {"a": {"start": 0.0}, "b": {"start": 0.0}, "c": {"start": 0.0}}
    assert agent.network_complexity == 1
    assert agent.current_episode.state_history == ["start"]


def test_with_config_applies_values():
    config = AgentConfig(
        learning_rate=0.08,
        discount_factor=0.95,
        exploration_rate=0.12,
        adaptation_threshold=0.18,
        evolution_threshold=0.45,
        meta_learning_rate=0.015,
    )
    agent = LearningAgent.with_config(["x", "y"], "initial_state", config)
    assert agent.learning_rate == 0.08
    assert agent.discount_factor == 0.95
    assert agent.exploration_rate == 0.12
    assert agent.adaptation_threshold == 0.18
    assert agent.evolution_threshold == 0.45
    assert agent.meta_learning_rate == 0.015
    assert agent.state == "initial_state"


def test_update_q_value_registers_state_and_updates(tmp_path):
    agent = make_agent(tmp_path, ["a", "b"], "s0")
    agent.update_q_value("a", 1.0, "s1")
    assert agent.q_table["a"]["s0"] == pytest.approx(0.11)
    assert agent.q_table["b"]["s1"] == 0.0
    assert "s1" in agent.known_states


def test_choose_action_exploits_top_actions(tmp_path):
    agent = make_agent(tmp_path, ["a", "b", "c", "d", "e"])
    agent.exploration_rate = 0.0
    for value, action in enumerate(["a", "b", "c", "d", "e"]):
        agent.q_table[action]["start"] = float(value)
    chosen = {agent.choose_action() for _ in range(50)}
    assert chosen <= {"c", "d", "e"}


def test_choose_action_uses_strategy(tmp_path):
    agent = make_agent(tmp_path)
    strategy = Strategy("s", {"start": "b"}, "ctx")
    agent.strategies.append(strategy)
    agent.exploration_rate = 0.0
    agent.q_table["a"]["start"] = 5.0
    results = [agent.choose_action() for _ in range(200)]
    assert results.count("b") == strategy.usage_count + results.count("b") - strategy.usage_count
    assert strategy.usage_count > 0
    assert results.count("b") >= strategy.usage_count


def test_learn_moves_state_and_records(tmp_path):
    agent = make_agent(tmp_path)
    agent.learn(1.0, "next")
    assert agent.state == "next"
    assert agent.current_episode.reward_history == [1.0]
    assert agent.current_episode.state_history == ["start", "next"]
    assert len(agent.performance_history) == 2


def test_evaluate_performance_fresh_agent(tmp_path):
    agent = make_agent(tmp_path)
    perf = agent.evaluate_performance()
    assert perf == pytest.approx(0.3 * (1 - math.exp(-0.1)))
    assert agent.performance_history[-1][1] == perf
    assert agent.current_episode.performance_score == perf


def test_long_episode_is_archived(tmp_path):
    agent = make_agent(tmp_path)
    for step in range(50):
        agent.learn(0.5, f"s{step}")
    assert len(agent.long_term_memory) == 1
    assert len(agent.long_term_memory[0].state_history) == 51
    assert agent.current_episode.state_history == ["s49"]


def test_add_new_action_to_q_table(tmp_path):
    agent = make_agent(tmp_path)
    agent.update_q_value("a", 0.0, "other")
    agent.add_new_action_to_q_table("z")
    assert agent.actions[-1] == "z"
    assert agent.q_table["z"] == {"start": 0.0, "other": 0.0}
    agent.add_new_action_to_q_table("z")
    assert agent.actions.count("z") == 1


def test_explore_new_actions(tmp_path):
    agent = make_agent(tmp_path)
    agent.explore_new_actions()
    added = agent.actions[3:]
    assert 1 <= len(added) <= 3
    assert added == [f"action_evolved_{3 + i}" for i in range(len(added))]


def test_evolve_network(tmp_path):
    agent = make_agent(tmp_path)
    agent.evolve_network()
    assert agent.network_complexity == 2
    assert agent.evolution_count == 1
    assert agent.adaptation_threshold == pytest.approx(0.18)
    assert agent.evolution_threshold == pytest.approx(0.425)
    assert agent.exploration_rate == pytest.approx(0.09)
    assert len(agent.actions) > 3


def test_generate_strategy_requires_ten_states(tmp_path):
    agent = make_agent(tmp_path)
    agent.generate_strategy()
    assert agent.strategies == []

    for i in range(9):
        agent.update_q_value("a", 0.0, f"s{i}")
    agent.q_table["b"]["s3"] = 2.0
    agent.generate_strategy()
    assert len(agent.strategies) == 1
    strategy = agent.strategies[0]
    assert strategy.name == "strategy_1"
    assert len(strategy.state_action_map) == 10
    assert strategy.state_action_map["s3"] == "b"
    assert strategy.creation_context == "Evolution #0, Performance 0.00"


def test_explore_new_strategy_mutates_best(tmp_path):
    agent = make_agent(tmp_path)
    agent.strategies.append(Strategy("strategy_1", {"start": "a", "x": "b"}, "ctx"))
    agent.explore_new_strategy()
    assert len(agent.strategies) == 2
    mutated = agent.strategies[1]
    assert mutated.name == "strategy_strategy_1_2"
    assert mutated.effectiveness == pytest.approx(0.4)
    assert "Mutation de strategy_1" in mutated.creation_context


def test_dream_replays_memory(tmp_path):
    agent = make_agent(tmp_path)
    episode = EpisodeMemory.from_state("start")
    episode.add_transition("a", 1.0, "end")
    agent.long_term_memory.append(episode)
    agent.dream()
    assert agent.q_table["a"]["start"] > 0.0
    assert agent.learning_rate == pytest.approx(0.1)
    assert "end" in agent.known_states


def test_print_q_table(tmp_path, capsys):
    agent = make_agent(tmp_path, ["a"])
    agent.q_table["a"]["start"] = 1.25
    text = agent.print_q_table()
    assert "Table Q (1 états, 1 actions)" in text
    assert "  État: start" in text
    assert "    → a: 1.250" in text
    assert text in capsys.readouterr().out


def test_performance_report(tmp_path):
    agent = make_agent(tmp_path)
    agent.strategies.append(Strategy("best", {}, "ctx", effectiveness=0.9))
    report = agent.performance_report()
    assert "États connus: 1\n" in report
    assert "Actions disponibles: 3\n" in report
    assert "Performance actuelle: 0.000" in report
    assert "1. best (eff: 0.900, utilisations: 0)" in report


def test_performance_report_trend(tmp_path):
    agent = make_agent(tmp_path)
    agent.performance_history = [(0, 0.0)] * 5 + [(0, 1.0)]
    assert "Tendance: ↑ (+1.000)" in agent.performance_report()


def test_save_and_load_round_trip(tmp_path):
    agent = make_agent(tmp_path)
    agent.update_q_value("b", 2.0, "s1")
    agent.strategies.append(Strategy("st", {"start": "b"}, "ctx"))
    path = tmp_path / "agent.json"
    agent.save_to_file(path)
    loaded = LearningAgent.load_from_file(path)
    assert loaded.actions == agent.actions
    assert loaded.q_table == agent.q_table
    assert loaded.known_states == agent.known_states
    assert loaded.strategies[0].state_action_map == {"start": "b"}
    assert loaded.current_episode.state_history == ["start"]


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        LearningAgent.load_from_file(tmp_path / "missing.json")