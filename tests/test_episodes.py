import pytest

from aurorae.episodes import AgentConfig, EpisodeMemory, Strategy

ACTIONS = ["action1", "action2", "action3"]


def _strategy():
    return Strategy(
        "test_strategy", {"state1": "action1", "state2": "action2"}, "context"
    )


def test_episode_memory():
    episode = EpisodeMemory.from_state("start")
    assert episode.state_history == ["start"]
    assert episode.action_history == []
    assert episode.reward_history == []

    episode.add_transition("action1", 1.0, "state2")
    assert episode.state_history == ["start", "state2"]
    assert episode.action_history == ["action1"]
    assert episode.reward_history == [1.0]
    assert episode.total_reward == 1.0

    assert episode.calculate_performance() == 1.0
    assert episode.performance_score == 1.0


def test_empty_episode_performance_is_zero():
    episode = EpisodeMemory.from_state("s")
    assert episode.calculate_performance() == 0.0


def test_performance_is_mean_reward():
    episode = EpisodeMemory.from_state("s")
    episode.add_transition("a", 1.0, "s1")
    episode.add_transition("b", 0.0, "s2")
    assert episode.calculate_performance() == pytest.approx(0.5)


def test_episode_dict_round_trip():
    episode = EpisodeMemory.from_state("s")
    episode.add_transition("a", 0.25, "t")
    assert EpisodeMemory.from_dict(episode.to_dict()) == episode


def test_strategy_defaults():
    strategy = _strategy()
    assert strategy.effectiveness == 0.5
    assert strategy.usage_count == 0
    assert strategy.creation_context == "context"


def test_strategy_mutation():
    strategy = _strategy()
    mutated = strategy.create_mutation("mutation", 1.0, ACTIONS)
    assert mutated.name == "mutation"
    assert mutated.effectiveness == pytest.approx(strategy.effectiveness * 0.8)
    assert "Mutation de" in mutated.creation_context


def test_mutation_keeps_states_and_uses_available_actions():
    strategy = _strategy()
    for _ in range(20):
        mutated = strategy.create_mutation("m", 1.0, ACTIONS)
        assert set(mutated.state_action_map) == {"state1", "state2"}
        assert set(mutated.state_action_map.values()) <= set(ACTIONS)
    assert strategy.state_action_map == {"state1": "action1", "state2": "action2"}


def test_mutation_context_counts_changes():
    mutated = _strategy().create_mutation("m", 1.0, ACTIONS)
    assert mutated.creation_context == "Mutation de test_strategy avec 2 changements "


def test_mutation_without_actions_leaves_map_unchanged():
    strategy = _strategy()
    mutated = strategy.create_mutation("m", 1.0, [])
    assert mutated.state_action_map == strategy.state_action_map


def test_mutation_with_zero_rate_changes_nothing():
    strategy = _strategy()
    mutated = strategy.create_mutation("m", 0.0, ACTIONS)
    assert mutated.state_action_map == strategy.state_action_map
    assert "avec 0 changements" in mutated.creation_context


def test_update_effectiveness_is_moving_average():
    strategy = _strategy()
    strategy.update_effectiveness(1.0)
    assert strategy.effectiveness == pytest.approx(0.55)


def test_strategy_dict_round_trip():
    strategy = _strategy()
    strategy.usage_count = 4
    assert Strategy.from_dict(strategy.to_dict()) == strategy


def test_agent_config_defaults():
    config = AgentConfig()
    assert (
        config.learning_rate,
        config.discount_factor,
        config.exploration_rate,
        config.adaptation_threshold,
        config.evolution_threshold,
        config.meta_learning_rate,
    ) == (0.1, 0.9, 0.1, 0.2, 0.5, 0.01)