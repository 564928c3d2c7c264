# aurorae

A library of building blocks for simulating an autonomous, self-improving agent.
All state lives in memory or in small JSON files. Most behaviour is randomised. The
classes that use randomness accept an optional `random.Random` so that results can
be reproduced.

## Modules

- `aurorae.agent.LearningAgent` is a tabular Q-learning agent. It chooses actions
  in one of three ways: from a developed strategy, by exploration, or by picking
  among its top three actions. It adapts its exploration and learning rates. It can
  evolve by raising its network complexity and discovering `action_evolved_N`
  actions. It archives episodes and replays them (`dream`) at a reduced learning
  rate.
  - `performance_report()` returns a text report.
  - `print_q_table()` prints a sample of the Q-table and returns it.
  - `save_to_file(path)` and `LearningAgent.load_from_file(path)` store the agent
    as JSON.
  - Strategy contexts can draw on text files in an inspiration directory, passed as
    `inspiration_dir`.
- `aurorae.episodes` holds the supporting types:
  - `EpisodeMemory` records transitions and their mean reward.
  - `Strategy` is a state-to-action map. It has a moving-average effectiveness and
    `create_mutation`.
  - `AgentConfig` holds the hyperparameters.
- `aurorae.vision.VisionEngine` keeps strategic projections, each an
  `ObjectiveType` with a horizon in days and a priority.
  - `autorevise()` shortens each horizon by a day. It raises each priority by one,
    up to 10, and drops expired projections.
  - The state is saved to `<state_dir>/vision.json`, by default
    `aurorae_state/vision.json`. `VisionEngine.load(state_dir)` reads it back.
- `aurorae.reproduction.ReproductionEngine` spawns `AuroraInstance` clones. Each
  clone has a generation number and a parent (the previous clone). Other methods:
  `destroy_instance`, `get_active_instances`, `list_instances` and
  `get_generation_lineage`. Instances are saved to `<state_dir>/instances.json`.
- `aurorae.network_builder.NetworkMap` creates `SubChain`s and links them in both
  directions. `map_summary()` prints and returns the topology.
- `aurorae.nft_minter.NFTMinter` creates collections and mints NFTs. Each NFT gets a
  random rarity from 1 to 10 and an evolution potential from 1 to 5.
  - `add_attribute` and `set_contract_address` record NFT and collection details.
  - `evolve_nft` requires a potential of at least 2.
  - `auto_evolve_collections` evolves up to three eligible NFTs per collection.
  - `create_evolutionary_collection` builds a five-stage collection.
  - Failures raise `NFTError`.
- `aurorae.security.SecuritySystem` keeps `SecurityRule`s and `Threat`s.
  - With autonomous defense on, a detected threat is resolved with a probability
    set by its `ThreatLevel`. Each success raises the security level.
  - `analyze_threats()` simulates up to two threats and refines the rules.
- `aurorae.validator` provides two checks:
  - `validate_operation` raises `ValidationError` when the content contains
    `unsafe` or `std::mem::transmute`.
  - `check_integrity` returns an `IntegrityResult`. Its score, between 0.85 and 1.0,
    maps to an `IntegrityStatus`.
- `aurorae.mutation.mutate_module_code(path)` rewrites `fn hello(` as
  `fn evolved_hello(` in `<path>/mod.rs`.
  - It returns a new UUID string when the file changed, and `None` when nothing
    matched.
  - It raises `MutationError` if the file is missing or cannot be read or written.
- `aurorae.refactor.refactor_code(code)` passes the code through
  `rustfmt --emit=stdout`.
- `aurorae.rust_analyzer.analyze(code)` runs `rust-analyzer check -` and returns an
  `AnalysisResult`.
- Both of these need the tool on `PATH`. They raise `RuntimeError` if it cannot be
  started.
- `aurorae.openai.OpenAIBridge(api_key).ask_strategy(question)` posts a chat
  completion request for `gpt-4` and returns the first answer's text. It raises
  `StrategyError` on network, JSON or content errors.
- `aurorae.update_checker.UpdateChecker.check_for_updates()` fetches
  `https://api.github.com/repos/<repo_owner>/releases/latest`. It prints whether the
  tag differs from `current_version` and returns a `GitHubRelease`. It raises
  `UpdateCheckError` on failure.
  - Only `repo_owner` goes into the URL, so give it in the form `owner/repo`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from aurorae.agent import LearningAgent
from aurorae.episodes import AgentConfig

agent = LearningAgent.with_config(
    ["generate_code", "refactor_code", "analyze_market"],
    "initial_state",
    AgentConfig(learning_rate=0.08, discount_factor=0.95, exploration_rate=0.12),
)

for step in range(1, 50):
    action = agent.choose_action()
    reward = 1.0 if action == "generate_code" else 0.2
    agent.learn(reward, f"state_{step}")

print(agent.performance_report())
agent.save_to_file("agent.json")
```

```python
from aurorae.vision import ObjectiveType, VisionEngine

vision = VisionEngine.load()
vision.add_projection(ObjectiveType.EXPAND_CHAINS, 30, 9, "Deploy three sub-chains")
vision.autorevise()
vision.roadmap()
```

## What it does not do

This is a library only:

- There is no command-line program and no main loop that runs the pieces together.
- Nothing is deployed to or read from a blockchain. NFT collections, sub-chains and
  contract addresses are in-memory records.
- The security system simulates threats. It does not watch the host.