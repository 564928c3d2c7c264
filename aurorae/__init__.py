"""Building blocks for simulating an autonomous agent: Q-learning, vision, clones, NFTs and security."""

__version__ = "0.1.0"