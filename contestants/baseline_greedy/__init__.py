"""Greedy baseline agent for Chroma Merge."""

from contestants.baseline_greedy.agent import ChromaAgent, create_agent

__all__ = ["ChromaAgent", "create_agent"]
