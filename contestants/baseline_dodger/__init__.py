"""
Baseline Dodger Agent Package

A simple heuristic agent that steers into the adjacent lane with the most
free road ahead. Serves as a benchmark and example.
"""

from .agent import DodgerAgent, create_agent

__all__ = ["DodgerAgent", "create_agent"]
