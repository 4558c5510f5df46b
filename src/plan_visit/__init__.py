"""Exact visiting-tour planner and mission dispatcher for autonomous vehicles."""

__version__ = "0.1.0"
