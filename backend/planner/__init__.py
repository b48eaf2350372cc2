"""Cadence planner backend: projection and consistency engine for tasks."""
