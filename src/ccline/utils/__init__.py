"""Shared utilities for colors, formatting, git and model lookups."""
