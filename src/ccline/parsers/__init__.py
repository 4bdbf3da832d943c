"""Transcript and token usage parsers."""
