"""Phrase dictionary, built-in rule tables and the deterministic rewriter."""
