"""Parsing and classification: pure functions over in-memory text."""
