"""Консольні інструменти (CLI)."""
