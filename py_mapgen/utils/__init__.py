"""Shared utilities: random sources and logging setup."""
