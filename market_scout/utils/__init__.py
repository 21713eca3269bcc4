"""Shared utilities: configuration, logging and number formatting."""
