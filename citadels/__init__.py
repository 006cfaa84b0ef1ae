"""Citadels for one human and several automated opponents."""

__version__ = "0.1.0"
