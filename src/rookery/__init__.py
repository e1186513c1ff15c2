"""Rookery: a chess rules engine with a small negamax opponent."""

__version__ = "0.1.0"
