"""Gravity-driven falling sand cellular automaton."""

__version__ = "0.1.0"
