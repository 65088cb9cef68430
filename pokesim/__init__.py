"""PokeSim - a deterministic turn-based Pokemon battle engine."""

__version__ = "0.1.0"
