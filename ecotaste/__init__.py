"""EcoTaste backend: cafeteria sustainability tracking service."""

__version__ = "0.1.0"
