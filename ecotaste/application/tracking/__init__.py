"""Meal tracking use cases."""
