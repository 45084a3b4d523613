"""Domain layer for carbon tracking.

Pure business rules (impact scoring, aggregation, recommendations) with no
dependency on persistence, transport or the vision provider.
"""
