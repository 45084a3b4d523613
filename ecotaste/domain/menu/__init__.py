"""Cafeteria menu catalog: categories, items and reference data."""
