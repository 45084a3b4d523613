"""Cafeteria menu use cases."""
