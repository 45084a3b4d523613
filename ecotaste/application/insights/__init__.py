"""Popularity, waste and recommendation use cases."""
