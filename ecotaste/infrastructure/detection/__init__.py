"""Food detection providers."""
