"""Carbon tracking: meal records, user stats and the impact calculator."""
