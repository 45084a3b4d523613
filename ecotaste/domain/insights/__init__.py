"""Insights: popularity and waste aggregation, recommendations, leaderboard."""
