"""Tracking orchestrators."""

from .meal_logging_orchestrator import MealLoggingOrchestrator

__all__ = ["MealLoggingOrchestrator"]
