"""Detection ports."""

from ecotaste.domain.detection.ports.food_detection_provider import IFoodDetectionProvider

__all__ = ["IFoodDetectionProvider"]
