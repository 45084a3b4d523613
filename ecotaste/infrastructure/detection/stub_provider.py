"""Stub food detection provider.

Returns deterministic foods without calling an external API. Used in
development and integration tests. Keywords in the image string select
the tray:

- "beef": Beef Burger + Garden Salad (mixed meal)
- "empty": no food (NoFoodDetectedError)
- "ratelimit" / "quota" / "offline": the matching provider failure
- anything else: Lentil Soup + Brown Rice (plant-based meal)
"""

from typing import List

from ecotaste.domain.detection.entities import DetectedFood
from ecotaste.domain.detection.errors import (
    DetectionQuotaExceededError,
    DetectionRateLimitedError,
    DetectionTransportError,
    NoFoodDetectedError,
)
from ecotaste.domain.menu.food_category import FoodCategory


class StubFoodDetectionProvider:
    """Stub implementation of IFoodDetectionProvider.

    Supports the async context manager protocol for lifespan compatibility.
    """

    async def __aenter__(self) -> "StubFoodDetectionProvider":
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        return None

    async def detect_foods(self, image: str) -> List[DetectedFood]:
        key = image.lower()

        if "ratelimit" in key:
            raise DetectionRateLimitedError("stub rate limit")
        if "quota" in key:
            raise DetectionQuotaExceededError("stub quota")
        if "offline" in key:
            raise DetectionTransportError("stub transport failure")
        if "empty" in key:
            raise NoFoodDetectedError("stub empty tray")

        if "beef" in key:
            return [
                DetectedFood("Beef Burger", FoodCategory.PROTEIN, 4.5, False),
                DetectedFood("Garden Salad", FoodCategory.VEGETABLES, 0.2, True),
            ]

        return [
            DetectedFood("Lentil Soup", FoodCategory.PROTEIN, 0.4, True),
            DetectedFood("Brown Rice", FoodCategory.GRAINS, 0.8, True),
        ]
