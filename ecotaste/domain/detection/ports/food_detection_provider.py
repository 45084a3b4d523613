"""Port (interface) for food detection providers.

External vision providers (e.g. an OpenAI-compatible gateway) implement
this contract; the domain only consumes the output shape.
"""

from typing import List, Protocol

from ecotaste.domain.detection.entities import DetectedFood


class IFoodDetectionProvider(Protocol):
    """
    Interface for food detection providers.

    Implementations:
    - OpenAI-compatible chat completions with structured output
    - Stub provider (development and tests)
    """

    async def detect_foods(self, image: str) -> List[DetectedFood]:
        """
        Detect food items in a photo.

        Args:
            image: Base64 data URL or http(s) URL of the photo

        Returns:
            Detected foods, never empty

        Raises:
            DetectionRateLimitedError: Provider rate limit hit
            DetectionQuotaExceededError: Provider quota exhausted
            NoFoodDetectedError: Nothing recognisable in the photo
            DetectionTransportError: Provider unreachable

        Example:
            >>> foods = await provider.detect_foods("data:image/jpeg;base64,...")
            >>> [f.name for f in foods]
            ['Lentil Soup', 'Brown Rice']
        """
        ...
