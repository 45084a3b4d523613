"""Provider factory for food detection.

Environment variable: DETECTION_PROVIDER
Values:
    - "openai": OpenAI-compatible API (requires OPENAI_API_KEY,
      optional OPENAI_BASE_URL and DETECTION_MODEL)
    - "stub": Stub provider (default)
"""

from typing import Union

from ecotaste.infrastructure.config import (
    get_detection_model,
    get_detection_provider,
    get_openai_api_key,
    get_openai_base_url,
)
from ecotaste.infrastructure.detection.openai_client import OpenAIFoodDetectionClient
from ecotaste.infrastructure.detection.stub_provider import StubFoodDetectionProvider

DetectionProvider = Union[OpenAIFoodDetectionClient, StubFoodDetectionProvider]


def create_food_detection_provider() -> DetectionProvider:
    """Create the detection provider based on DETECTION_PROVIDER.

    Both providers are async context managers; the app enters the returned
    provider in its lifespan.
    """
    mode = get_detection_provider()

    if mode == "openai":
        api_key = get_openai_api_key()
        if not api_key:
            raise ValueError(
                "DETECTION_PROVIDER=openai but OPENAI_API_KEY not set. "
                "Set OPENAI_API_KEY in .env or use DETECTION_PROVIDER=stub"
            )
        return OpenAIFoodDetectionClient(
            api_key=api_key,
            model=get_detection_model(),
            base_url=get_openai_base_url(),
        )

    if mode != "stub":
        raise ValueError(f"Unknown DETECTION_PROVIDER: {mode}")
    return StubFoodDetectionProvider()
