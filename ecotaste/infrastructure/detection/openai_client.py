"""OpenAI-compatible food detection client.

Implements IFoodDetectionProvider with chat completions structured output.
Any OpenAI-compatible gateway works through ``base_url``.

Failures are mapped to typed FoodDetectionError subclasses. Nothing is
retried: the SDK's own retries are disabled and the user starts a new
scan.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import structlog
from openai import (
    APIConnectionError,
    APIStatusError,
    AsyncOpenAI,
    ContentFilterFinishReasonError,
    LengthFinishReasonError,
    RateLimitError,
)
from pydantic import ValidationError

from ecotaste.domain.detection.entities import DetectedFood
from ecotaste.domain.detection.errors import (
    DetectionQuotaExceededError,
    DetectionRateLimitedError,
    DetectionTransportError,
    FoodDetectionError,
    NoFoodDetectedError,
)
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.errors import EcoTasteError
from ecotaste.infrastructure.detection.models import FoodDetectionResponse
from ecotaste.infrastructure.detection.prompts import (
    FOOD_DETECTION_SYSTEM_PROMPT,
    FOOD_DETECTION_USER_PROMPT,
)

logger = structlog.get_logger(__name__)

QUOTA_ERROR_CODE = "insufficient_quota"


class OpenAIFoodDetectionClient:
    """
    Food detection over an OpenAI-compatible chat completions API.

    Example:
        >>> async with OpenAIFoodDetectionClient(api_key="sk-...") as client:
        ...     foods = await client.detect_foods("data:image/jpeg;base64,...")
        ...     print([f.name for f in foods])
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        temperature: float = 0.1,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Args:
            api_key: API key of the provider or gateway
            model: Vision-capable model name
            base_url: Gateway URL (None for the OpenAI API)
            timeout: Request timeout in seconds
            temperature: Sampling temperature (low for consistency)
            client: Pre-configured AsyncOpenAI client (for testing)

        Raises:
            ValueError: If neither api_key nor client is provided
        """
        if client is None and not api_key:
            raise ValueError("OPENAI_API_KEY not set. Pass api_key or a configured client.")
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client: Optional[AsyncOpenAI] = client
        self.model = model
        self.temperature = temperature

    async def __aenter__(self) -> OpenAIFoodDetectionClient:
        if self._client is None:
            self._client = self._create_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    def _create_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )

    async def detect_foods(self, image: str) -> List[DetectedFood]:
        """
        Detect food items in a photo.

        Args:
            image: Base64 data URL or http(s) URL

        Returns:
            Detected foods (at least one)

        Raises:
            DetectionRateLimitedError: HTTP 429
            DetectionQuotaExceededError: HTTP 402 or insufficient_quota
            NoFoodDetectedError: Zero items or unparsable output
            DetectionTransportError: Connection, timeout or other API status
        """
        if self._client is None:
            self._client = self._create_client()

        start_time = time.time()
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": FOOD_DETECTION_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": FOOD_DETECTION_USER_PROMPT},
                    {"type": "image_url", "image_url": {"url": image}},
                ],
            },
        ]

        try:
            completion = await self._client.chat.completions.parse(
                model=self.model,
                messages=messages,  # type: ignore[arg-type]
                response_format=FoodDetectionResponse,
                temperature=self.temperature,
            )
        except Exception as e:
            raise self._map_error(e) from e

        parsed = completion.choices[0].message.parsed if completion.choices else None
        if parsed is None or not parsed.foods:
            logger.info("No food detected", model=self.model)
            raise NoFoodDetectedError("Provider returned no food items")

        try:
            foods = [self._to_domain(item) for item in parsed.foods]
        except EcoTasteError as e:
            logger.warning("Food detection output rejected", error=str(e))
            raise NoFoodDetectedError(str(e)) from e

        logger.info(
            "Food detection complete",
            model=self.model,
            item_count=len(foods),
            processing_time_ms=int((time.time() - start_time) * 1000),
        )
        return foods

    @staticmethod
    def _to_domain(item: Any) -> DetectedFood:
        return DetectedFood(
            name=item.name.strip(),
            category=FoodCategory.parse(item.category),
            carbon_footprint=float(item.carbon_footprint),
            is_plant_based=item.is_plant_based,
        )

    def _map_error(self, error: Exception) -> FoodDetectionError:
        """Translate SDK and parsing errors into detection errors."""
        if isinstance(error, FoodDetectionError):
            return error

        if isinstance(error, APIStatusError):
            code = getattr(error, "code", None)
            logger.warning(
                "Food detection API error",
                status_code=error.status_code,
                code=code,
                error=str(error),
            )
            if error.status_code == 402 or code == QUOTA_ERROR_CODE:
                return DetectionQuotaExceededError(str(error))
            if isinstance(error, RateLimitError) or error.status_code == 429:
                return DetectionRateLimitedError(str(error))
            return DetectionTransportError(str(error))

        if isinstance(error, APIConnectionError):
            # Includes APITimeoutError
            logger.warning("Food detection unreachable", error=str(error))
            return DetectionTransportError(str(error))

        if isinstance(
            error, (ValidationError, LengthFinishReasonError, ContentFilterFinishReasonError)
        ):
            logger.warning("Food detection output unparsable", error=str(error))
            return NoFoodDetectedError(str(error))

        logger.error("Food detection failed", error=str(error), exc_info=True)
        return DetectionTransportError(str(error))
