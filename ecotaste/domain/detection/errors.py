"""Food detection failures.

Every failure carries the message shown to the user. Nothing is retried
automatically: the user starts a new scan.
"""


class FoodDetectionError(Exception):
    """Base exception for food detection failures."""

    user_message = "Food detection failed. Please try again."

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail


class DetectionRateLimitedError(FoodDetectionError):
    """Provider answered 429."""

    user_message = "Rate limit exceeded. Please try again in a moment."


class DetectionQuotaExceededError(FoodDetectionError):
    """Provider answered 402 or reported an exhausted quota."""

    user_message = "AI usage limit reached. Please try again later."


class NoFoodDetectedError(FoodDetectionError):
    """Zero items, or a response that could not be parsed."""

    user_message = "No food items could be identified in this photo. Try another picture."


class DetectionTransportError(FoodDetectionError):
    """Connection failure, timeout or unexpected API status."""

    user_message = "Food detection service is unreachable. Please try again."
