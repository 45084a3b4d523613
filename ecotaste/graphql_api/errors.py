"""Mapping of exceptions to mutation error results.

Every mutation returns a ``Success | Error`` union. The error carries the
exception message and a stable code clients can branch on.
"""

from typing import Any, Callable, Dict, Tuple, Type, TypeVar
import logging

from ecotaste.domain.detection.errors import (
    DetectionQuotaExceededError,
    DetectionRateLimitedError,
    FoodDetectionError,
    NoFoodDetectedError,
)
from ecotaste.domain.shared.errors import (
    MenuItemNotFoundError,
    PermissionDeniedError,
    ScanInProgressError,
    StatsConflictError,
    ValidationError,
)
from ecotaste.domain.shared.ports.auth_provider import InvalidTokenError
from ecotaste.infrastructure.persistence.errors import PersistenceError

logger = logging.getLogger(__name__)

TError = TypeVar("TError")

# Checked in order: subclasses before their base classes
ERROR_CODES: Tuple[Tuple[Type[Exception], str], ...] = (
    (ValidationError, "VALIDATION_ERROR"),
    (MenuItemNotFoundError, "NOT_FOUND"),
    (PermissionDeniedError, "FORBIDDEN"),
    (InvalidTokenError, "FORBIDDEN"),
    (StatsConflictError, "CONFLICT"),
    (ScanInProgressError, "SCAN_IN_PROGRESS"),
    (DetectionRateLimitedError, "RATE_LIMITED"),
    (DetectionQuotaExceededError, "QUOTA_EXCEEDED"),
    (NoFoodDetectedError, "NO_FOOD_DETECTED"),
    (FoodDetectionError, "DETECTION_UNAVAILABLE"),
    (PersistenceError, "PERSISTENCE_ERROR"),
)

INTERNAL_ERROR = "INTERNAL_ERROR"

_MESSAGES: Dict[str, str] = {
    "CONFLICT": "Your stats were updated from another device. Please try again.",
    "PERSISTENCE_ERROR": "Could not save your data. Please try again.",
    INTERNAL_ERROR: "Unexpected error. Please try again.",
}


def error_code(error: Exception) -> str:
    """Stable code for an exception.

    Examples:
        >>> error_code(EmptyMealError("A meal needs at least one food"))
        'VALIDATION_ERROR'
        >>> error_code(RuntimeError("boom"))
        'INTERNAL_ERROR'
    """
    for error_type, code in ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return INTERNAL_ERROR


def error_message(error: Exception, code: str) -> str:
    if isinstance(error, FoodDetectionError):
        return error.user_message
    return _MESSAGES.get(code) or str(error)


def to_error(error: Exception, error_type: Callable[..., TError], **context: Any) -> TError:
    """Build a mutation error result from an exception.

    Unexpected exceptions are logged with their traceback; known ones are
    logged as warnings.
    """
    code = error_code(error)
    if code == INTERNAL_ERROR:
        logger.error(
            "Mutation failed unexpectedly",
            exc_info=error,
            extra={"error_type": type(error).__name__, **context},
        )
    else:
        logger.warning(
            "Mutation rejected",
            extra={"code": code, "error": str(error), **context},
        )
    return error_type(message=error_message(error, code), code=code)
