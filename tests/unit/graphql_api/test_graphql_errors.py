"""Unit tests for mapping exceptions to mutation error results."""

import logging

import pytest

from ecotaste.domain.detection.errors import (
    DetectionQuotaExceededError,
    DetectionRateLimitedError,
    DetectionTransportError,
    NoFoodDetectedError,
)
from ecotaste.domain.shared.errors import (
    EmptyMealError,
    InvalidCategoryError,
    MenuItemNotFoundError,
    PermissionDeniedError,
    ScanInProgressError,
    StatsConflictError,
)
from ecotaste.domain.shared.ports.auth_provider import InvalidTokenError
from ecotaste.graphql_api.errors import error_code, error_message, to_error
from ecotaste.graphql_api.types_tracking import LogMealError, ScanMealError
from ecotaste.infrastructure.persistence.errors import PersistenceError


class TestErrorCode:
    @pytest.mark.parametrize(
        "error, code",
        [
            (EmptyMealError("A meal needs at least one food"), "VALIDATION_ERROR"),
            (InvalidCategoryError("Unknown category: snacks"), "VALIDATION_ERROR"),
            (MenuItemNotFoundError("Menu item 99 not found"), "NOT_FOUND"),
            (PermissionDeniedError("Cafeteria role required"), "FORBIDDEN"),
            (InvalidTokenError("Token has expired"), "FORBIDDEN"),
            (StatsConflictError("version moved"), "CONFLICT"),
            (ScanInProgressError("scan running"), "SCAN_IN_PROGRESS"),
            (DetectionRateLimitedError(), "RATE_LIMITED"),
            (DetectionQuotaExceededError(), "QUOTA_EXCEEDED"),
            (NoFoodDetectedError(), "NO_FOOD_DETECTED"),
            (DetectionTransportError(), "DETECTION_UNAVAILABLE"),
            (PersistenceError("mongo down"), "PERSISTENCE_ERROR"),
            (RuntimeError("boom"), "INTERNAL_ERROR"),
        ],
    )
    def test_codes(self, error, code) -> None:
        assert error_code(error) == code


class TestErrorMessage:
    def test_domain_message_is_kept(self) -> None:
        error = MenuItemNotFoundError("Menu item 99 not found")

        assert error_message(error, "NOT_FOUND") == "Menu item 99 not found"

    def test_detection_errors_use_user_message(self) -> None:
        error = DetectionRateLimitedError("429 from upstream")

        assert (
            error_message(error, "RATE_LIMITED")
            == "Rate limit exceeded. Please try again in a moment."
        )

    def test_internal_details_are_hidden(self) -> None:
        assert (
            error_message(KeyError("stats"), "INTERNAL_ERROR")
            == "Unexpected error. Please try again."
        )
        assert (
            error_message(PersistenceError("connection refused"), "PERSISTENCE_ERROR")
            == "Could not save your data. Please try again."
        )

    def test_conflict_message(self) -> None:
        message = error_message(StatsConflictError("expected 3, found 4"), "CONFLICT")

        assert message == "Your stats were updated from another device. Please try again."


class TestToError:
    def test_builds_result_type(self) -> None:
        result = to_error(EmptyMealError("A meal needs at least one food"), LogMealError)

        assert isinstance(result, LogMealError)
        assert result.code == "VALIDATION_ERROR"
        assert result.message == "A meal needs at least one food"

    def test_known_error_logged_as_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="ecotaste.graphql_api.errors"):
            to_error(NoFoodDetectedError(), ScanMealError, mutation="scanMeal")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.code == "NO_FOOD_DETECTED"
        assert record.mutation == "scanMeal"

    def test_unexpected_error_logged_with_traceback(self, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger="ecotaste.graphql_api.errors"):
            result = to_error(ZeroDivisionError("division by zero"), LogMealError)

        assert result.code == "INTERNAL_ERROR"
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None
        assert record.error_type == "ZeroDivisionError"
