"""Scan meal command and handler.

Step 1 of the photo flow:
1. scanMeal -> detected foods with carbon estimate, nothing persisted
2. logMeal(source=PHOTO) -> user confirms the foods they actually ate
"""

from dataclasses import dataclass
from typing import List, Set
import logging

from ecotaste.domain.detection.entities import DetectedFood
from ecotaste.domain.detection.ports.food_detection_provider import IFoodDetectionProvider
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import MissingImageError, ScanInProgressError
from ecotaste.domain.tracking.impact_calculator import carbon_saved_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanMealCommand:
    """
    Command: Detect foods in a meal photo.

    Attributes:
        account: Caller identity
        image: Base64 data URL or http(s) URL of the photo
    """

    account: AccountContext
    image: str


@dataclass(frozen=True)
class ScanResult:
    """Detected foods with the impact the meal would have if logged."""

    foods: List[DetectedFood]
    total_carbon: float
    is_plant_based: bool
    estimated_carbon_saved: float


class InFlightScans:
    """Accounts with a detection request outstanding.

    One instance is shared by all requests of the process. Membership is
    checked and claimed without awaiting in between, so two coroutines
    cannot both claim the same account.
    """

    def __init__(self) -> None:
        self._accounts: Set[str] = set()

    def claim(self, account_id: str) -> None:
        if account_id in self._accounts:
            raise ScanInProgressError(
                f"A scan is already in progress for account {account_id}"
            )
        self._accounts.add(account_id)

    def release(self, account_id: str) -> None:
        self._accounts.discard(account_id)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts


class ScanMealCommandHandler:
    """Handler for ScanMealCommand."""

    def __init__(self, provider: IFoodDetectionProvider, in_flight: InFlightScans):
        """
        Args:
            provider: Food detection provider port
            in_flight: Process-wide registry of running scans
        """
        self._provider = provider
        self._in_flight = in_flight

    async def handle(self, command: ScanMealCommand) -> ScanResult:
        """
        Run food detection on the photo.

        Raises:
            MissingImageError: Empty image payload
            ScanInProgressError: Another scan of this account is running
            FoodDetectionError: Provider failure, surfaced unchanged
        """
        if not command.image or not command.image.strip():
            raise MissingImageError("An image is required to scan a meal")

        account_id = command.account.account_id
        self._in_flight.claim(account_id)
        try:
            foods = await self._provider.detect_foods(command.image)
        finally:
            self._in_flight.release(account_id)

        total = sum(f.carbon_footprint for f in foods)
        plant_based = all(f.is_plant_based for f in foods)

        logger.info(
            "Meal photo scanned",
            extra={
                "account_id": account_id,
                "food_count": len(foods),
                "total_carbon": total,
                "is_plant_based": plant_based,
            },
        )

        return ScanResult(
            foods=foods,
            total_carbon=total,
            is_plant_based=plant_based,
            estimated_carbon_saved=carbon_saved_for(total, plant_based),
        )
