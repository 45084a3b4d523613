"""MongoDB implementation of the ledger repository.

Collections:
- ``meals``: one document per MealRecord, food snapshots embedded
- ``accounts``: one document per account holding stats, version and the
  activity feed (newest first, trimmed to 50 by ``$slice``)
- ``popularity``: one document per (account, item)
- ``waste_records``: one document per WasteRecord

Document schemas:
    meals:
    {
        "_id": "uuid-string",
        "account_id": "auth0|123",
        "timestamp": "2025-11-12T10:00:00+00:00",
        "source": "menu",
        "foods": [{"name": "Lentil Soup", "category": "protein",
                   "carbon_footprint": 0.4, "is_plant_based": true}],
        "total_carbon": 0.4          # informational, never read back
    }

    accounts:
    {
        "_id": "auth0|123",
        "version": 3,
        "registered_at": "...",
        "stats": {"carbon_saved": 1.2, "meals_tracked": 3, "impact_score": 9,
                  "current_streak": 2, "last_activity_date": "..."},
        "activities": [{"id": "uuid", "action": "...", "carbon_saved": 0.2,
                        "timestamp": "..."}]
    }

Indexes:
- meals (account_id, timestamp)
- popularity (account_id, first_selected)
- waste_records (account_id, timestamp)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import DuplicateKeyError

from ecotaste.domain.insights.entities import PopularityRecord, WasteQuantity, WasteRecord
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.errors import StatsConflictError
from ecotaste.domain.shared.ports.ledger_repository import ACTIVITY_FEED_LIMIT
from ecotaste.domain.tracking.entities import (
    ActivityRecord,
    FoodSnapshot,
    MealRecord,
    MealSource,
    UserStats,
)
from ecotaste.infrastructure.persistence.errors import PersistenceError
from ecotaste.infrastructure.persistence.mongodb.base import MongoBaseRepository

logger = logging.getLogger(__name__)


class MongoLedgerRepository(MongoBaseRepository[MealRecord]):
    """
    MongoDB implementation of ILedgerRepository port.

    commit_meal inserts the meal, then advances the account document with a
    compare-and-set on ``version``. If the compare-and-set matches nothing
    the meal insert is compensated (deleted) and StatsConflictError raised,
    so the ledger never holds a meal the stats do not account for.
    """

    def __init__(self, client: Optional[AsyncIOMotorClient] = None):
        super().__init__(client)
        self._accounts = self._db["accounts"]
        self._popularity = self._db["popularity"]
        self._waste = self._db["waste_records"]

    @property
    def collection_name(self) -> str:
        return "meals"

    async def ensure_indexes(self) -> None:
        await self._collection.create_index([("account_id", 1), ("timestamp", -1)])
        await self._popularity.create_index([("account_id", 1), ("first_selected", 1)])
        await self._waste.create_index([("account_id", 1), ("timestamp", 1)])

    # ============================================================
    # Document Mapping (Domain <-> MongoDB)
    # ============================================================

    def to_document(self, entity: MealRecord) -> Dict[str, Any]:
        meal = entity
        return {
            "_id": self.uuid_to_str(meal.id),
            "account_id": meal.account_id,
            "timestamp": self.datetime_to_iso(meal.timestamp),
            "source": meal.source.value,
            "foods": [self._food_to_dict(food) for food in meal.foods],
            "total_carbon": meal.total_carbon,
        }

    def from_document(self, doc: Dict[str, Any]) -> MealRecord:
        try:
            return MealRecord(
                id=self.str_to_uuid(doc["_id"]),
                account_id=doc["account_id"],
                timestamp=self.iso_to_datetime(doc["timestamp"]),
                foods=tuple(self._dict_to_food(f) for f in doc.get("foods", [])),
                source=MealSource(doc.get("source", MealSource.MANUAL.value)),
            )
        except KeyError as e:
            raise ValueError(f"Invalid meal document, missing field: {e}") from e

    @staticmethod
    def _food_to_dict(food: FoodSnapshot) -> Dict[str, Any]:
        return {
            "name": food.name,
            "category": food.category.value,
            "carbon_footprint": food.carbon_footprint,
            "is_plant_based": food.is_plant_based,
        }

    @staticmethod
    def _dict_to_food(data: Dict[str, Any]) -> FoodSnapshot:
        return FoodSnapshot(
            name=data["name"],
            category=FoodCategory.parse(data["category"]),
            carbon_footprint=float(data["carbon_footprint"]),
            is_plant_based=bool(data["is_plant_based"]),
        )

    def stats_to_dict(self, stats: UserStats) -> Dict[str, Any]:
        return {
            "carbon_saved": stats.carbon_saved,
            "meals_tracked": stats.meals_tracked,
            "impact_score": stats.impact_score,
            "current_streak": stats.current_streak,
            "last_activity_date": (
                self.datetime_to_iso(stats.last_activity_date)
                if stats.last_activity_date
                else None
            ),
        }

    def dict_to_stats(self, data: Dict[str, Any], version: int) -> UserStats:
        last = data.get("last_activity_date")
        return UserStats(
            carbon_saved=float(data.get("carbon_saved", 0.0)),
            meals_tracked=int(data.get("meals_tracked", 0)),
            impact_score=int(data.get("impact_score", 0)),
            current_streak=int(data.get("current_streak", 0)),
            last_activity_date=self.iso_to_datetime(last) if last else None,
            version=version,
        )

    def activity_to_dict(self, activity: ActivityRecord) -> Dict[str, Any]:
        return {
            "id": self.uuid_to_str(activity.id),
            "action": activity.action,
            "carbon_saved": activity.carbon_saved,
            "timestamp": self.datetime_to_iso(activity.timestamp),
        }

    def dict_to_activity(self, data: Dict[str, Any]) -> ActivityRecord:
        return ActivityRecord(
            id=self.str_to_uuid(data["id"]),
            action=data["action"],
            carbon_saved=float(data["carbon_saved"]),
            timestamp=self.iso_to_datetime(data["timestamp"]),
        )

    def popularity_to_document(self, account_id: str, record: PopularityRecord) -> Dict[str, Any]:
        return {
            "_id": f"{account_id}:{record.item_id}",
            "account_id": account_id,
            "item_id": record.item_id,
            "item_name": record.item_name,
            "selections": record.selections,
            "last_selected": self.datetime_to_iso(record.last_selected),
        }

    def document_to_popularity(self, doc: Dict[str, Any]) -> PopularityRecord:
        return PopularityRecord(
            item_id=doc["item_id"],
            item_name=doc["item_name"],
            selections=int(doc["selections"]),
            last_selected=self.iso_to_datetime(doc["last_selected"]),
        )

    def waste_to_document(self, account_id: str, record: WasteRecord) -> Dict[str, Any]:
        return {
            "_id": record.id,
            "account_id": account_id,
            "item_id": record.item_id,
            "item_name": record.item_name,
            "quantity": record.quantity.value,
            "timestamp": self.datetime_to_iso(record.timestamp),
            "notes": record.notes,
        }

    def document_to_waste(self, doc: Dict[str, Any]) -> WasteRecord:
        return WasteRecord(
            id=doc["_id"],
            item_id=doc["item_id"],
            item_name=doc["item_name"],
            quantity=WasteQuantity(doc["quantity"]),
            timestamp=self.iso_to_datetime(doc["timestamp"]),
            notes=doc.get("notes"),
        )

    # ============================================================
    # ILedgerRepository
    # ============================================================

    async def get_stats(self, account_id: str) -> UserStats:
        doc = await self._find_one({"_id": account_id}, collection=self._accounts)
        if doc is None:
            return UserStats()
        return self.dict_to_stats(doc.get("stats", {}), int(doc.get("version", 0)))

    async def commit_meal(
        self,
        account_id: str,
        meal: MealRecord,
        stats: UserStats,
        activity: ActivityRecord,
        expected_version: int,
    ) -> None:
        await self._insert_one(self.to_document(meal))

        try:
            advanced = await self._advance_account(account_id, stats, activity, expected_version)
        except Exception:
            await self._delete_one({"_id": self.uuid_to_str(meal.id)})
            raise

        if not advanced:
            await self._delete_one({"_id": self.uuid_to_str(meal.id)})
            logger.warning(
                "Stats compare-and-set failed",
                extra={"account_id": account_id, "expected_version": expected_version},
            )
            raise StatsConflictError(
                f"Stats of {account_id} changed concurrently "
                f"(expected version {expected_version})"
            )

    async def _advance_account(
        self,
        account_id: str,
        stats: UserStats,
        activity: ActivityRecord,
        expected_version: int,
    ) -> bool:
        if expected_version == 0:
            # First meal of the account: the document must not exist yet
            try:
                await self._insert_one(
                    {
                        "_id": account_id,
                        "version": expected_version + 1,
                        "registered_at": self.datetime_to_iso(activity.timestamp),
                        "stats": self.stats_to_dict(stats),
                        "activities": [self.activity_to_dict(activity)],
                    },
                    collection=self._accounts,
                )
            except DuplicateKeyError:
                return False
            return True

        matched = await self._update_one(
            {"_id": account_id, "version": expected_version},
            {
                "$set": {"stats": self.stats_to_dict(stats), "version": expected_version + 1},
                "$push": {
                    "activities": {
                        "$each": [self.activity_to_dict(activity)],
                        "$position": 0,
                        "$slice": ACTIVITY_FEED_LIMIT,
                    }
                },
            },
            collection=self._accounts,
        )
        return matched == 1

    async def list_meals(
        self, account_id: str, limit: Optional[int] = 20, offset: int = 0
    ) -> List[MealRecord]:
        docs = await self._find_many(
            {"account_id": account_id},
            sort=[("timestamp", -1)],
            limit=limit,
            skip=offset,
        )
        return [self.from_document(doc) for doc in docs]

    async def list_activities(self, account_id: str) -> List[ActivityRecord]:
        doc = await self._find_one({"_id": account_id}, collection=self._accounts)
        if doc is None:
            return []
        return [self.dict_to_activity(a) for a in doc.get("activities", [])]

    async def list_popularity(self, account_id: str) -> List[PopularityRecord]:
        docs = await self._find_many(
            {"account_id": account_id},
            sort=[("first_selected", 1), ("_id", 1)],
            collection=self._popularity,
        )
        return [self.document_to_popularity(doc) for doc in docs]

    async def increment_selection(
        self, account_id: str, item_id: str, item_name: str, now: datetime
    ) -> PopularityRecord:
        selected_at = self.datetime_to_iso(now)
        doc = await self._find_one_and_update(
            {"_id": f"{account_id}:{item_id}"},
            {
                "$inc": {"selections": 1},
                "$set": {"last_selected": selected_at},
                # The first-seen name is kept, like record_selection
                "$setOnInsert": {
                    "account_id": account_id,
                    "item_id": item_id,
                    "item_name": item_name,
                    "first_selected": selected_at,
                },
            },
            upsert=True,
            collection=self._popularity,
        )
        if doc is None:
            raise PersistenceError(f"Selection of {item_id} was not confirmed")
        return self.document_to_popularity(doc)

    async def append_waste(self, account_id: str, record: WasteRecord) -> None:
        await self._insert_one(self.waste_to_document(account_id, record), collection=self._waste)

    async def list_waste(self, account_id: str) -> List[WasteRecord]:
        docs = await self._find_many(
            {"account_id": account_id}, sort=[("timestamp", 1)], collection=self._waste
        )
        return [self.document_to_waste(doc) for doc in docs]

    async def list_all_stats(self) -> List[Tuple[str, UserStats]]:
        docs = await self._find_many({}, sort=[("registered_at", 1)], collection=self._accounts)
        return [
            (doc["_id"], self.dict_to_stats(doc.get("stats", {}), int(doc.get("version", 0))))
            for doc in docs
        ]
