"""MongoDB implementation of the menu repository.

Items live in ``menu_items``. A marker document in ``catalog_state``
records that the catalog has been initialized, so a menu cleared by staff
is not re-seeded with the defaults.
"""

from typing import Any, Dict, List, Optional
import logging

from motor.motor_asyncio import AsyncIOMotorClient

from ecotaste.domain.menu.catalog import default_menu
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.menu.menu_item import MenuItem
from ecotaste.infrastructure.persistence.mongodb.base import MongoBaseRepository

logger = logging.getLogger(__name__)

_CATALOG_MARKER = {"_id": "menu"}


class MongoMenuRepository(MongoBaseRepository[MenuItem]):
    """MongoDB implementation of IMenuRepository port."""

    def __init__(self, client: Optional[AsyncIOMotorClient] = None):
        super().__init__(client)
        self._state = self._db["catalog_state"]

    @property
    def collection_name(self) -> str:
        return "menu_items"

    def to_document(self, entity: MenuItem) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "name": entity.name,
            "category": entity.category.value,
            "carbon_footprint": entity.carbon_footprint,
            "is_plant_based": entity.is_plant_based,
            "added_date": self.datetime_to_iso(entity.added_date),
        }

    def from_document(self, doc: Dict[str, Any]) -> MenuItem:
        try:
            return MenuItem(
                id=doc["_id"],
                name=doc["name"],
                category=FoodCategory.parse(doc["category"]),
                carbon_footprint=float(doc["carbon_footprint"]),
                is_plant_based=bool(doc["is_plant_based"]),
                added_date=self.iso_to_datetime(doc["added_date"]),
            )
        except KeyError as e:
            raise ValueError(f"Invalid menu item document, missing field: {e}") from e

    async def _ensure_initialized(self) -> None:
        if await self._find_one(_CATALOG_MARKER, collection=self._state) is not None:
            return

        seed = default_menu()
        for position, item in enumerate(seed):
            await self._update_one(
                {"_id": item.id},
                {"$setOnInsert": {**self.to_document(item), "position": position}},
                upsert=True,
            )
        await self._update_one(
            _CATALOG_MARKER, {"$set": {"initialized": True}}, upsert=True, collection=self._state
        )
        logger.info("Menu catalog seeded", extra={"item_count": len(seed)})

    async def list_items(self) -> List[MenuItem]:
        await self._ensure_initialized()
        docs = await self._find_many({}, sort=[("added_date", 1), ("position", 1)])
        return [self.from_document(doc) for doc in docs]

    async def get_by_id(self, item_id: str) -> Optional[MenuItem]:
        await self._ensure_initialized()
        doc = await self._find_one({"_id": item_id})
        return self.from_document(doc) if doc else None

    async def add(self, item: MenuItem) -> None:
        await self._ensure_initialized()
        await self._insert_one({**self.to_document(item), "position": 0})

    async def remove(self, item_id: str) -> bool:
        await self._ensure_initialized()
        return await self._delete_one({"_id": item_id}) == 1

    async def clear(self) -> None:
        await self._delete_many({})
        await self._update_one(
            _CATALOG_MARKER, {"$set": {"initialized": True}}, upsert=True, collection=self._state
        )
