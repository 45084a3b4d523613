"""Pydantic models for OpenAI structured outputs.

Used with chat.completions.parse() as the response schema of the food
detection call.
"""

from typing import List, Literal

from pydantic import BaseModel, Field


class DetectedFoodItem(BaseModel):
    """Single food item visible in the photo."""

    name: str = Field(
        ...,
        description="Food name in English (e.g., 'Grilled Chicken', 'Steamed Broccoli')",
    )
    category: Literal[
        "protein", "vegetables", "grains", "dairy", "fruits", "beverage", "dessert"
    ] = Field(..., description="Food category")
    carbon_footprint: float = Field(
        ...,
        ge=0,
        description="Estimated kg CO2 per serving",
    )
    is_plant_based: bool = Field(
        ...,
        description="True if the item contains no animal products",
    )


class FoodDetectionResponse(BaseModel):
    """Root model for the food detection structured output."""

    foods: List[DetectedFoodItem] = Field(
        default_factory=list,
        description="Every food item visible on the tray or plate",
    )
