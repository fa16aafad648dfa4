"""
Meal models for the recipe finder.

TheMealDB records are treated as opaque: the only field the app reads is idMeal,
the deduplication key. Every other field (strMeal, strArea, strInstructions,
strIngredient1..20, ...) is passed through exactly as the API sent it.

# NOTE: Filter endpoints (ingredient, country) return a short record with only
    strMeal, strMealThumb and idMeal, while search and lookup endpoints return
    the full record. Both shapes validate as MealRecord.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# Outcome of one underlying query in a combined search
SourceStatus = Literal["ok", "error"]

# The three filter dimensions a combined search fans out to, in call order
COMBINED_SOURCES = ("name", "ingredient", "country")


class MealRecord(BaseModel):
    """
    One meal as returned by the recipe API.

    Unknown fields are kept and serialized back under their original names.
    """
    id_meal: Union[str, int] = Field(..., alias="idMeal", description="Meal identifier (opaque, unique across query types)")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "idMeal": "52772",
                "strMeal": "Teriyaki Chicken Casserole",
                "strArea": "Japanese",
                "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
            }
        },
    )
