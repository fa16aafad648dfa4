"""
Pydantic schemas for FastAPI response models.

This module defines the Pydantic models used for API response serialization.
These schemas keep the JSON contract explicit and drive the generated API docs.

The schemas include:
- MealListResponse: Meals from a single lookup (letter, name, ingredient, country, all)
- CombinedSearchResponse: Merged meals plus the status of each underlying lookup
- MealDetailResponse: One meal by id

# NOTE: Meal records are opaque. MealRecord only requires idMeal and passes
    every other field through, so responses carry exactly what TheMealDB sent.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from recipes.models import MealRecord, SourceStatus


class MealListResponse(BaseModel):
    """
    Response model for single-lookup endpoints.

    Results keep the order of the upstream "meals" array.
    """
    results: List[MealRecord] = Field(default_factory=list, description="Meals in upstream order")
    count: int = Field(..., ge=0, description="Number of meals in results")


class CombinedSearchResponse(BaseModel):
    """
    Response model for the combined search endpoint.

    A source with status "error" contributed no meals; the results from the
    other sources are still returned.
    """
    results: List[MealRecord] = Field(default_factory=list, description="Meals unique by idMeal")
    count: int = Field(..., ge=0, description="Number of meals in results")
    sources_status: Dict[str, SourceStatus] = Field(
        default_factory=dict,
        description="Status per lookup: 'name', 'ingredient', 'country' -> 'ok' or 'error'",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "results": [{"idMeal": "52772", "strMeal": "Teriyaki Chicken Casserole"}],
                "count": 1,
                "sources_status": {"name": "ok", "ingredient": "ok", "country": "error"},
            }
        }
    )


class MealDetailResponse(BaseModel):
    """Response model for the meal detail endpoint."""
    meal: MealRecord = Field(..., description="Full meal record")
