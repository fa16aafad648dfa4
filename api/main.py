"""
FastAPI application for the MealDB Recipe Finder.

This module serves the static recipe page and defines read-only JSON endpoints
that proxy TheMealDB lookups:
- GET /: The static recipe page (index.html)
- GET /api/meals/letter/{letter}: Meals whose name starts with a letter
- GET /api/meals/search: Search meals by name
- GET /api/meals/ingredient: Filter meals by ingredient
- GET /api/meals/country: Filter meals by country/area
- GET /api/meals/combined: Name + ingredient + country search, unique by idMeal
- GET /api/meals/all: Every meal, letter by letter
- GET /api/meals/{meal_id}: Full details for one meal
- GET /health: Health check

Upstream failures never produce a 5xx: a failed lookup answers with an empty
result, exactly like a lookup with no matches.

Run the app with:
    python -m api.server
or, without the port retry:
    uvicorn api.main:app --reload --port 8081

Access API documentation at:
    http://localhost:8081/docs (Swagger UI)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import string
import time
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Path, Query, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import MealDBConfig, ServerConfig
from api.schemas import CombinedSearchResponse, MealDetailResponse, MealListResponse
from recipes.connectors.mealdb_connector import MealDBConnector
from recipes.search import RecipeQueryClient

logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

NOT_FOUND_TEXT = "404 - Page not found"

app = FastAPI(
    title="MealDB Recipe Finder",
    description="Static recipe browser with read-only proxy endpoints over TheMealDB",
    version="1.0.0",
    tags_metadata=[
        {
            "name": "meals",
            "description": "Look up meals by letter, name, ingredient, country or id.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)

STATIC_DIR = ServerConfig.get_static_dir()
app.mount("/static", StaticFiles(directory=STATIC_DIR, check_dir=False), name="static")


@lru_cache(maxsize=1)
def get_query_client() -> RecipeQueryClient:
    """
    Build the shared query client from configuration.

    The connector's requests.Session is reused across requests.
    """
    connector = MealDBConnector(
        base_url=MealDBConfig.get_base_url(),
        timeout=MealDBConfig.get_timeout(),
    )
    return RecipeQueryClient(connector)


def meal_list(meals: list) -> MealListResponse:
    return MealListResponse(results=meals, count=len(meals))


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """
    Plain-text 404 for unknown pages; JSON errors for everything under /api.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND and not request.url.path.startswith("/api/"):
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)
    return await http_exception_handler(request, exc)


@app.get("/", include_in_schema=False)
def index():
    """Serve the static recipe page."""
    index_path = STATIC_DIR / "index.html"
    if not index_path.is_file():
        logger.warning("index.html not found in %s", STATIC_DIR)
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(index_path)


@app.get(
    "/api/meals/letter/{letter}",
    response_model=MealListResponse,
    tags=["meals"],
    summary="List meals starting with a letter",
)
def meals_by_letter(
    letter: str = Path(..., description="Single letter a-z"),
    client: RecipeQueryClient = Depends(get_query_client),
) -> MealListResponse:
    """
    List meals whose name starts with the given letter.

    Raises:
        HTTPException 400: If letter is not a single ASCII letter
    """
    if len(letter) != 1 or letter not in string.ascii_letters:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid letter: '{letter}'. Expected a single letter a-z.",
        )
    return meal_list(client.by_letter(letter.lower()))


@app.get(
    "/api/meals/search",
    response_model=MealListResponse,
    tags=["meals"],
    summary="Search meals by name",
)
def meals_by_name(
    q: str = Query(..., min_length=1, description="Meal name or part of it (e.g., 'Arrabiata')"),
    client: RecipeQueryClient = Depends(get_query_client),
) -> MealListResponse:
    return meal_list(client.by_name(q))


@app.get(
    "/api/meals/ingredient",
    response_model=MealListResponse,
    tags=["meals"],
    summary="Filter meals by main ingredient",
)
def meals_by_ingredient(
    i: str = Query(..., min_length=1, description="Ingredient (e.g., 'chicken_breast')"),
    client: RecipeQueryClient = Depends(get_query_client),
) -> MealListResponse:
    return meal_list(client.by_ingredient(i))


@app.get(
    "/api/meals/country",
    response_model=MealListResponse,
    tags=["meals"],
    summary="Filter meals by country/area",
)
def meals_by_country(
    a: str = Query(..., min_length=1, description="Country/area (e.g., 'Canadian')"),
    client: RecipeQueryClient = Depends(get_query_client),
) -> MealListResponse:
    return meal_list(client.by_country(a))


@app.get(
    "/api/meals/combined",
    response_model=CombinedSearchResponse,
    tags=["meals"],
    summary="Search by name, ingredient and country at once",
    description="Runs the name, ingredient and country lookups in turn and merges them, unique by idMeal. "
                "sources_status tells which lookups failed; their results are simply missing.",
)
def meals_combined(
    q: str = Query(..., min_length=1, description="Search term for all three dimensions"),
    client: RecipeQueryClient = Depends(get_query_client),
) -> CombinedSearchResponse:
    response = client.combined_search_with_status(q)
    return CombinedSearchResponse(
        results=response["results"],
        count=len(response["results"]),
        sources_status=response["sources_status"],
    )


@app.get(
    "/api/meals/all",
    response_model=MealListResponse,
    tags=["meals"],
    summary="List every meal, letter by letter",
    description="Issues 26 sequential upstream requests; expect this to be slow.",
)
def meals_all(client: RecipeQueryClient = Depends(get_query_client)) -> MealListResponse:
    return meal_list(client.fetch_all_letters())


@app.get(
    "/api/meals/{meal_id}",
    response_model=MealDetailResponse,
    tags=["meals"],
    summary="Get full details for one meal",
)
def meal_details(
    meal_id: str = Path(..., description="TheMealDB idMeal (e.g., '52772')"),
    client: RecipeQueryClient = Depends(get_query_client),
) -> MealDetailResponse:
    """
    Get one meal by id.

    Raises:
        HTTPException 404: If no meal has this id, or the upstream lookup failed
    """
    meal = client.by_id(meal_id)
    if meal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Meal '{meal_id}' not found",
        )
    return MealDetailResponse(meal=meal)


@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, app metadata and uptime. Always 200 OK if reachable.
    """
    uptime_seconds = int(time.time() - _APP_START_TIME)

    return {
        "status": "ok",
        "name": "MealDB Recipe Finder",
        "version": "1.0.0",
        "uptime_seconds": uptime_seconds,
    }
