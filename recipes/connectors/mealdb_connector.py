"""
TheMealDB connector using the public JSON API.

This connector interfaces with TheMealDB (https://www.themealdb.com) to look up
meals and return them in the order the API sent them.

The connector:
- Uses a requests.Session against the v1 public endpoints (search.php, filter.php, lookup.php)
- Returns the "meals" array of each response, or [] when the API reports null
- Raises MealDBError on network failures, non-2xx responses, malformed JSON,
  or a body that does not have the expected shape
- Skips meals without a usable idMeal (the deduplication key)
- Never retries; callers decide what a failure means

The base URL defaults to the public test key endpoint; api.config.MealDBConfig
reads the MEALDB_BASE_URL override (e.g., for a paid key or a local mock).
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .base import BaseRecipeConnector

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1/1"
DEFAULT_TIMEOUT_SECONDS = 10.0


class MealDBError(RuntimeError):
    """Raised when a TheMealDB request fails or returns an unusable body."""


class MealDBConnector(BaseRecipeConnector):
    """
    Connector for TheMealDB public API.

    One HTTP GET per lookup. The same session is reused across calls so
    connections are pooled; no other state is kept between calls.
    """
    source = "mealdb"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the TheMealDB connector.

        Args:
            base_url: API base URL (optional, defaults to the public v1 URL)
            timeout: Per-request timeout in seconds (optional, defaults to 10s)
            session: requests.Session to use (optional, a new one is created if not provided)
        """
        self.base_url = base_url or DEFAULT_BASE_URL
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _get_meals(self, path: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        Perform one GET against the API and return its "meals" array.

        Args:
            path: Endpoint file name (e.g., "search.php")
            params: Query parameters (exactly one of f, s, i, a)

        Returns:
            The "meals" list, or [] when the API reports null

        Raises:
            MealDBError: On any transport, HTTP, decoding, or shape error.
        """
        url = f"{self.base_url}/{path}"
        logger.debug("GET %s params=%r", url, params)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise MealDBError(f"Request to {path} timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise MealDBError(f"Request to {path} failed: {e}") from e
        except ValueError as e:
            # Decoding errors not wrapped by requests surface as plain ValueError
            raise MealDBError(f"Response from {path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MealDBError(f"Unexpected response format from {path}: expected an object, got {type(data).__name__}")

        meals = data.get("meals")
        if meals is None:
            return []
        if not isinstance(meals, list):
            raise MealDBError(f"Unexpected response format from {path}: 'meals' is {type(meals).__name__}")

        valid: List[Dict[str, Any]] = []
        for meal in meals:
            if not isinstance(meal, dict):
                raise MealDBError(f"Unexpected response format from {path}: meal is {type(meal).__name__}")
            meal_id = meal.get("idMeal")
            if isinstance(meal_id, bool) or not isinstance(meal_id, (str, int)):
                logger.warning("MealDB connector: Meal has no usable idMeal, skipping: %s", str(meal)[:100])
                continue
            valid.append(meal)

        logger.debug("%s %r returned %d meals", path, params, len(valid))
        return valid

    def search_by_letter(self, letter: str) -> List[Dict[str, Any]]:
        return self._get_meals("search.php", {"f": letter})

    def search_by_name(self, query: str) -> List[Dict[str, Any]]:
        return self._get_meals("search.php", {"s": query})

    def filter_by_ingredient(self, ingredient: str) -> List[Dict[str, Any]]:
        return self._get_meals("filter.php", {"i": ingredient})

    def filter_by_country(self, country: str) -> List[Dict[str, Any]]:
        return self._get_meals("filter.php", {"a": country})

    def lookup_by_id(self, meal_id: str) -> List[Dict[str, Any]]:
        return self._get_meals("lookup.php", {"i": str(meal_id)})
