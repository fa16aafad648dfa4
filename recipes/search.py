"""
Recipe query client and combined search.

This module provides the core lookup functionality that:
- Wraps each connector lookup (letter, name, ingredient, country, id) in a
  failure policy that turns any error into an empty result
- Runs the combined search: name, ingredient and country queries in sequence,
  merged into one list that is unique by idMeal
- Walks the whole alphabet to list every meal

Failures are logged and never raised. A failed lookup looks exactly like a
lookup with no matches; combined_search_with_status() is the one place that
reports which underlying query failed.

Search flow: browser -> GET /api/meals/... -> RecipeQueryClient -> MealDBConnector -> TheMealDB
"""

import logging
import string
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from recipes.models import COMBINED_SOURCES

from .connectors.base import BaseRecipeConnector
from .connectors.mealdb_connector import MealDBConnector, MealDBError

logger = logging.getLogger(__name__)

LETTERS = string.ascii_lowercase


def merge_unique_meals(collections: Iterable[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Fold several meal lists into one list that is unique by idMeal.

    A later record with an id already seen overwrites the earlier one (last write
    wins). Output order is the dict's iteration order: a key keeps the position of
    its first insertion, its value is the last record written for it.
    Ids are compared as strings, so "52772" and 52772 are the same meal.

    Args:
        collections: Meal lists to merge, in the order they should be applied

    Returns:
        List of meal records with no duplicate idMeal values

    Examples:
        >>> merge_unique_meals([[{"idMeal": "1", "v": 1}], [{"idMeal": "1", "v": 2}, {"idMeal": "2"}]])
        [{'idMeal': '1', 'v': 2}, {'idMeal': '2'}]
    """
    unique_meals: Dict[str, Dict[str, Any]] = {}

    for meals in collections:
        for meal in meals or []:
            if not isinstance(meal, dict) or "idMeal" not in meal:
                logger.warning("Skipping meal without idMeal: %s", str(meal)[:100])
                continue
            unique_meals[str(meal["idMeal"])] = meal

    return list(unique_meals.values())


class RecipeQueryClient:
    """
    Query client translating a lookup intent into one connector call.

    Every public method swallows connector failures: the error is logged and an
    empty list (or None for by_id) is returned instead.
    """

    def __init__(self, connector: Optional[BaseRecipeConnector] = None) -> None:
        """
        Args:
            connector: Recipe connector to query (optional, defaults to MealDBConnector())
        """
        self.connector = connector or MealDBConnector()

    def _safe_call(self, label: str, func: Callable[[str], List[Dict[str, Any]]], arg: str) -> Tuple[List[Dict[str, Any]], bool]:
        """
        Call a connector lookup, converting any failure into an empty result.

        Returns:
            Tuple of (meals, ok) where ok is False if the call failed.
        """
        try:
            meals = func(arg)
        except MealDBError as e:
            logger.error("%s lookup failed for %r: %s", label, arg, e)
            return [], False
        except Exception as e:
            logger.error("Unexpected error during %s lookup for %r: %s", label, arg, e, exc_info=True)
            return [], False

        return list(meals or []), True

    def by_letter(self, letter: str) -> List[Dict[str, Any]]:
        """List meals whose name starts with letter. Single-letter input is the caller's responsibility."""
        meals, _ = self._safe_call("letter", self.connector.search_by_letter, letter)
        return meals

    def by_name(self, query: str) -> List[Dict[str, Any]]:
        """Search meals by name."""
        meals, _ = self._safe_call("name", self.connector.search_by_name, query)
        return meals

    def by_ingredient(self, ingredient: str) -> List[Dict[str, Any]]:
        """Filter meals by ingredient."""
        meals, _ = self._safe_call("ingredient", self.connector.filter_by_ingredient, ingredient)
        return meals

    def by_country(self, country: str) -> List[Dict[str, Any]]:
        """Filter meals by country/area."""
        meals, _ = self._safe_call("country", self.connector.filter_by_country, country)
        return meals

    def by_id(self, meal_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch full details of one meal.

        Returns:
            The meal record, or None if the API reports no match or the call fails.
        """
        meals, _ = self._safe_call("id", self.connector.lookup_by_id, meal_id)
        return meals[0] if meals else None

    def combined_search_with_status(self, query: str) -> Dict[str, Any]:
        """
        Search by name, ingredient and country, merged and unique by idMeal.

        The three lookups run one after the other. Partial failures are handled
        gracefully: results from the lookups that succeeded are still returned.

        Args:
            query: Search term applied to all three dimensions

        Returns:
            Dictionary containing:
            - results: List of meal records with no duplicate idMeal
            - sources_status: Dictionary mapping "name", "ingredient" and
              "country" to "ok" or "error"
        """
        logger.info("Combined search request: query=%r", query)

        lookups = {
            "name": self.connector.search_by_name,
            "ingredient": self.connector.filter_by_ingredient,
            "country": self.connector.filter_by_country,
        }

        collections: List[List[Dict[str, Any]]] = []
        sources_status: Dict[str, str] = {}
        counts: Dict[str, int] = {}
        for source in COMBINED_SOURCES:
            meals, ok = self._safe_call(source, lookups[source], query)
            collections.append(meals)
            sources_status[source] = "ok" if ok else "error"
            counts[source] = len(meals)

        results = merge_unique_meals(collections)
        logger.info("Combined search response size: %d meals (from sources: %s, status: %s)",
                    len(results), counts, sources_status)

        return {
            "results": results,
            "sources_status": sources_status,
        }

    def combined_search(self, query: str) -> List[Dict[str, Any]]:
        """
        Search by name, ingredient and country, merged and unique by idMeal.

        Returns [] when all three lookups are empty or failed; failures are not
        reported separately (see combined_search_with_status for that).
        """
        return self.combined_search_with_status(query)["results"]

    def fetch_all_letters(self) -> List[Dict[str, Any]]:
        """
        List every meal by querying each letter a..z in turn.

        Issues 26 sequential requests. A letter whose lookup fails contributes
        nothing and the walk continues.

        Returns:
            Concatenation of each letter's results, in letter order
        """
        all_meals: List[Dict[str, Any]] = []
        for letter in LETTERS:
            all_meals.extend(self.by_letter(letter))

        logger.info("Fetched %d meals across %d letters", len(all_meals), len(LETTERS))
        return all_meals
