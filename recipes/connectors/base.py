"""
Base connector abstract class for recipe source integrations.

This module defines the abstract base class that all recipe connectors must implement.
It keeps a consistent interface across recipe APIs so the query client does not care
which source it is talking to.

All connectors must:
- Implement the source attribute (e.g., "mealdb")
- Provide the five lookups (letter, name, ingredient, country, id)
- Raise on failure; converting failures into empty results is the client's job
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseRecipeConnector(ABC):
    """
    Abstract base class for all recipe connectors.

    Each connector handles the specifics of its source's HTTP API and returns
    raw meal records (plain dicts) in the order the source returned them.

    Attributes:
        source: String identifier for the recipe source (e.g., "mealdb")
    """
    source: str

    @abstractmethod
    def search_by_letter(self, letter: str) -> List[Dict[str, Any]]:
        """
        List meals whose name starts with the given letter.

        Args:
            letter: Single character filter (not validated here)

        Returns:
            List of meal records, empty if the source has no match.
        """
        pass

    @abstractmethod
    def search_by_name(self, query: str) -> List[Dict[str, Any]]:
        """Search meals by name."""
        pass

    @abstractmethod
    def filter_by_ingredient(self, ingredient: str) -> List[Dict[str, Any]]:
        """Filter meals by main ingredient."""
        pass

    @abstractmethod
    def filter_by_country(self, country: str) -> List[Dict[str, Any]]:
        """Filter meals by country/area (e.g., "Canadian", "French")."""
        pass

    @abstractmethod
    def lookup_by_id(self, meal_id: str) -> List[Dict[str, Any]]:
        """
        Look up full meal details by id.

        Returns:
            List with zero or one meal record, as reported by the source.
        """
        pass
