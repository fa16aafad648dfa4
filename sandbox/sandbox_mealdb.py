"""
Sandbox script for trying the recipe query client against the live TheMealDB API.

This script runs a combined search (name + ingredient + country), shows which
lookups succeeded, and prints the full details of the first meal found.

Prerequisites:
- Network access to www.themealdb.com (or MEALDB_BASE_URL pointing at a mock)
- Required packages: requests

Run:
    python -m sandbox.sandbox_mealdb
"""

import sys
from pprint import pprint

from api.config import MealDBConfig
from recipes.connectors.mealdb_connector import MealDBConnector
from recipes.search import RecipeQueryClient


def run(query: str = "chicken"):
    """Run a combined search and a detail lookup for the first hit."""
    connector = MealDBConnector(base_url=MealDBConfig.get_base_url(), timeout=MealDBConfig.get_timeout())
    client = RecipeQueryClient(connector)

    print("=" * 80)
    print("Testing Combined Search")
    print("=" * 80)
    print(f"\nQuery: '{query}'")
    print("\nRunning combined search...\n")

    response = client.combined_search_with_status(query)
    results = response["results"]

    print(f"Total unique meals: {len(results)}")
    print("\n=== Lookup Status ===")
    for source, status in response["sources_status"].items():
        print(f"  {source}: {status}")

    if results:
        print("\n=== Results ===")
        for i, meal in enumerate(results, 1):
            print(f"{i:3d}. [{meal.get('idMeal')}] {meal.get('strMeal', 'N/A')}")

        first_id = results[0]["idMeal"]
        print(f"\n=== Full Details (idMeal={first_id}) ===")
        pprint(client.by_id(first_id))
    else:
        print("\nNo results found. This might indicate:")
        print("  - No meal matches the query in any dimension")
        print("  - Network connectivity issues (check the log output above)")

    print("\n" + "=" * 80)


if __name__ == "__main__":
    run(sys.argv[1] if len(sys.argv) > 1 else "chicken")
