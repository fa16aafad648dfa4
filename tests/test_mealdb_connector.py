"""
Tests for the TheMealDB connector using a mocked requests session.

These tests mock the requests.Session to avoid making real API calls during testing.
The tests verify that:
- Each lookup hits the right endpoint with the right query parameter
- The "meals" array is returned as-is, in order
- A null "meals" field becomes an empty list
- Transport, HTTP, JSON and shape errors raise MealDBError
- Meals without a usable idMeal are dropped
"""

import os
from unittest.mock import Mock, patch

import pytest
import requests

from recipes.connectors.mealdb_connector import (
    DEFAULT_BASE_URL,
    MealDBConnector,
    MealDBError,
)


def make_session(payload=None, json_error=None, http_error=None, get_error=None):
    """Build a mock session whose get() returns a response with the given behavior."""
    session = Mock()
    if get_error is not None:
        session.get.side_effect = get_error
        return session

    response = Mock()
    if http_error is not None:
        response.raise_for_status.side_effect = http_error
    else:
        response.raise_for_status.return_value = None
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    session.get.return_value = response
    return session


class TestMealDBConnectorInit:
    """Tests for connector configuration."""

    def test_defaults(self):
        connector = MealDBConnector(session=Mock())
        assert connector.source == "mealdb"
        assert connector.base_url == DEFAULT_BASE_URL
        assert connector.timeout == 10.0

    @patch.dict(os.environ, {"MEALDB_BASE_URL": "http://from-env"})
    def test_ignores_environment(self):
        connector = MealDBConnector(session=Mock())
        assert connector.base_url == DEFAULT_BASE_URL

    def test_explicit_arguments(self):
        connector = MealDBConnector(base_url="http://explicit", timeout=2.5, session=Mock())
        assert connector.base_url == "http://explicit"
        assert connector.timeout == 2.5

    def test_creates_session_when_not_given(self):
        connector = MealDBConnector(base_url="http://x")
        assert isinstance(connector.session, requests.Session)


class TestMealDBConnectorEndpoints:
    """Tests that each lookup calls the right endpoint and parameter."""

    @pytest.mark.parametrize(
        "method, arg, path, params",
        [
            ("search_by_letter", "a", "search.php", {"f": "a"}),
            ("search_by_name", "Arrabiata", "search.php", {"s": "Arrabiata"}),
            ("filter_by_ingredient", "chicken_breast", "filter.php", {"i": "chicken_breast"}),
            ("filter_by_country", "Canadian", "filter.php", {"a": "Canadian"}),
            ("lookup_by_id", "52772", "lookup.php", {"i": "52772"}),
        ],
    )
    def test_request_shape(self, method, arg, path, params):
        session = make_session({"meals": []})
        connector = MealDBConnector(base_url="http://api.test/v1", timeout=3, session=session)

        getattr(connector, method)(arg)

        session.get.assert_called_once_with(f"http://api.test/v1/{path}", params=params, timeout=3)

    def test_lookup_by_numeric_id_is_sent_as_string(self):
        session = make_session({"meals": None})
        connector = MealDBConnector(base_url="http://api.test", session=session)

        connector.lookup_by_id(52772)

        assert session.get.call_args.kwargs["params"] == {"i": "52772"}

    def test_returns_meals_in_upstream_order(self):
        meals = [
            {"idMeal": "3", "strMeal": "C"},
            {"idMeal": "1", "strMeal": "A"},
            {"idMeal": "2", "strMeal": "B"},
        ]
        connector = MealDBConnector(base_url="http://api.test", session=make_session({"meals": meals}))

        result = connector.search_by_name("x")

        assert [m["idMeal"] for m in result] == ["3", "1", "2"]
        assert result[0] == {"idMeal": "3", "strMeal": "C"}

    def test_null_meals_returns_empty_list(self):
        connector = MealDBConnector(base_url="http://api.test", session=make_session({"meals": None}))
        assert connector.filter_by_country("Atlantis") == []

    def test_missing_meals_key_returns_empty_list(self):
        connector = MealDBConnector(base_url="http://api.test", session=make_session({}))
        assert connector.search_by_letter("q") == []


class TestMealDBConnectorErrors:
    """Tests that every failure mode raises MealDBError."""

    def test_connection_error(self):
        session = make_session(get_error=requests.exceptions.ConnectionError("boom"))
        connector = MealDBConnector(base_url="http://api.test", session=session)

        with pytest.raises(MealDBError, match="search.php"):
            connector.search_by_letter("z")

    def test_timeout(self):
        session = make_session(get_error=requests.exceptions.Timeout("slow"))
        connector = MealDBConnector(base_url="http://api.test", timeout=1, session=session)

        with pytest.raises(MealDBError, match="timed out"):
            connector.search_by_name("x")

    def test_http_error_status(self):
        session = make_session(http_error=requests.exceptions.HTTPError("503 Server Error"))
        connector = MealDBConnector(base_url="http://api.test", session=session)

        with pytest.raises(MealDBError):
            connector.filter_by_ingredient("x")

    def test_malformed_json(self):
        session = make_session(json_error=ValueError("Expecting value"))
        connector = MealDBConnector(base_url="http://api.test", session=session)

        with pytest.raises(MealDBError, match="not valid JSON"):
            connector.lookup_by_id("1")

    def test_body_not_an_object(self):
        connector = MealDBConnector(base_url="http://api.test", session=make_session(["not", "a", "dict"]))

        with pytest.raises(MealDBError, match="Unexpected response format"):
            connector.search_by_name("x")

    def test_meals_not_a_list(self):
        connector = MealDBConnector(base_url="http://api.test", session=make_session({"meals": "nope"}))

        with pytest.raises(MealDBError, match="'meals' is str"):
            connector.search_by_name("x")

    def test_error_chains_original_exception(self):
        original = requests.exceptions.ConnectionError("boom")
        connector = MealDBConnector(base_url="http://api.test", session=make_session(get_error=original))

        with pytest.raises(MealDBError) as exc_info:
            connector.search_by_name("x")

        assert exc_info.value.__cause__ is original

    @pytest.mark.parametrize("meals", [[1, "x"], [{"idMeal": "1"}, None], [["idMeal", "1"]]])
    def test_meal_not_an_object(self, meals):
        connector = MealDBConnector(base_url="http://api.test", session=make_session({"meals": meals}))

        with pytest.raises(MealDBError, match="meal is"):
            connector.lookup_by_id("1")


class TestMealDBConnectorMealIds:
    """Tests for meals whose idMeal cannot serve as a key."""

    @pytest.mark.parametrize("bad_meal", [
        {"idMeal": None, "strMeal": "Null id"},
        {"strMeal": "Missing id"},
        {"idMeal": ["1"], "strMeal": "List id"},
        {"idMeal": True, "strMeal": "Bool id"},
    ])
    def test_meal_without_usable_id_is_skipped(self, bad_meal, caplog):
        meals = [{"idMeal": "1", "strMeal": "A"}, bad_meal, {"idMeal": 2, "strMeal": "B"}]
        connector = MealDBConnector(base_url="http://api.test", session=make_session({"meals": meals}))

        with caplog.at_level("WARNING", logger="recipes.connectors.mealdb_connector"):
            result = connector.search_by_letter("a")

        assert result == [{"idMeal": "1", "strMeal": "A"}, {"idMeal": 2, "strMeal": "B"}]
        assert "no usable idMeal" in caplog.text

    def test_only_unusable_meals_returns_empty_list(self):
        connector = MealDBConnector(base_url="http://api.test", session=make_session({"meals": [{"idMeal": None}]}))
        assert connector.lookup_by_id("1") == []
