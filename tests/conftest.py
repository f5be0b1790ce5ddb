"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from mealplanner.logging_config import clear_context
from mealplanner.normalize.aggregation import IngredientLine
from mealplanner.plan.shopping_list import GroceryItem

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


@pytest.fixture(autouse=True)
def reset_logging_context():
    """Make sure no logging context leaks between tests."""
    yield
    clear_context()


# =============================================================================
# Ingredient Line Fixtures
# =============================================================================


@pytest.fixture
def rice_and_chicken_lines():
    """Three rice lines and one chicken line, none traced."""
    return [
        IngredientLine(ingredient_id="rice", quantity=1, unit="cup"),
        IngredientLine(ingredient_id="rice", quantity=0.5, unit="cup"),
        IngredientLine(ingredient_id="rice", quantity=1.75, unit="cup"),
        IngredientLine(ingredient_id="chicken", quantity=1, unit="lb"),
    ]


@pytest.fixture
def traced_lines():
    """Lines from two recipes with overlapping ingredients."""
    return [
        IngredientLine("rice", 1, "cup", source_recipe_id="recipe-A", display_name="rice"),
        IngredientLine("onion", 1, "whole", "diced", "recipe-A", display_name="onion"),
        IngredientLine("rice", 0.5, "cup", source_recipe_id="recipe-B", display_name="rice"),
        IngredientLine("onion", 2, "whole", "diced", "recipe-B", display_name="onion"),
        IngredientLine("onion", 1, "whole", source_recipe_id="recipe-B", display_name="onion"),
    ]


# =============================================================================
# Grocery List Fixtures
# =============================================================================


@pytest.fixture
def existing_items():
    """A grocery list that already holds rice and milk."""
    return [
        GroceryItem(
            ingredient_id="rice",
            display_name="Rice",
            quantity=2,
            unit="cup",
            category="Pantry",
            recipe_sources=["recipe-0"],
        ),
        GroceryItem(
            ingredient_id="milk",
            display_name="Milk",
            quantity=1,
            unit="l",
            category="Dairy & Eggs",
            checked=True,
        ),
    ]


@pytest.fixture
def client():
    """FastAPI test client."""
    from mealplanner.main import app

    with TestClient(app) as test_client:
        yield test_client
