"""Unit tests for shopping aisle categorization."""

import pytest

from mealplanner.normalize.categorize import (
    CATEGORY_KEYWORDS,
    DEFAULT_CATEGORIES,
    categorize_ingredient,
    categorize_many,
)


class TestCategorizeIngredient:
    """Tests for categorize_ingredient function."""

    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("yellow onion", "Produce"),
            ("Chicken Breast", "Meat & Seafood"),
            ("eggs", "Dairy & Eggs"),
            ("sourdough", "Bakery"),
            ("frozen peas", "Frozen"),
            ("black beans", "Canned Goods"),
            ("soy sauce", "Condiments & Sauces"),
            ("coffee", "Beverages"),
            ("dark chocolate", "Snacks & Treats"),
            ("brown rice", "Pantry"),
            ("paper towels", "Household"),
        ],
    )
    def test_keyword_matches(self, name, category):
        """Test names land in the expected aisle."""
        assert categorize_ingredient(name) == category

    def test_longest_keyword_wins(self):
        """Test a more specific keyword beats a shorter one."""
        assert categorize_ingredient("peanut butter") == "Pantry"
        assert categorize_ingredient("coconut milk") == "Canned Goods"
        assert categorize_ingredient("olive oil") == "Condiments & Sauces"

    def test_whole_words_only(self):
        """Test keywords do not match inside other words."""
        assert categorize_ingredient("rice") == "Pantry"
        assert categorize_ingredient("ginger") == "Produce"
        assert categorize_ingredient("cornstarch") == "Pantry"

    def test_name_inside_keyword(self):
        """Test a partial name falls back to the keyword containing it."""
        assert categorize_ingredient("heavy") == "Dairy & Eggs"

    def test_unknown(self):
        """Test unmatched names are 'Other'."""
        assert categorize_ingredient("xanthan gum") == "Other"
        assert categorize_ingredient("") == "Other"
        assert categorize_ingredient("   ") == "Other"

    def test_case_and_whitespace_insensitive(self):
        """Test normalization before matching."""
        assert categorize_ingredient("  GARLIC  ") == "Produce"

    def test_deterministic(self):
        """Test repeated calls agree."""
        names = ["tomato paste", "chicken stock", "butter"]
        assert [categorize_ingredient(n) for n in names] == [
            categorize_ingredient(n) for n in names
        ]


class TestCategoryTables:
    """Tests for the category tables."""

    def test_keyword_categories_are_known(self):
        """Test every keyword table is a listed category."""
        assert set(CATEGORY_KEYWORDS) <= set(DEFAULT_CATEGORIES)

    def test_other_is_last(self):
        assert DEFAULT_CATEGORIES[-1] == "Other"

    def test_categorize_many(self):
        """Test categorizing several names at once."""
        assert categorize_many(["milk", "bread"]) == {
            "milk": "Dairy & Eggs",
            "bread": "Bakery",
        }
