"""Unit tests for ingredient line parsing."""

import pytest

from mealplanner.normalize.aggregation import IngredientLine
from mealplanner.normalize.parsing import (
    ParsedIngredient,
    format_quantity,
    ingredients_to_text,
    normalize_unit,
    parse_ingredient_line,
    parse_ingredients_text,
    parse_quantity_string,
)


class TestParseQuantityString:
    """Tests for parse_quantity_string function."""

    def test_parse_integer(self):
        """Test parsing simple integers."""
        assert parse_quantity_string("2") == 2.0
        assert parse_quantity_string("10") == 10.0

    def test_parse_decimal(self):
        """Test parsing decimal numbers."""
        assert parse_quantity_string("1.5") == 1.5
        assert parse_quantity_string("0.25") == 0.25

    def test_parse_fraction(self):
        """Test parsing simple fractions."""
        assert parse_quantity_string("1/2") == 0.5
        assert parse_quantity_string("3/4") == 0.75

    def test_parse_mixed_fraction(self):
        """Test parsing mixed fractions like '1 1/2'."""
        assert parse_quantity_string("1 1/2") == 1.5
        assert parse_quantity_string("2 1/4") == 2.25

    def test_parse_unicode_fraction(self):
        """Test parsing unicode fraction glyphs."""
        assert parse_quantity_string("½") == 0.5
        assert parse_quantity_string("¼") == 0.25
        assert parse_quantity_string("1½") == 1.5

    def test_parse_empty_or_invalid(self):
        """Test strings without a quantity."""
        assert parse_quantity_string("") is None
        assert parse_quantity_string("to taste") is None
        assert parse_quantity_string("1/0") is None


class TestParseIngredientLine:
    """Tests for parse_ingredient_line function."""

    def test_unicode_fraction_with_unit(self):
        """Test '¼ cup flour'."""
        assert parse_ingredient_line("¼ cup flour") == ParsedIngredient(
            name="flour", quantity_min=0.25, quantity_max=None, unit="cup"
        )

    def test_unit_normalized(self):
        """Test plural and long unit spellings are normalized."""
        parsed = parse_ingredient_line("2 tablespoons vanilla extract")
        assert parsed.unit == "tbsp"
        assert parsed.name == "vanilla extract"

        assert parse_ingredient_line("3 Cups rice").unit == "cup"
        assert parse_ingredient_line("2 lbs ground beef").unit == "lb"

    def test_prep_state(self):
        """Test text after a comma becomes the prep state."""
        parsed = parse_ingredient_line("1 whole onion, diced")
        assert parsed.name == "onion"
        assert parsed.unit == "whole"
        assert parsed.prep_state == "diced"

    def test_prep_state_keeps_later_commas(self):
        """Test only the first comma splits name and prep state."""
        parsed = parse_ingredient_line("3 cloves garlic, minced, divided")
        assert parsed.unit == "clove"
        assert parsed.prep_state == "minced, divided"

    def test_default_unit(self):
        """Test a missing unit defaults to 'whole'."""
        parsed = parse_ingredient_line("2 eggs")
        assert parsed.unit == "whole"
        assert parsed.name == "eggs"

    def test_unit_prefix_of_word_not_matched(self):
        """Test units only match as whole words."""
        parsed = parse_ingredient_line("2 large eggs")
        assert parsed.unit == "whole"
        assert parsed.name == "large eggs"

    def test_multi_word_unit(self):
        """Test 'fl oz' is recognized."""
        parsed = parse_ingredient_line("8 fl oz milk")
        assert parsed.unit == "fl oz"
        assert parsed.name == "milk"

    def test_range(self):
        """Test ranges set both bounds."""
        parsed = parse_ingredient_line("1-2 cloves garlic")
        assert parsed.quantity_min == 1
        assert parsed.quantity_max == 2
        assert parsed.unit == "clove"

    def test_mixed_number(self):
        """Test '1 1/2 cups rice, rinsed'."""
        parsed = parse_ingredient_line("1 1/2 cups rice, rinsed")
        assert parsed.quantity_min == 1.5
        assert parsed.unit == "cup"
        assert parsed.name == "rice"
        assert parsed.prep_state == "rinsed"

    def test_unparseable_lines(self):
        """Test lines without quantity or name."""
        assert parse_ingredient_line("") is None
        assert parse_ingredient_line("   ") is None
        assert parse_ingredient_line("salt to taste") is None
        assert parse_ingredient_line("0 cups flour") is None
        assert parse_ingredient_line("2 cups") is None


class TestParsedIngredient:
    """Tests for ParsedIngredient conversion."""

    def test_to_line_uses_upper_bound(self):
        """Test ranges are shopped at their upper bound."""
        parsed = parse_ingredient_line("1-2 cloves garlic, minced")
        line = parsed.to_line("garlic-1", source_recipe_id="recipe-A")

        assert line == IngredientLine("garlic-1", 2, "clove", "minced")
        assert line.source_recipe_id == "recipe-A"
        assert line.display_name == "garlic"

    def test_to_line_single_quantity(self):
        """Test single quantities are used as-is."""
        line = parse_ingredient_line("½ cup milk").to_line("milk-1")
        assert line.quantity == 0.5
        assert line.source_recipe_id is None


class TestParseIngredientsText:
    """Tests for parse_ingredients_text function."""

    def test_multiple_lines(self):
        """Test parsing several lines and skipping noise."""
        text = "1 cup rice\n\nsalt to taste\n2 whole onions, diced\n"
        parsed = parse_ingredients_text(text)
        assert [p.name for p in parsed] == ["rice", "onions"]


class TestFormatting:
    """Tests for formatting ingredients back to text."""

    def test_format_quantity(self):
        """Test quantity formatting."""
        assert format_quantity(0.5) == "½"
        assert format_quantity(2.0) == "2"
        assert format_quantity(1.5) == "1.5"

    def test_ingredients_to_text(self):
        """Test formatting structured ingredients."""
        text = ingredients_to_text(
            [
                ParsedIngredient("flour", 0.25, None, "cup"),
                {
                    "display_name": "garlic",
                    "quantity_min": 1,
                    "quantity_max": 2,
                    "unit": "clove",
                    "prep_state": "minced",
                },
            ]
        )
        assert text == "¼ cup flour\n1-2 clove garlic, minced"

    @pytest.mark.parametrize(
        "line",
        ["¼ cup flour", "1-2 clove garlic, minced", "2 whole onion, diced", "1.5 lb chicken"],
    )
    def test_text_survives_parse(self, line):
        """Test formatted text parses back to the same ingredient."""
        parsed = parse_ingredient_line(line)
        assert ingredients_to_text([parsed]) == line


class TestNormalizeUnit:
    """Tests for normalize_unit function."""

    def test_known_units(self):
        assert normalize_unit("Tablespoons") == "tbsp"
        assert normalize_unit("tsp.") == "tsp"

    def test_unknown_unit(self):
        assert normalize_unit("handful") is None
