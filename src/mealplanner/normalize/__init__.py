"""Quantity arithmetic, ingredient aggregation, parsing and categorization."""

from mealplanner.normalize.aggregation import (
    AggregatedIngredient,
    IngredientLine,
    SourceContribution,
    aggregate_ingredients,
    aggregate_with_sources,
    merge_ingredients,
    merge_key,
    should_merge,
)
from mealplanner.normalize.categorize import (
    DEFAULT_CATEGORIES,
    categorize_ingredient,
)
from mealplanner.normalize.errors import (
    AggregationError,
    InvalidQuantityError,
    MergeIncompatibleError,
    MissingSourceAttributionError,
    UnitMismatchError,
)
from mealplanner.normalize.parsing import (
    ParsedIngredient,
    ingredients_to_text,
    parse_ingredient_line,
    parse_ingredients_text,
    parse_quantity_string,
)
from mealplanner.normalize.quantity import (
    Quantity,
    add_quantities,
    compare_quantities,
    is_valid_quantity,
    multiply_quantity,
    sum_quantities,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "AggregatedIngredient",
    "AggregationError",
    "IngredientLine",
    "InvalidQuantityError",
    "MergeIncompatibleError",
    "MissingSourceAttributionError",
    "ParsedIngredient",
    "Quantity",
    "SourceContribution",
    "UnitMismatchError",
    "add_quantities",
    "aggregate_ingredients",
    "aggregate_with_sources",
    "categorize_ingredient",
    "compare_quantities",
    "ingredients_to_text",
    "is_valid_quantity",
    "merge_ingredients",
    "merge_key",
    "multiply_quantity",
    "parse_ingredient_line",
    "parse_ingredients_text",
    "parse_quantity_string",
    "should_merge",
    "sum_quantities",
]
