"""Grocery list merging and shopping list generation from recipes."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from mealplanner.logging_config import get_logger
from mealplanner.normalize.aggregation import (
    IngredientLine,
    MergeKey,
    aggregate_ingredients,
    aggregate_with_sources,
    merge_key,
)
from mealplanner.normalize.categorize import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY,
    categorize_ingredient,
)
from mealplanner.normalize.quantity import Quantity, add_quantities

logger = get_logger(__name__)


@dataclass
class GroceryItem:
    """A single item on a grocery list."""

    ingredient_id: str
    display_name: str
    quantity: float
    unit: str
    prep_state: str | None = None
    category: str = DEFAULT_CATEGORY
    checked: bool = False
    recipe_sources: list[str] = field(default_factory=list)

    @property
    def amount(self) -> Quantity:
        """Quantity and unit as a Quantity value."""
        return Quantity(value=self.quantity, unit=self.unit)

    @property
    def display_quantity(self) -> str:
        """Get human-readable quantity string."""
        qty = str(int(self.quantity)) if self.quantity == int(self.quantity) else f"{self.quantity:g}"
        if self.unit:
            return f"{qty} {self.unit}"
        return qty


@dataclass
class PushResult:
    """Outcome of pushing ingredients into a grocery list."""

    items: list[GroceryItem]
    items_added: int = 0
    items_merged: int = 0


def _collect_sources(lines: Iterable[IngredientLine]) -> dict[MergeKey, list[str]]:
    """Map each merge key to its distinct source recipe ids, in input order."""
    sources: dict[MergeKey, list[str]] = {}
    for line in lines:
        recipe_ids = sources.setdefault(merge_key(line), [])
        if line.source_recipe_id and line.source_recipe_id not in recipe_ids:
            recipe_ids.append(line.source_recipe_id)
    return sources


def push_ingredients(
    items: Iterable[GroceryItem],
    incoming: Iterable[IngredientLine],
    categorizer: Callable[[str], str] = categorize_ingredient,
) -> PushResult:
    """
    Push recipe ingredients into an existing grocery list.

    Incoming lines are aggregated first, so duplicates within one push
    become a single item. Each group is then added to the existing item with
    the same ingredient id, unit and prep state, or appended as a new
    unchecked item.

    Args:
        items: Current grocery list items. They are not modified.
        incoming: Ingredient lines to push.
        categorizer: Assigns an aisle category to new items.

    Returns:
        PushResult with the updated item list and added/merged counts.
    """
    incoming = list(incoming)
    groups = aggregate_ingredients(incoming)
    sources = _collect_sources(incoming)

    result_items = list(items)
    positions: dict[MergeKey, int] = {}
    for index, item in enumerate(result_items):
        positions.setdefault(merge_key(item), index)

    added = 0
    merged = 0

    for group in groups:
        key = merge_key(group)
        recipe_ids = sources.get(key, [])

        if key in positions:
            index = positions[key]
            existing = result_items[index]
            total = add_quantities(existing.amount, group.amount)
            result_items[index] = replace(
                existing,
                quantity=total.value,
                recipe_sources=existing.recipe_sources
                + [rid for rid in recipe_ids if rid not in existing.recipe_sources],
            )
            merged += 1
        else:
            display_name = group.display_name or group.ingredient_id
            positions[key] = len(result_items)
            result_items.append(
                GroceryItem(
                    ingredient_id=group.ingredient_id,
                    display_name=display_name,
                    quantity=group.quantity,
                    unit=group.unit,
                    prep_state=group.prep_state,
                    category=categorizer(display_name),
                    recipe_sources=list(recipe_ids),
                )
            )
            added += 1

    logger.info(
        f"Pushed {len(incoming)} ingredient lines: {added} added, {merged} merged"
    )
    return PushResult(items=result_items, items_added=added, items_merged=merged)


@dataclass
class ShoppingList:
    """Complete shopping list built from one or more recipes."""

    list_id: str
    items: list[GroceryItem] = field(default_factory=list)

    # Grouped view
    items_by_category: dict[str, list[GroceryItem]] = field(default_factory=dict)

    def add_item(self, item: GroceryItem) -> None:
        """Add an item and update the category grouping."""
        self.items.append(item)

        category = item.category or DEFAULT_CATEGORY
        if category not in self.items_by_category:
            self.items_by_category[category] = []
        self.items_by_category[category].append(item)

    @property
    def unchecked_count(self) -> int:
        """Number of items not yet checked off."""
        return sum(1 for item in self.items if not item.checked)

    def grouped(self) -> list[tuple[str, list[GroceryItem]]]:
        """
        Get items grouped by category in aisle order.

        Known categories follow DEFAULT_CATEGORIES; custom categories come
        after them in the order they were first seen.
        """
        order = {category: position for position, category in enumerate(DEFAULT_CATEGORIES)}
        seen = list(self.items_by_category)
        ranked = sorted(
            seen,
            key=lambda category: (order.get(category, len(order)), seen.index(category)),
        )
        return [(category, self.items_by_category[category]) for category in ranked]


class ShoppingListGenerator:
    """
    Generates shopping lists from recipes with:
    - Quantity aggregation across recipes (same id, unit and prep state)
    - Per-recipe traceability for every item
    - Aisle categorization
    """

    def __init__(self, categorizer: Callable[[str], str] = categorize_ingredient):
        self.categorizer = categorizer

    def generate(
        self,
        list_id: str,
        recipes_ingredients: list[tuple[str, list[IngredientLine]]],
    ) -> ShoppingList:
        """
        Generate a shopping list from recipe ingredients.

        Args:
            list_id: Identifier for the resulting list.
            recipes_ingredients: List of (recipe_id, ingredient lines) tuples.
                Every line is attributed to the recipe it is listed under.

        Returns:
            ShoppingList with one item per distinct ingredient group.
        """
        logger.info(f"Generating shopping list {list_id} from {len(recipes_ingredients)} recipes")

        lines = [
            replace(line, source_recipe_id=recipe_id)
            for recipe_id, recipe_lines in recipes_ingredients
            for line in recipe_lines
        ]
        aggregated = aggregate_with_sources(lines)

        shopping_list = ShoppingList(list_id=list_id)
        for agg_ing in aggregated:
            display_name = agg_ing.display_name or agg_ing.ingredient_id
            shopping_list.add_item(
                GroceryItem(
                    ingredient_id=agg_ing.ingredient_id,
                    display_name=display_name,
                    quantity=agg_ing.total_quantity,
                    unit=agg_ing.unit,
                    prep_state=agg_ing.prep_state,
                    category=self.categorizer(display_name),
                    recipe_sources=agg_ing.recipe_ids,
                )
            )

        logger.info(
            f"Generated shopping list: {len(lines)} lines merged into "
            f"{len(shopping_list.items)} items across "
            f"{len(shopping_list.items_by_category)} categories"
        )

        return shopping_list
