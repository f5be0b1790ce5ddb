"""Grocery list and shopping list planning."""

from mealplanner.plan.shopping_list import (
    GroceryItem,
    PushResult,
    ShoppingList,
    ShoppingListGenerator,
    push_ingredients,
)

__all__ = [
    "GroceryItem",
    "PushResult",
    "ShoppingList",
    "ShoppingListGenerator",
    "push_ingredients",
]
