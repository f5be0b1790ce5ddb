"""Request and response schemas for the grocery API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mealplanner.normalize.aggregation import AggregatedIngredient, IngredientLine
from mealplanner.normalize.categorize import DEFAULT_CATEGORY
from mealplanner.normalize.parsing import ParsedIngredient
from mealplanner.plan.shopping_list import GroceryItem


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class IngredientLineSchema(BaseModel):
    """One recipe ingredient line."""

    ingredient_id: str = Field(min_length=1)
    quantity: float = Field(ge=0, allow_inf_nan=False)
    unit: str = Field(min_length=1)
    prep_state: str | None = None
    source_recipe_id: str | None = None
    display_name: str | None = None

    @field_validator("prep_state", "source_recipe_id", mode="before")
    @classmethod
    def empty_as_missing(cls, v: Any) -> Any:
        """Treat blank strings as absent."""
        return _blank_to_none(v)

    def to_line(self) -> IngredientLine:
        """Convert to the domain value object."""
        return IngredientLine(
            ingredient_id=self.ingredient_id,
            quantity=self.quantity,
            unit=self.unit,
            prep_state=self.prep_state,
            source_recipe_id=self.source_recipe_id,
            display_name=self.display_name,
        )

    @classmethod
    def from_line(cls, line: IngredientLine) -> "IngredientLineSchema":
        """Build from the domain value object."""
        return cls(
            ingredient_id=line.ingredient_id,
            quantity=line.quantity,
            unit=line.unit,
            prep_state=line.prep_state,
            source_recipe_id=line.source_recipe_id,
            display_name=line.display_name,
        )


class SourceContributionSchema(BaseModel):
    """Quantity contributed by one recipe line."""

    recipe_id: str
    quantity: float


class AggregatedIngredientSchema(BaseModel):
    """Aggregated ingredient group, optionally with traceability."""

    ingredient_id: str
    quantity: float
    total_quantity: float
    unit: str
    prep_state: str | None = None
    display_name: str | None = None
    sources: list[SourceContributionSchema] = Field(default_factory=list)

    @classmethod
    def from_aggregated(cls, agg: AggregatedIngredient) -> "AggregatedIngredientSchema":
        """Build from a traced aggregation result."""
        return cls(
            ingredient_id=agg.ingredient_id,
            quantity=agg.quantity,
            total_quantity=agg.total_quantity,
            unit=agg.unit,
            prep_state=agg.prep_state,
            display_name=agg.display_name,
            sources=[
                SourceContributionSchema(recipe_id=s.recipe_id, quantity=s.quantity)
                for s in agg.sources
            ],
        )

    @classmethod
    def from_line(cls, line: IngredientLine) -> "AggregatedIngredientSchema":
        """Build from an untraced aggregation result."""
        return cls(
            ingredient_id=line.ingredient_id,
            quantity=line.quantity,
            total_quantity=line.quantity,
            unit=line.unit,
            prep_state=line.prep_state,
            display_name=line.display_name,
        )


class AggregateRequest(BaseModel):
    """Request to aggregate ingredient lines."""

    ingredients: list[IngredientLineSchema]
    with_sources: bool = Field(
        default=False,
        description="Keep per-recipe contributions; every line then needs a source_recipe_id",
    )


class AggregateResponse(BaseModel):
    """Aggregated ingredient groups in first-occurrence order."""

    ingredients: list[AggregatedIngredientSchema]
    input_count: int
    group_count: int


class PushIngredientSchema(IngredientLineSchema):
    """Ingredient pushed from a recipe to a grocery list."""

    quantity: float = Field(gt=0, allow_inf_nan=False, description="Quantity must be positive")
    display_name: str = Field(min_length=1, description="Display name is required")


class GroceryItemSchema(BaseModel):
    """Grocery list item as sent by and returned to the client."""

    model_config = ConfigDict(from_attributes=True)

    ingredient_id: str
    display_name: str
    quantity: float = Field(ge=0, allow_inf_nan=False)
    unit: str
    prep_state: str | None = None
    category: str = DEFAULT_CATEGORY
    checked: bool = False
    recipe_sources: list[str] = Field(default_factory=list)

    @field_validator("prep_state", mode="before")
    @classmethod
    def empty_as_missing(cls, v: Any) -> Any:
        """Treat blank strings as absent."""
        return _blank_to_none(v)

    def to_item(self) -> GroceryItem:
        """Convert to the domain grocery item."""
        return GroceryItem(
            ingredient_id=self.ingredient_id,
            display_name=self.display_name,
            quantity=self.quantity,
            unit=self.unit,
            prep_state=self.prep_state,
            category=self.category,
            checked=self.checked,
            recipe_sources=list(self.recipe_sources),
        )


class PushIngredientsRequest(BaseModel):
    """Request to push recipe ingredients into a grocery list."""

    grocery_list_id: str | None = None
    items: list[GroceryItemSchema] = Field(
        default_factory=list, description="Current items on the grocery list"
    )
    ingredients: list[PushIngredientSchema] = Field(
        min_length=1, description="At least one ingredient is required"
    )


class PushIngredientsResponse(BaseModel):
    """Updated grocery list after a push."""

    grocery_list_id: str | None = None
    items: list[GroceryItemSchema]
    items_added: int
    items_merged: int


class ParseRequest(BaseModel):
    """Free-text ingredient lines, one per line."""

    text: str


class ParsedIngredientSchema(BaseModel):
    """Structured ingredient parsed from text."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    quantity_min: float
    quantity_max: float | None = None
    unit: str
    prep_state: str | None = None

    @classmethod
    def from_parsed(cls, parsed: ParsedIngredient) -> "ParsedIngredientSchema":
        """Build from a parsed ingredient."""
        return cls.model_validate(parsed)


class ParseResponse(BaseModel):
    """Parsed ingredients in input order."""

    ingredients: list[ParsedIngredientSchema]
    skipped_lines: list[str] = Field(default_factory=list)


class CategorizeRequest(BaseModel):
    """Ingredient names to categorize."""

    names: list[str] = Field(min_length=1)


class CategorizeResponse(BaseModel):
    """Aisle category per ingredient name."""

    categories: dict[str, str]
