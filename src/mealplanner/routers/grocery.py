"""API routes for ingredient aggregation and grocery list merging.

The endpoints are stateless: clients send the data to work on and receive
the result. Persisting grocery lists is left to the caller.
"""

from fastapi import APIRouter, HTTPException, status

from mealplanner.config import get_settings
from mealplanner.logging_config import LoggingContext, get_logger
from mealplanner.normalize.aggregation import aggregate_ingredients, aggregate_with_sources
from mealplanner.normalize.categorize import DEFAULT_CATEGORIES, categorize_many
from mealplanner.normalize.parsing import parse_ingredient_line
from mealplanner.plan.shopping_list import push_ingredients
from mealplanner.schemas import (
    AggregatedIngredientSchema,
    AggregateRequest,
    AggregateResponse,
    CategorizeRequest,
    CategorizeResponse,
    GroceryItemSchema,
    ParsedIngredientSchema,
    ParseRequest,
    ParseResponse,
    PushIngredientsRequest,
    PushIngredientsResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery", tags=["grocery"])


@router.post("/aggregate", response_model=AggregateResponse)
async def aggregate(request: AggregateRequest) -> AggregateResponse:
    """
    Merge ingredient lines sharing an ingredient id, unit and prep state.

    Groups are returned in the order of their first line. With
    ``with_sources`` each group lists every contributing recipe line.
    """
    lines = [ingredient.to_line() for ingredient in request.ingredients]

    if request.with_sources:
        groups = [
            AggregatedIngredientSchema.from_aggregated(agg) for agg in aggregate_with_sources(lines)
        ]
    else:
        groups = [AggregatedIngredientSchema.from_line(line) for line in aggregate_ingredients(lines)]

    logger.debug(f"Aggregated {len(lines)} lines into {len(groups)} groups")

    return AggregateResponse(ingredients=groups, input_count=len(lines), group_count=len(groups))


@router.post("/push-ingredients", response_model=PushIngredientsResponse)
async def push_recipe_ingredients(request: PushIngredientsRequest) -> PushIngredientsResponse:
    """
    Push recipe ingredients into a grocery list.

    Ingredients matching an existing item (same ingredient id, unit and prep
    state) increase its quantity; the rest are added as new items with an
    aisle category.
    """
    settings = get_settings()
    if len(request.ingredients) > settings.max_push_ingredients:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.max_push_ingredients} ingredients can be pushed at once",
        )
    if len(request.items) > settings.max_grocery_items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Grocery lists are limited to {settings.max_grocery_items} items",
        )

    with LoggingContext(grocery_list_id=request.grocery_list_id):
        result = push_ingredients(
            [item.to_item() for item in request.items],
            [ingredient.to_line() for ingredient in request.ingredients],
        )

    return PushIngredientsResponse(
        grocery_list_id=request.grocery_list_id,
        items=[GroceryItemSchema.model_validate(item) for item in result.items],
        items_added=result.items_added,
        items_merged=result.items_merged,
    )


@router.post("/parse", response_model=ParseResponse)
async def parse_ingredients(request: ParseRequest) -> ParseResponse:
    """
    Parse free-text ingredient lines such as "1 1/2 cups rice, rinsed".

    Lines without a quantity or name are reported in ``skipped_lines``.
    """
    parsed = []
    skipped = []
    for line in request.text.splitlines():
        if not line.strip():
            continue
        ingredient = parse_ingredient_line(line)
        if ingredient:
            parsed.append(ParsedIngredientSchema.from_parsed(ingredient))
        else:
            skipped.append(line.strip())

    if skipped:
        logger.info(f"Skipped {len(skipped)} unparseable ingredient lines")

    return ParseResponse(ingredients=parsed, skipped_lines=skipped)


@router.post("/categorize", response_model=CategorizeResponse)
async def categorize(request: CategorizeRequest) -> CategorizeResponse:
    """Assign a shopping aisle category to each ingredient name."""
    return CategorizeResponse(categories=categorize_many(request.names))


@router.get("/categories")
async def list_categories() -> dict:
    """List the shopping aisle categories in display order."""
    return {"categories": list(DEFAULT_CATEGORIES)}
