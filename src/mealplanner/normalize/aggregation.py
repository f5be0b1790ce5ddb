"""Deterministic aggregation of recipe ingredient lines.

Lines merge when they share a merge key: the same ingredient id, the same
unit token and the same preparation state. Groups keep the position of
their first occurrence; later lines only add to the quantity.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from mealplanner.normalize.errors import (
    InvalidQuantityError,
    MergeIncompatibleError,
    MissingSourceAttributionError,
)
from mealplanner.normalize.quantity import (
    Quantity,
    add_quantities,
    is_valid_quantity,
    sum_quantities,
)

MergeKey = tuple[str, str, str | None]


class Keyed(Protocol):
    """Anything carrying the fields of a merge key."""

    ingredient_id: str
    unit: str
    prep_state: str | None


# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class IngredientLine:
    """One quantity of an ingredient contributed by a single recipe."""

    ingredient_id: str
    quantity: float
    unit: str
    prep_state: str | None = None
    source_recipe_id: str | None = field(default=None, compare=False)
    display_name: str | None = field(default=None, compare=False)

    @property
    def amount(self) -> Quantity:
        """Quantity and unit as a Quantity value."""
        return Quantity(value=self.quantity, unit=self.unit)


@dataclass(frozen=True)
class SourceContribution:
    """Quantity a single recipe line contributed to an aggregated group."""

    recipe_id: str
    quantity: float


@dataclass(frozen=True)
class AggregatedIngredient:
    """An ingredient group with the recipes that contributed to it."""

    ingredient_id: str
    quantity: float
    total_quantity: float
    unit: str
    prep_state: str | None = None
    sources: tuple[SourceContribution, ...] = ()
    display_name: str | None = field(default=None, compare=False)

    @property
    def recipe_ids(self) -> list[str]:
        """Distinct contributing recipe ids in first-contribution order."""
        return list(dict.fromkeys(source.recipe_id for source in self.sources))

    def as_line(self) -> IngredientLine:
        """Drop traceability and return the group as a plain line."""
        return IngredientLine(
            ingredient_id=self.ingredient_id,
            quantity=self.total_quantity,
            unit=self.unit,
            prep_state=self.prep_state,
            display_name=self.display_name,
        )


# =============================================================================
# Merge Rules
# =============================================================================


def _prep_key(prep_state: str | None) -> str | None:
    # An empty prep state means "no preparation"
    return prep_state or None


def merge_key(line: Keyed) -> MergeKey:
    """Return the (ingredient_id, unit, prep_state) equivalence key of a line."""
    return (line.ingredient_id, line.unit, _prep_key(line.prep_state))


def should_merge(a: IngredientLine, b: IngredientLine) -> bool:
    """
    Check whether two lines can be merged.

    Ingredient ids and unit tokens must be identical. Prep states must be
    identical strings, or both absent. There is no fuzzy matching, so
    "diced" and "chopped" never merge.
    """
    return merge_key(a) == merge_key(b)


def merge_ingredients(a: IngredientLine, b: IngredientLine) -> IngredientLine:
    """
    Merge two lines that share a merge key by adding their quantities.

    Raises:
        MergeIncompatibleError: If the lines do not share a merge key.
        InvalidQuantityError: If either quantity is negative or non-finite.
    """
    if not should_merge(a, b):
        raise MergeIncompatibleError(
            "Cannot merge ingredients with different ids, units or prep states: "
            f"{merge_key(a)} and {merge_key(b)}"
        )

    total = add_quantities(a.amount, b.amount)
    return IngredientLine(
        ingredient_id=a.ingredient_id,
        quantity=total.value,
        unit=a.unit,
        prep_state=_prep_key(a.prep_state),
        display_name=a.display_name or b.display_name,
    )


def _validate_line(line: IngredientLine) -> None:
    if not is_valid_quantity(line.amount):
        raise InvalidQuantityError(
            f"Quantities must be non-negative: {line.ingredient_id} has {line.quantity!r}"
        )


# =============================================================================
# Aggregation
# =============================================================================


@dataclass
class _Group:
    """Running state of one merge key while lines are being collected."""

    first: IngredientLine
    amounts: list[Quantity] = field(default_factory=list)
    sources: list[SourceContribution] = field(default_factory=list)
    display_name: str | None = None

    def add(self, line: IngredientLine) -> None:
        self.amounts.append(line.amount)
        self.display_name = self.display_name or line.display_name

    def total(self) -> float:
        return sum_quantities(self.amounts).value


def _collect_groups(lines: Iterable[IngredientLine], traced: bool) -> list[_Group]:
    groups: list[_Group] = []
    positions: dict[MergeKey, int] = {}

    for line in lines:
        _validate_line(line)
        if traced and not line.source_recipe_id:
            raise MissingSourceAttributionError(
                f"Ingredient line {line.ingredient_id!r} has no source recipe id",
                ingredient_id=line.ingredient_id,
            )

        key = merge_key(line)
        if key not in positions:
            positions[key] = len(groups)
            groups.append(_Group(first=line))

        group = groups[positions[key]]
        group.add(line)
        if traced:
            group.sources.append(
                SourceContribution(recipe_id=line.source_recipe_id, quantity=line.quantity)
            )

    return groups


def aggregate_ingredients(lines: Iterable[IngredientLine]) -> list[IngredientLine]:
    """
    Aggregate ingredient lines into one line per merge key.

    Quantities within a group are summed exactly and rounded once, so the
    totals do not depend on input order.

    Args:
        lines: Ingredient lines in the order they were collected.

    Returns:
        Merged lines ordered by the first occurrence of each merge key.
        Source recipe ids are not retained.
    """
    return [
        IngredientLine(
            ingredient_id=group.first.ingredient_id,
            quantity=group.total(),
            unit=group.first.unit,
            prep_state=_prep_key(group.first.prep_state),
            display_name=group.display_name,
        )
        for group in _collect_groups(lines, traced=False)
    ]


def aggregate_with_sources(lines: Iterable[IngredientLine]) -> list[AggregatedIngredient]:
    """
    Aggregate ingredient lines while keeping per-recipe traceability.

    Every input line appends one SourceContribution, carrying its own
    unmerged quantity, to the group it falls into.

    Args:
        lines: Ingredient lines, each with a source_recipe_id.

    Returns:
        Aggregated groups ordered by first occurrence of each merge key.

    Raises:
        MissingSourceAttributionError: If a line has no source_recipe_id.
        InvalidQuantityError: If a line has a negative or non-finite quantity.
    """
    results = []
    for group in _collect_groups(lines, traced=True):
        total = group.total()
        results.append(
            AggregatedIngredient(
                ingredient_id=group.first.ingredient_id,
                quantity=total,
                total_quantity=total,
                unit=group.first.unit,
                prep_state=_prep_key(group.first.prep_state),
                sources=tuple(group.sources),
                display_name=group.display_name,
            )
        )
    return results
