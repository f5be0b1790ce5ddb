"""Parse free-form ingredient lines into structured ingredients."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from mealplanner.normalize.aggregation import IngredientLine

# =============================================================================
# Lookup Tables
# =============================================================================

UNICODE_FRACTIONS: dict[str, float] = {
    "⅛": 0.125,
    "¼": 0.25,
    "⅓": 0.333,
    "½": 0.5,
    "⅔": 0.667,
    "¾": 0.75,
    "⅞": 0.875,
}

# Canonical unit token for each accepted spelling
UNIT_ALIASES: dict[str, str] = {
    # Volume
    "cup": "cup",
    "cups": "cup",
    "tbsp": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "ml": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "l": "l",
    "liter": "l",
    "liters": "l",
    "fl oz": "fl oz",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    # Weight
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "g": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    # Count
    "whole": "whole",
    "clove": "clove",
    "cloves": "clove",
    "can": "can",
    "cans": "can",
    "package": "package",
    "packages": "package",
    "slice": "slice",
    "slices": "slice",
    "fillet": "fillet",
    "fillets": "fillet",
    "piece": "piece",
    "pieces": "piece",
    "breast": "breast",
    "breasts": "breast",
    "thigh": "thigh",
    "thighs": "thigh",
}

DEFAULT_UNIT = "whole"

_FRACTION_CHARS = "".join(UNICODE_FRACTIONS)
_NUMBER = rf"(?:\d+(?:\.\d+)?(?:\s*/\s*\d+)?(?:\s+\d+/\d+)?[{_FRACTION_CHARS}]?|[{_FRACTION_CHARS}])"
_QUANTITY_RE = re.compile(rf"^(?P<min>{_NUMBER})(?:\s*-\s*(?P<max>{_NUMBER}))?\s*")

# Longest aliases first so "fl oz" wins over "l" style prefixes
_UNIT_RE = re.compile(
    r"^(?P<unit>"
    + "|".join(re.escape(unit) for unit in sorted(UNIT_ALIASES, key=len, reverse=True))
    + r")\.?(?:\s+|$)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured form of a single free-text ingredient line."""

    name: str
    quantity_min: float
    quantity_max: float | None
    unit: str
    prep_state: str | None = None

    @property
    def shopping_quantity(self) -> float:
        """Quantity to buy: the upper bound of a range, else the quantity."""
        if self.quantity_max is not None:
            return self.quantity_max
        return self.quantity_min

    def to_line(self, ingredient_id: str, source_recipe_id: str | None = None) -> IngredientLine:
        """Convert to an IngredientLine for aggregation."""
        return IngredientLine(
            ingredient_id=ingredient_id,
            quantity=self.shopping_quantity,
            unit=self.unit,
            prep_state=self.prep_state,
            source_recipe_id=source_recipe_id,
            display_name=self.name,
        )


# =============================================================================
# Parsing Functions
# =============================================================================


def parse_quantity_string(quantity_str: str) -> float | None:
    """
    Parse a quantity string into a float.

    Handles formats like:
    - "2"
    - "1.5"
    - "1/2"
    - "1 1/2" (one and a half)
    - "½" and "1½"

    Returns None when the string holds no quantity.
    """
    if not quantity_str:
        return None

    quantity_str = quantity_str.strip()

    # Trailing unicode fraction, e.g. "½" or "1½"
    if quantity_str and quantity_str[-1] in UNICODE_FRACTIONS:
        whole = quantity_str[:-1].strip()
        fraction = UNICODE_FRACTIONS[quantity_str[-1]]
        if not whole:
            return fraction
        if whole.isdigit():
            return int(whole) + fraction
        return None

    # Mixed fractions like "1 1/2"
    mixed_match = re.fullmatch(r"(\d+)\s+(\d+)/(\d+)", quantity_str)
    if mixed_match:
        whole, num, denom = (int(part) for part in mixed_match.groups())
        if denom == 0:
            return None
        return whole + (num / denom)

    # Simple fractions like "1/2"
    frac_match = re.fullmatch(r"(\d+)\s*/\s*(\d+)", quantity_str)
    if frac_match:
        num, denom = (int(part) for part in frac_match.groups())
        if denom == 0:
            return None
        return num / denom

    num_match = re.fullmatch(r"\d+(?:\.\d+)?", quantity_str)
    if num_match:
        return float(quantity_str)

    return None


def normalize_unit(unit: str) -> str | None:
    """Map a unit spelling to its canonical token, or None if unknown."""
    return UNIT_ALIASES.get(unit.strip().lower().rstrip("."))


def parse_ingredient_line(line: str) -> ParsedIngredient | None:
    """
    Parse one ingredient line.

    The expected shape is ``[quantity][-max] [unit] name[, prep state]``:

        "¼ cup flour"            -> 0.25 cup flour
        "1-2 cloves garlic"      -> 1 to 2 clove garlic
        "1 whole onion, diced"   -> 1 whole onion, prep "diced"

    A missing unit defaults to "whole". Returns None for blank lines and for
    lines without a positive quantity or a name.
    """
    remaining = line.strip()
    if not remaining:
        return None

    quantity_match = _QUANTITY_RE.match(remaining)
    if not quantity_match:
        return None

    quantity_min = parse_quantity_string(quantity_match.group("min"))
    if not quantity_min:
        return None

    quantity_max = None
    if quantity_match.group("max"):
        quantity_max = parse_quantity_string(quantity_match.group("max"))
        if not quantity_max:
            quantity_max = None

    remaining = remaining[quantity_match.end() :].strip()

    unit = DEFAULT_UNIT
    unit_match = _UNIT_RE.match(remaining)
    if unit_match:
        unit = normalize_unit(unit_match.group("unit")) or DEFAULT_UNIT
        remaining = remaining[unit_match.end() :].strip()

    name, _, prep = remaining.partition(",")
    name = name.strip()
    if not name:
        return None

    return ParsedIngredient(
        name=name,
        quantity_min=quantity_min,
        quantity_max=quantity_max,
        unit=unit,
        prep_state=prep.strip() or None,
    )


def parse_ingredients_text(text: str) -> list[ParsedIngredient]:
    """Parse newline-separated ingredient lines, skipping unparseable ones."""
    parsed = []
    for line in text.splitlines():
        ingredient = parse_ingredient_line(line)
        if ingredient:
            parsed.append(ingredient)
    return parsed


# =============================================================================
# Formatting
# =============================================================================


def format_quantity(value: float) -> str:
    """Format a quantity, using a unicode glyph for common fractions."""
    for glyph, fraction in UNICODE_FRACTIONS.items():
        if value == fraction:
            return glyph
    if value == int(value):
        return str(int(value))
    return f"{value:g}"


def ingredients_to_text(ingredients: Iterable[ParsedIngredient | dict[str, Any]]) -> str:
    """
    Convert structured ingredients back to free-form text for editing.

    Accepts ParsedIngredient objects or mappings with ``name`` (or
    ``display_name``), ``quantity_min``, ``quantity_max``, ``unit`` and
    ``prep_state`` keys.
    """
    lines = []
    for ing in ingredients:
        if isinstance(ing, ParsedIngredient):
            name, qty_min, qty_max = ing.name, ing.quantity_min, ing.quantity_max
            unit, prep = ing.unit, ing.prep_state
        else:
            name = ing.get("name") or ing.get("display_name", "")
            qty_min = ing["quantity_min"]
            qty_max = ing.get("quantity_max")
            unit = ing.get("unit", DEFAULT_UNIT)
            prep = ing.get("prep_state")

        line = format_quantity(qty_min)
        if qty_max is not None:
            line += f"-{format_quantity(qty_max)}"
        line += f" {unit} {name}"
        if prep:
            line += f", {prep}"
        lines.append(line)

    return "\n".join(lines)
