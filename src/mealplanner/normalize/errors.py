"""Exceptions raised by quantity arithmetic and ingredient aggregation."""


class AggregationError(ValueError):
    """Base exception for ingredient math errors."""


class InvalidQuantityError(AggregationError):
    """Raised when a quantity is negative or not a finite number."""


class UnitMismatchError(AggregationError):
    """Raised when quantities with different unit tokens are combined."""


class MergeIncompatibleError(AggregationError):
    """Raised when two ingredient lines do not share a merge key."""


class MissingSourceAttributionError(AggregationError):
    """Raised when traceability is requested for a line without a recipe id."""

    def __init__(self, message: str, ingredient_id: str | None = None):
        super().__init__(message)
        self.ingredient_id = ingredient_id
