"""Domain-specific exceptions."""

from collections.abc import Mapping
from enum import StrEnum


class ErrorKind(StrEnum):
    """Reason a single field was rejected during validation."""

    BLANK_FIELD = "blank_field"
    NOT_A_NUMBER = "not_a_number"
    NOT_AN_INTEGER = "not_an_integer"
    NEGATIVE_VALUE = "negative_value"
    RANGE_INVERTED = "range_inverted"
    STOCK_OUT_OF_RANGE = "stock_out_of_range"
    INVALID_MACHINE_ID = "invalid_machine_id"


class DomainError(Exception):
    """Base exception for domain errors."""

    pass


class ValidationError(DomainError):
    """Raised when a caller unwraps a failed validation result."""

    def __init__(self, errors: Mapping[str, ErrorKind]):
        self.errors = dict(errors)
        fields = ", ".join(f"{field}={kind}" for field, kind in self.errors.items())
        super().__init__(f"Validation failed: {fields}")


class CatalogIndexError(DomainError, IndexError):
    """Raised when an update addresses a position outside the collection."""

    pass


class AssociatedPartsNotEmptyError(DomainError):
    """Raised when deleting a product that still has associated parts."""

    def __init__(self, product_id: int, part_count: int):
        self.product_id = product_id
        self.part_count = part_count
        super().__init__(
            f"Cannot delete product {product_id} with {part_count} associated "
            + "part(s); remove them first"
        )
