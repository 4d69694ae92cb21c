"""Field validation for candidate parts and products.

Drafts carry raw text exactly as a user typed it. Validation converts every
field independently and collects all failures, so one submission reports
every offending field at once. Bad input never raises; the outcome is a
``ValidationResult`` holding either the validated entity or a mapping of
field name to ``ErrorKind``.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Final, Generic, TypeVar

from ..domain.constants import (
    FIELD_ID,
    FIELD_MAX,
    FIELD_MIN,
    FIELD_NAME,
    FIELD_PRICE,
    FIELD_SOURCE,
    FIELD_STOCK,
    INTEGER_MAX,
    INTEGER_MIN,
)
from ..domain.entities import Part, Product
from ..domain.exceptions import ErrorKind, ValidationError
from ..logging_config import get_logger
from ..logging_utils import log_validation_error
from ..metrics import record_validation_failure

logger = get_logger(__name__)

# Leading zeros are dropped before the digit count is limited
_INTEGER_PATTERN: Final = re.compile(r"([+-]?)0*([0-9]{1,10})")
_DECIMAL_PATTERN: Final = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]{1,6})?"
)

T = TypeVar("T")


@dataclass(frozen=True)
class PartDraft:
    """Raw form input for a part.

    ``source`` holds the machine id for in-house parts and the company name
    for outsourced ones. ``id`` is only present when editing an existing part.
    """

    name: str
    price: str
    stock: str
    min: str
    max: str
    source: str
    in_house: bool = True
    id: str | None = None


@dataclass(frozen=True)
class ProductDraft:
    """Raw form input for a product."""

    name: str
    price: str
    stock: str
    min: str
    max: str
    id: str | None = None


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of validating a draft: an entity or per-field errors."""

    value: T | None = None
    errors: Mapping[str, ErrorKind] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the validated entity.

        Raises:
            ValidationError: If validation failed
        """
        if self.errors or self.value is None:
            raise ValidationError(self.errors)
        return self.value


class _FieldChecker:
    """Collects field errors for a single validation run."""

    def __init__(self, entity_type: str):
        self.entity_type = entity_type
        self.errors: dict[str, ErrorKind] = {}

    def fail(self, field_name: str, kind: ErrorKind, raw: object) -> None:
        self.errors[field_name] = kind
        log_validation_error(field_name, raw, kind.value)
        record_validation_failure(self.entity_type, field_name, kind.value)

    def text(self, field_name: str, raw: str) -> str | None:
        value = raw.strip()
        if not value:
            self.fail(field_name, ErrorKind.BLANK_FIELD, raw)
            return None
        return value

    def decimal(self, field_name: str, raw: str) -> Decimal | None:
        value = parse_decimal(raw)
        if value is None:
            self.fail(field_name, ErrorKind.NOT_A_NUMBER, raw)
            return None
        if value < 0:
            self.fail(field_name, ErrorKind.NEGATIVE_VALUE, raw)
            return None
        return value

    def quantity(self, field_name: str, raw: str) -> int | None:
        value = parse_integer(raw)
        if value is None:
            self.fail(field_name, ErrorKind.NOT_AN_INTEGER, raw)
            return None
        if value < 0:
            self.fail(field_name, ErrorKind.NEGATIVE_VALUE, raw)
            return None
        return value

    def stock_range(
        self, stock: int | None, low: int | None, high: int | None
    ) -> None:
        # Only compare when all three parsed; otherwise the individual field
        # errors already describe the problem.
        if stock is None or low is None or high is None:
            return
        if low > high:
            self.fail(FIELD_MIN, ErrorKind.RANGE_INVERTED, low)
            self.fail(FIELD_MAX, ErrorKind.RANGE_INVERTED, high)
        elif stock < low or stock > high:
            self.fail(FIELD_STOCK, ErrorKind.STOCK_OUT_OF_RANGE, stock)

    def resolve_id(
        self, raw: str | None, id_factory: Callable[[], int] | None
    ) -> int | None:
        if raw is not None:
            return self.quantity(FIELD_ID, raw)
        if id_factory is None:
            raise TypeError(
                f"{self.entity_type.title()} draft has no id and no id factory"
            )
        return None

    def report(self) -> None:
        if self.errors:
            logger.warning(
                f"{self.entity_type.title()} submission rejected",
                entity_type=self.entity_type,
                fields=sorted(self.errors),
            )


def parse_integer(raw: str) -> int | None:
    """Parse an optionally signed run of ASCII digits.

    Surrounding whitespace is ignored. Anything else (decimals, exponents,
    digit separators) is rejected, as is any value outside the signed
    32-bit range.

    Returns:
        The parsed integer, or None if ``raw`` is not an integer
    """
    match = _INTEGER_PATTERN.fullmatch(raw.strip())
    if match is None:
        return None
    sign, digits = match.groups()
    value = int(sign + digits)
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        return None
    return value


def parse_decimal(raw: str) -> Decimal | None:
    """Parse a plain ASCII decimal number, optionally with an exponent.

    Digit separators, non-ASCII digits and special values such as ``NaN``
    or ``Infinity`` are rejected.

    Returns:
        The parsed value, or None if ``raw`` is not a number
    """
    text = raw.strip()
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def validate_part(
    draft: PartDraft, id_factory: Callable[[], int] | None = None
) -> ValidationResult[Part]:
    """Validate a part draft.

    Args:
        draft: Raw field values
        id_factory: Supplies the id of a new part; only called when the draft
            is valid and carries no id of its own

    Returns:
        A result holding the validated part or the errors for each field
    """
    checker = _FieldChecker("part")

    part_id = checker.resolve_id(draft.id, id_factory)
    name = checker.text(FIELD_NAME, draft.name)
    price = checker.decimal(FIELD_PRICE, draft.price)
    stock = checker.quantity(FIELD_STOCK, draft.stock)
    low = checker.quantity(FIELD_MIN, draft.min)
    high = checker.quantity(FIELD_MAX, draft.max)
    checker.stock_range(stock, low, high)

    machine_id: int | None = None
    if draft.in_house:
        machine_id = parse_integer(draft.source)
        if machine_id is None:
            checker.fail(FIELD_SOURCE, ErrorKind.INVALID_MACHINE_ID, draft.source)
    # Company names are accepted as typed, blank included

    checker.report()
    if (
        checker.errors
        or name is None
        or price is None
        or stock is None
        or low is None
        or high is None
        or (draft.in_house and machine_id is None)
    ):
        return ValidationResult(errors=checker.errors)

    part_id = _assign_id(part_id, id_factory)
    if machine_id is not None:
        part = Part.in_house(part_id, name, price, stock, low, high, machine_id)
    else:
        part = Part.outsourced(part_id, name, price, stock, low, high, draft.source)
    return ValidationResult(value=part)


def validate_product(
    draft: ProductDraft, id_factory: Callable[[], int] | None = None
) -> ValidationResult[Product]:
    """Validate a product draft.

    Args:
        draft: Raw field values
        id_factory: Supplies the id of a new product; only called when the
            draft is valid and carries no id of its own

    Returns:
        A result holding the validated product (with no associated parts) or
        the errors for each field
    """
    checker = _FieldChecker("product")

    product_id = checker.resolve_id(draft.id, id_factory)
    name = checker.text(FIELD_NAME, draft.name)
    price = checker.decimal(FIELD_PRICE, draft.price)
    stock = checker.quantity(FIELD_STOCK, draft.stock)
    low = checker.quantity(FIELD_MIN, draft.min)
    high = checker.quantity(FIELD_MAX, draft.max)
    checker.stock_range(stock, low, high)

    checker.report()
    if (
        checker.errors
        or name is None
        or price is None
        or stock is None
        or low is None
        or high is None
    ):
        return ValidationResult(errors=checker.errors)

    product_id = _assign_id(product_id, id_factory)
    return ValidationResult(value=Product(product_id, name, price, stock, low, high))


def _assign_id(entity_id: int | None, id_factory: Callable[[], int] | None) -> int:
    if entity_id is not None:
        return entity_id
    if id_factory is None:
        raise TypeError("Draft has no id and no id factory")
    return id_factory()
