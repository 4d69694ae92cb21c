"""Pure domain entities without infrastructure dependencies.

Entities are plain data holders. They never validate themselves; candidate
values are checked by the application validation layer before they reach the
catalog.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from .constants import COMPANY_NAME_LABEL, MACHINE_ID_LABEL


@dataclass(frozen=True)
class InHouse:
    """Source of a part produced on one of our own machines."""

    machine_id: int


@dataclass(frozen=True)
class Outsourced:
    """Source of a part bought from a supplier."""

    company_name: str


PartSource = InHouse | Outsourced


def describe_source(source: PartSource) -> tuple[str, str]:
    """Return the ``(value, label)`` pair used to display a part's source.

    Args:
        source: The part source variant

    Returns:
        Source value rendered as text and the label describing it
    """
    match source:
        case InHouse(machine_id=machine_id):
            return str(machine_id), MACHINE_ID_LABEL
        case Outsourced(company_name=company_name):
            return company_name, COMPANY_NAME_LABEL
        case _:
            raise TypeError(f"Unknown part source: {source!r}")


@dataclass(frozen=True)
class Part:
    """Core business entity representing a raw component.

    Parts are immutable values. Changing a part means building a new one and
    replacing the old one in the catalog, so any copy held elsewhere (e.g. by
    a product) keeps the state it had when it was taken.
    """

    id: int
    name: str
    price: Decimal
    stock: int
    min: int
    max: int
    source: PartSource

    @classmethod
    def in_house(
        cls,
        id: int,
        name: str,
        price: Decimal,
        stock: int,
        min: int,
        max: int,
        machine_id: int,
    ) -> "Part":
        """Build a part produced in-house."""
        return cls(id, name, price, stock, min, max, InHouse(machine_id))

    @classmethod
    def outsourced(
        cls,
        id: int,
        name: str,
        price: Decimal,
        stock: int,
        min: int,
        max: int,
        company_name: str,
    ) -> "Part":
        """Build a part bought from a supplier."""
        return cls(id, name, price, stock, min, max, Outsourced(company_name))

    @property
    def is_in_house(self) -> bool:
        return isinstance(self.source, InHouse)

    @property
    def machine_id(self) -> int | None:
        return self.source.machine_id if isinstance(self.source, InHouse) else None

    @property
    def company_name(self) -> str | None:
        if isinstance(self.source, Outsourced):
            return self.source.company_name
        return None

    @property
    def source_value(self) -> str:
        return describe_source(self.source)[0]

    @property
    def source_label(self) -> str:
        return describe_source(self.source)[1]


@dataclass
class Product:
    """Core business entity representing an assembly of parts."""

    id: int
    name: str
    price: Decimal
    stock: int
    min: int
    max: int
    associated_parts: list[Part] = field(default_factory=list)

    def add_associated_part(self, part: Part) -> bool:
        """Associate a part with this product.

        A part whose id is already associated is ignored.

        Returns:
            True if the part was added, False if it was already associated
        """
        if any(existing.id == part.id for existing in self.associated_parts):
            return False
        self.associated_parts.append(part)
        return True

    def delete_associated_part(self, part: Part) -> bool:
        """Remove the first associated part with the same id as ``part``.

        Returns:
            True if a part was removed, False if none matched
        """
        for index, existing in enumerate(self.associated_parts):
            if existing.id == part.id:
                del self.associated_parts[index]
                return True
        return False

    def all_associated_parts(self) -> list[Part]:
        """Return a copy of this product's associated parts."""
        return list(self.associated_parts)

    @property
    def has_associated_parts(self) -> bool:
        return bool(self.associated_parts)
