from decimal import Decimal

import pytest

from inventory_catalog.application.services import CatalogService
from inventory_catalog.application.validation import PartDraft, ProductDraft
from inventory_catalog.domain.entities import Part, Product
from inventory_catalog.infrastructure.memory.store import CatalogStore


@pytest.fixture(name="store")
def store_fixture() -> CatalogStore:
    """A fresh, empty store for each test."""
    return CatalogStore()


@pytest.fixture(name="service")
def service_fixture(store: CatalogStore) -> CatalogService:
    return CatalogService(store)


@pytest.fixture(name="bolt")
def bolt_fixture() -> Part:
    return Part.in_house(1, "Bolt", Decimal("0.5"), 10, 0, 100, machine_id=7)


@pytest.fixture(name="bracket")
def bracket_fixture() -> Part:
    return Part.outsourced(2, "Bracket", Decimal("1.25"), 5, 0, 50, "Acme Corp")


@pytest.fixture(name="stocked_store")
def stocked_store_fixture(store: CatalogStore, bolt: Part, bracket: Part):
    """Store holding the Bolt and Bracket parts, in that order."""
    store.add_part(bolt)
    store.add_part(bracket)
    return store


@pytest.fixture(name="widget")
def widget_fixture() -> Product:
    return Product(1, "Widget", Decimal("9.99"), 7, 5, 10)


@pytest.fixture(name="make_part_draft")
def make_part_draft_fixture():
    """Factory for valid in-house part drafts with selected fields overridden."""

    def make_part_draft(**overrides) -> PartDraft:
        fields = {
            "name": "Bolt",
            "price": "0.50",
            "stock": "10",
            "min": "0",
            "max": "100",
            "source": "7",
            "in_house": True,
        }
        fields.update(overrides)
        return PartDraft(**fields)

    return make_part_draft


@pytest.fixture(name="make_product_draft")
def make_product_draft_fixture():
    """Factory for valid product drafts with selected fields overridden."""

    def make_product_draft(**overrides) -> ProductDraft:
        fields = {
            "name": "Widget",
            "price": "9.99",
            "stock": "7",
            "min": "5",
            "max": "10",
        }
        fields.update(overrides)
        return ProductDraft(**fields)

    return make_product_draft
