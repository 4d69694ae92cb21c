"""Application layer - Catalog use cases.

The service validates drafts, assigns ids, commits to the store and enforces
the business rules that the store leaves to its callers.
"""

from collections.abc import Iterable
from typing import Final

from opentelemetry import trace

from ..domain.entities import Part, Product
from ..domain.exceptions import AssociatedPartsNotEmptyError
from ..infrastructure.memory.store import CatalogStore
from ..logging_config import get_logger
from ..logging_utils import log_catalog_operation
from ..metrics import (
    record_part_created,
    record_part_deleted,
    record_part_updated,
    record_product_created,
    record_product_deleted,
    record_product_deletion_rejected,
    record_product_updated,
)
from .search import SearchView, search
from .validation import (
    PartDraft,
    ProductDraft,
    ValidationResult,
    validate_part,
    validate_product,
)

logger: Final = get_logger(__name__)
tracer: Final = trace.get_tracer(__name__)


def _attach_parts(product: Product, parts: Iterable[Part]) -> None:
    for part in parts:
        if not product.add_associated_part(part):
            logger.debug(
                "Skipping duplicate associated part",
                product_id=product.id,
                part_id=part.id,
            )


def _ensure_no_associated_parts(product: Product) -> None:
    if not product.has_associated_parts:
        return
    part_count = len(product.associated_parts)
    record_product_deletion_rejected()
    logger.warning(
        "Product deletion rejected - associated parts remain",
        product_id=product.id,
        part_count=part_count,
    )
    raise AssociatedPartsNotEmptyError(product.id, part_count)


class CatalogService:
    """Application service for part and product operations."""

    def __init__(self, store: CatalogStore):
        self.store = store

    # Parts

    def create_part(self, draft: PartDraft) -> ValidationResult[Part]:
        """Validate a draft and add the resulting part with a fresh id."""
        with tracer.start_as_current_span("catalog.create_part"):
            logger.debug("Creating part", part_name=draft.name)

            result = validate_part(draft, id_factory=self.store.next_part_id)
            if not result.ok:
                return result

            part = result.unwrap()
            self.store.add_part(part)

            log_catalog_operation(
                operation="create",
                collection="parts",
                part_id=part.id,
                part_name=part.name,
            )
            record_part_created(part.source_label)
            logger.info("Part created successfully", part_id=part.id)
            return result

    def update_part(self, index: int, draft: PartDraft) -> ValidationResult[Part]:
        """Validate a draft and replace the part at ``index`` with it.

        Raises:
            CatalogIndexError: If ``index`` is not a valid position
        """
        with tracer.start_as_current_span("catalog.update_part"):
            logger.debug("Updating part", index=index, part_id=draft.id)

            result = validate_part(draft)
            if not result.ok:
                return result

            part = result.unwrap()
            self.store.update_part(index, part)

            log_catalog_operation(
                operation="update",
                collection="parts",
                index=index,
                part_id=part.id,
            )
            record_part_updated()
            logger.info("Part updated successfully", part_id=part.id)
            return result

    def remove_part(self, part: Part) -> bool:
        """Delete a part.

        Returns:
            True if the part was deleted, False if not found
        """
        with tracer.start_as_current_span("catalog.remove_part"):
            deleted = self.store.delete_part(part)
            log_catalog_operation(
                operation="delete",
                collection="parts",
                success=deleted,
                part_id=part.id,
            )
            if deleted:
                record_part_deleted()
                logger.info("Part deleted successfully", part_id=part.id)
            else:
                logger.warning("Part deletion failed - not found", part_id=part.id)
            return deleted

    def lookup_part(self, part_id: int) -> Part | None:
        return self.store.lookup_part(part_id)

    def lookup_part_by_name(self, name: str) -> list[Part]:
        return self.store.lookup_part_by_name(name)

    def search_parts(self, query: str | None) -> list[Part]:
        return search(self.store.all_parts(), query)

    def part_view(self, query: str = "") -> SearchView[Part]:
        return SearchView(self.store.all_parts, query)

    # Products

    def create_product(
        self, draft: ProductDraft, associated_parts: Iterable[Part] = ()
    ) -> ValidationResult[Product]:
        """Validate a draft and add the resulting product with a fresh id.

        Associated parts are attached in order; repeated part ids are dropped.
        """
        with tracer.start_as_current_span("catalog.create_product"):
            logger.debug("Creating product", product_name=draft.name)

            result = validate_product(draft, id_factory=self.store.next_product_id)
            if not result.ok:
                return result

            product = result.unwrap()
            _attach_parts(product, associated_parts)
            self.store.add_product(product)

            log_catalog_operation(
                operation="create",
                collection="products",
                product_id=product.id,
                product_name=product.name,
                associated_parts=len(product.associated_parts),
            )
            record_product_created(len(product.associated_parts))
            logger.info("Product created successfully", product_id=product.id)
            return result

    def update_product(
        self, index: int, draft: ProductDraft, associated_parts: Iterable[Part] = ()
    ) -> ValidationResult[Product]:
        """Validate a draft and replace the product at ``index`` with it.

        The new product's associated parts are exactly ``associated_parts``.

        Raises:
            CatalogIndexError: If ``index`` is not a valid position
        """
        with tracer.start_as_current_span("catalog.update_product"):
            logger.debug("Updating product", index=index, product_id=draft.id)

            result = validate_product(draft)
            if not result.ok:
                return result

            product = result.unwrap()
            _attach_parts(product, associated_parts)
            self.store.update_product(index, product)

            log_catalog_operation(
                operation="update",
                collection="products",
                index=index,
                product_id=product.id,
                associated_parts=len(product.associated_parts),
            )
            record_product_updated()
            logger.info("Product updated successfully", product_id=product.id)
            return result

    def remove_product(self, product: Product) -> bool:
        """Delete a product that has no associated parts.

        Returns:
            True if the product was deleted, False if not found

        Raises:
            AssociatedPartsNotEmptyError: If the product still has parts
        """
        with tracer.start_as_current_span("catalog.remove_product"):
            # Checked against the stored copy in the same locked step as the delete
            deleted = self.store.delete_product(
                product, guard=_ensure_no_associated_parts
            )
            log_catalog_operation(
                operation="delete",
                collection="products",
                success=deleted,
                product_id=product.id,
            )
            if deleted:
                record_product_deleted()
                logger.info("Product deleted successfully", product_id=product.id)
            else:
                logger.warning(
                    "Product deletion failed - not found", product_id=product.id
                )
            return deleted

    def lookup_product(self, product_id: int) -> Product | None:
        return self.store.lookup_product(product_id)

    def lookup_product_by_name(self, name: str) -> list[Product]:
        return self.store.lookup_product_by_name(name)

    def search_products(self, query: str | None) -> list[Product]:
        return search(self.store.all_products(), query)

    def product_view(self, query: str = "") -> SearchView[Product]:
        return SearchView(self.store.all_products, query)
