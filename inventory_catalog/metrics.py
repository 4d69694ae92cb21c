"""Business metrics for the inventory catalog."""

from opentelemetry import metrics

from .logging_config import get_logger

logger = get_logger(__name__)

# Get meter for creating instruments
meter = metrics.get_meter(__name__)

# Catalog Metrics
parts_created_total = meter.create_counter(
    name="parts_created_total",
    description="Total number of parts added to the catalog",
)

parts_updated_total = meter.create_counter(
    name="parts_updated_total",
    description="Total number of parts replaced in the catalog",
)

parts_deleted_total = meter.create_counter(
    name="parts_deleted_total",
    description="Total number of parts removed from the catalog",
)

products_created_total = meter.create_counter(
    name="products_created_total",
    description="Total number of products added to the catalog",
)

products_updated_total = meter.create_counter(
    name="products_updated_total",
    description="Total number of products replaced in the catalog",
)

products_deleted_total = meter.create_counter(
    name="products_deleted_total",
    description="Total number of products removed from the catalog",
)

product_deletions_rejected_total = meter.create_counter(
    name="product_deletions_rejected_total",
    description="Product deletions blocked because parts were still associated",
)

# Validation Metrics
validation_failures_total = meter.create_counter(
    name="validation_failures_total",
    description="Total number of rejected fields across all submissions",
)

logger.info("Catalog metrics instruments created")


def record_part_created(source_label: str) -> None:
    """Record a part being added."""
    parts_created_total.add(1, {"source": source_label})


def record_part_updated() -> None:
    """Record a part being replaced."""
    parts_updated_total.add(1)


def record_part_deleted() -> None:
    """Record a part being removed."""
    parts_deleted_total.add(1)


def record_product_created(associated_parts: int) -> None:
    """Record a product being added."""
    products_created_total.add(1, {"has_parts": associated_parts > 0})


def record_product_updated() -> None:
    """Record a product being replaced."""
    products_updated_total.add(1)


def record_product_deleted() -> None:
    """Record a product being removed."""
    products_deleted_total.add(1)


def record_product_deletion_rejected() -> None:
    """Record a blocked product deletion."""
    product_deletions_rejected_total.add(1)


def record_validation_failure(entity_type: str, field: str, error_kind: str) -> None:
    """Record a single rejected field."""
    validation_failures_total.add(
        1, {"entity_type": entity_type, "field": field, "error": error_kind}
    )
