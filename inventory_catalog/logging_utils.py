import logging
import platform
from datetime import UTC, datetime
from typing import Any


def log_catalog_operation(
    operation: str,
    collection: str,
    success: bool = True,
    logger_name: str = "catalog",
    **kwargs: Any,
) -> None:
    """Log a structural change to the catalog.

    Args:
        operation: Catalog operation (create, update, delete)
        collection: Collection being changed ("parts" or "products")
        success: Whether the operation changed the catalog
        logger_name: Name of the logger to use
        **kwargs: Additional context data
    """
    logger = logging.getLogger(logger_name)

    log_data = {
        "operation": operation,
        "collection": collection,
        "success": success,
        **kwargs,
    }

    level = logging.INFO if success else logging.WARNING
    status = "succeeded" if success else "failed"

    logger.log(level, f"Catalog {operation} on {collection} {status}", extra=log_data)


def log_validation_error(
    field: str, value: Any, error_kind: str, logger_name: str = "validation"
) -> None:
    """Log validation errors with context.

    Args:
        field: Field name that failed validation
        value: The rejected raw value (truncated)
        error_kind: Kind of validation error
        logger_name: Name of the logger to use
    """
    logger = logging.getLogger(logger_name)

    safe_value = str(value)[:100]

    logger.warning(
        f"Validation failed for field '{field}': {error_kind}",
        extra={"field": field, "value": safe_value, "error": error_kind},
    )


def log_system_info(app_name: str, version: str, debug_mode: bool) -> None:
    """Log system startup information.

    Args:
        app_name: Application name
        version: Application version
        debug_mode: Whether debug mode is enabled
    """
    logger = logging.getLogger("system")

    logger.info(
        "Application startup",
        extra={
            "app_name": app_name,
            "version": version,
            "hostname": platform.node(),
            "python_version": platform.python_version(),
            "debug_mode": debug_mode,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )
