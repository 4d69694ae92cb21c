from .application.services import CatalogService
from .config import settings
from .infrastructure.memory.store import CatalogStore
from .logging_config import get_logger, setup_logging
from .logging_utils import log_system_info
from .telemetry import setup_telemetry


def create_catalog(configure_logging: bool = True) -> CatalogService:
    """Build the catalog for one session.

    Call once at process start and hand the returned service to every
    consumer. Each call creates a fresh, empty store.

    Args:
        configure_logging: Set up logging and telemetry before building

    Returns:
        The catalog service bound to a new in-memory store
    """
    if configure_logging:
        setup_logging()
        setup_telemetry()

    logger = get_logger(__name__)

    store = CatalogStore(first_id=settings.first_id)
    service = CatalogService(store)

    log_system_info(settings.app_name, settings.version, settings.debug)
    logger.info("Catalog ready", first_id=settings.first_id)
    return service
