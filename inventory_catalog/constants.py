"""Infrastructure and technical constants."""

from typing import Final

DEFAULT_LOG_DIR: Final = "logs"
LOG_FILE_NAME: Final = "inventory.log"
