"""Domain business rules and constants."""

from typing import Final

# Labels describing where a part comes from
MACHINE_ID_LABEL: Final = "Machine ID"
COMPANY_NAME_LABEL: Final = "Company Name"

# Ids handed out by the catalog start here unless configured otherwise
DEFAULT_FIRST_ID: Final = 1

# Field names used as keys in validation error maps
FIELD_ID: Final = "id"
FIELD_NAME: Final = "name"
FIELD_PRICE: Final = "price"
FIELD_STOCK: Final = "stock"
FIELD_MIN: Final = "min"
FIELD_MAX: Final = "max"
FIELD_SOURCE: Final = "source"

# Whole-number fields hold signed 32-bit values
INTEGER_MIN: Final = -(2**31)
INTEGER_MAX: Final = 2**31 - 1
