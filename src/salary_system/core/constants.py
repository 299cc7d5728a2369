"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_TOKEN_TTL_SECONDS = 24 * 60 * 60
TOKEN_ALGORITHM = "HS256"
DEFAULT_PASSWORD_HASH_METHOD = "scrypt"
DATE_FORMAT = "%Y-%m-%d"
AMOUNT_PLACES = 2

# Largest value a DECIMAL(10, 2) column holds
AMOUNT_MAX = Decimal("99999999.99")
