"""Centralized configuration for the marketplace MCP server."""

# Search result paging
PAGE_SIZE = 9
PAGE_WINDOW = 5
VENDOR_PAGE_SIZE = 9

# Query limits
MAX_QUERY_LENGTH = 400

# Category labels offered by the search bar
CATEGORIES: tuple[str, ...] = ("기계", "전기", "건축", "공구", "계장", "기타")

# Review constraints
MIN_REVIEW_RATING = 1
MAX_REVIEW_RATING = 5

# Sanction presets offered to administrators (days, None = indefinite)
SANCTION_PRESETS: tuple[int | None, ...] = (7, 30, None)

# Store
DB_KEY = "estimate_check_db_v1"
DB_PATH_ENV = "MARKETPLACE_DB_PATH"

# Contact form relay
CONTACT_RELAY_URL = "https://formspree.io/f/xlgwaeod"
CONTACT_TIMEOUT = 10.0
MAX_INQUIRY_LENGTH = 4000

# Server configuration
DEFAULT_SERVER_PORT = 3000

# Feature flags
ENABLE_NATURAL_LANGUAGE = True
ENABLE_CONTACT_RELAY = True
