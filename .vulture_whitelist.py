# Vulture whitelist for legitimate API definitions that appear unused
# This file tells vulture to ignore these symbols which are part of our public API

# Config constants - legitimate configuration values
CATEGORIES
SANCTION_PRESETS
DEFAULT_SERVER_PORT
ENABLE_NATURAL_LANGUAGE
ENABLE_CONTACT_RELAY

# Exception classes and utilities - part of public API
ErrorResult
ErrorResult.to_dict
StoreError

# Store operations exposed to library callers but not to MCP tools
MarketStore.create_product
MarketStore.update_product
MarketStore.delete_product
recalc_all_vendor_stats

# Model properties read by pydantic serialisation and callers
PageWindow.has_next
PageWindow.has_previous
SessionContext.is_authenticated

# MCP tools and prompts registered through decorators
marketplace_search
interpret_marketplace_query
list_marketplace_vendors
add_vendor_review
sanction_vendor
lift_vendor_sanction
register_vendor
update_vendor_profile
submit_inquiry
health_check
material_search_assistant
vendor_comparison_assistant
