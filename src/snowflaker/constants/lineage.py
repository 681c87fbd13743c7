"""Lineage-related constants."""

from typing import Tuple

# Attribute key under which lineage travels with a result frame
LINEAGE_ATTRIBUTE = "snowflake-sources"

# Returned instead of an empty collection so callers always have a value to show
NO_SOURCES_SENTINEL = "no_snowflake_sources_found"

SOURCE_KEYWORDS: Tuple[str, ...] = ("FROM", "JOIN", "CALL")
