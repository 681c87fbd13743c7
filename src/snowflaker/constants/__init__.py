"""Constants module for snowflaker.

This module contains the constant values and enumerations shared by the
lineage, connection and SQL API layers. It has no dependencies on other
snowflaker modules.
"""

from snowflaker.constants.lineage import (
    LINEAGE_ATTRIBUTE,
    NO_SOURCES_SENTINEL,
    SOURCE_KEYWORDS,
)
from snowflaker.constants.sql import QueryStatus

__all__ = [
    "LINEAGE_ATTRIBUTE",
    "NO_SOURCES_SENTINEL",
    "SOURCE_KEYWORDS",
    "QueryStatus",
]
