"""SQL source lineage extraction and result tagging."""

from snowflaker.lineage.extractor import (
    LineageResult,
    SourceLineageExtractor,
    extract_sources,
    first_tokens_after,
    format_sources,
)
from snowflaker.lineage.tracker import LineageTracker, get_lineage

__all__ = [
    "LineageResult",
    "SourceLineageExtractor",
    "extract_sources",
    "first_tokens_after",
    "format_sources",
    "LineageTracker",
    "get_lineage",
]
