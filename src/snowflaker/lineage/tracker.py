"""Attach lineage metadata to query results."""

from typing import Any

import pandas as pd

from snowflaker.constants.lineage import LINEAGE_ATTRIBUTE
from snowflaker.lineage.extractor import extract_sources, format_sources
from snowflaker.logging import get_logger

logger = get_logger(__name__)


class LineageTracker:
    """Tag result frames with the sources their statement reads from.
    
    The lineage string is stored in ``DataFrame.attrs`` under
    ``"snowflake-sources"`` and travels with the frame as a read-only
    annotation.
    """
    
    def add_lineage(self, result: Any, sql: str) -> pd.DataFrame:
        """Attach lineage for ``sql`` to ``result``.
        
        Args:
            result: Query result; anything ``pd.DataFrame`` accepts is coerced
            sql: Statement that produced the result
            
        Returns:
            The result as a DataFrame with the lineage attribute set
        """
        if not isinstance(result, pd.DataFrame):
            result = pd.DataFrame(result)
        
        try:
            lineage = format_sources(extract_sources(sql))
        except Exception as exc:  # pragma: no cover
            logger.warning(
                "Lineage extraction failed",
                extra={"error": str(exc)},
                exc_info=True,
            )
            lineage = ""
        
        result.attrs[LINEAGE_ATTRIBUTE] = lineage
        return result


def get_lineage(result: pd.DataFrame) -> str:
    """Return the lineage string attached to ``result`` (empty when absent)."""
    return result.attrs.get(LINEAGE_ATTRIBUTE, "")
