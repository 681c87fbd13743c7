"""Best-effort source lineage for SQL statements.

The extractor is a keyword scanner, not a parser. It reports the first
whitespace-delimited token after every ``FROM``, ``JOIN`` and ``CALL`` in a
statement, uppercased, de-duplicated and sorted. When nothing is found the
sentinel ``"no_snowflake_sources_found"`` is returned instead of an empty list,
so a result can always be displayed.

Known quirks, kept for compatibility with results already tagged upstream:
    - Keywords match as plain substrings, so ``RECALL``, ``CALLER_ID`` or
      ``CUSTOM_FROM_TABLE`` each introduce a split point.
    - Only the token right after the keyword is captured. ``db.sch.tbl`` comes
      through whole, ``CALL my_proc(1, 2)`` yields ``MY_PROC(1,``.
    - ``CALL`` targets are reported alongside read sources in a single list.

Example:
    >>> extract_sources("select * from DB.SCH.TBL a join DB.SCH.OTHER b on a.id=b.id")
    ['DB.SCH.OTHER', 'DB.SCH.TBL']
    >>> extract_sources("select 1")
    'no_snowflake_sources_found'
"""

from typing import Any, Iterable, List, Optional, Sequence, Union

from snowflaker.constants.lineage import NO_SOURCES_SENTINEL, SOURCE_KEYWORDS

LineageResult = Union[List[str], str]


def first_tokens_after(sql: str, keyword: str) -> Optional[List[str]]:
    """Return the first token following each occurrence of ``keyword``.
    
    Matching is case-insensitive and substring based. A fragment with no
    tokens (two keywords back to back) contributes an empty string; a keyword
    at the very end of the statement contributes nothing.
    
    Args:
        sql: Statement text
        keyword: Trigger word such as ``FROM``
        
    Returns:
        One token per keyword occurrence, or ``None`` when the keyword does not
        occur at all
    """
    upper_sql = sql.upper()
    upper_keyword = keyword.upper()
    if not upper_keyword or upper_keyword not in upper_sql:
        return None

    fragments = upper_sql.split(upper_keyword)
    # A statement ending in the keyword leaves no trailing fragment to read
    if fragments and fragments[-1] == "":
        fragments.pop()
    if len(fragments) < 2:
        return None

    tokens: List[str] = []
    for fragment in fragments[1:]:
        words = fragment.split()
        tokens.append(words[0] if words else "")
    return tokens


class SourceLineageExtractor:
    """Scan statements for object names following trigger keywords.
    
    Instances hold no per-call state and can be shared between threads.
    
    Attributes:
        keywords: Trigger words scanned independently, in order
    """
    
    def __init__(self, keywords: Sequence[str] = SOURCE_KEYWORDS):
        self.keywords = tuple(keywords)
    
    def extract(self, sql: Any) -> LineageResult:
        """Extract the sorted, de-duplicated sources referenced by ``sql``.
        
        Never raises for string input. ``None`` is treated as an empty
        statement; any other object is converted with ``str()``.
        
        Args:
            sql: Statement text
            
        Returns:
            Sorted list of uppercased source tokens, or the
            ``no_snowflake_sources_found`` sentinel
        """
        if sql is None:
            return NO_SOURCES_SENTINEL
        text = sql if isinstance(sql, str) else str(sql)

        found = set()
        for keyword in self.keywords:
            tokens = first_tokens_after(text, keyword)
            if tokens:
                found.update(token for token in tokens if token is not None)

        if not found:
            return NO_SOURCES_SENTINEL
        return sorted(found)


_default_extractor = SourceLineageExtractor()


def extract_sources(sql: Any) -> LineageResult:
    """Identify sources mentioned in a SQL statement.
    
    See :class:`SourceLineageExtractor` for the scanning rules.
    """
    return _default_extractor.extract(sql)


def format_sources(sources: Union[LineageResult, Iterable[str]]) -> str:
    """Join a lineage result into the string stored on result frames."""
    if isinstance(sources, str):
        return sources
    return ", ".join(sources)
