"""Tests for keyword-based source lineage extraction."""

import pytest

from snowflaker.constants.lineage import NO_SOURCES_SENTINEL
from snowflaker.lineage import (
    SourceLineageExtractor,
    extract_sources,
    format_sources,
)
from snowflaker.lineage.extractor import first_tokens_after


class TestExtractSources:
    """Test extract_sources on typical statements."""
    
    def test_from_and_join_sources(self):
        """Test both the FROM and the JOIN target are reported."""
        result = extract_sources(
            "select * from DB.SCH.TBL a join DB.SCH.OTHER b on a.id=b.id"
        )
        
        assert result == ["DB.SCH.OTHER", "DB.SCH.TBL"]
    
    def test_statement_without_sources_returns_sentinel(self):
        assert extract_sources("select 1") == NO_SOURCES_SENTINEL
    
    def test_empty_statement_returns_sentinel(self):
        assert extract_sources("") == NO_SOURCES_SENTINEL
    
    def test_none_returns_sentinel(self):
        assert extract_sources(None) == NO_SOURCES_SENTINEL
    
    def test_call_target(self):
        """Test the procedure call token is captured whole."""
        assert extract_sources("CALL my_proc(1,2)") == ["MY_PROC(1,2)"]
    
    def test_call_target_split_at_whitespace(self):
        """Test only the first whitespace-delimited token is captured."""
        assert extract_sources("CALL my_proc(1, 2)") == ["MY_PROC(1,"]
    
    def test_lowercase_and_multiline(self):
        sql = "select id\n  from\n\tsales.orders o\n  left JOIN\n  sales.customers c on o.cid = c.id"
        
        assert extract_sources(sql) == ["SALES.CUSTOMERS", "SALES.ORDERS"]
    
    def test_duplicates_are_collapsed(self):
        sql = "select * from t union all select * from T"
        
        assert extract_sources(sql) == ["T"]
    
    def test_result_is_sorted_and_unique(self):
        sql = (
            "select * from zeta z join alpha a on a.id = z.id "
            "join mid m on m.id = a.id join alpha a2 on a2.id = m.id"
        )
        result = extract_sources(sql)
        
        assert result == sorted(set(result))
        assert result == ["ALPHA", "MID", "ZETA"]
    
    def test_non_string_input_is_converted(self):
        class Statement:
            def __str__(self):
                return "select * from orders"
        
        assert extract_sources(Statement()) == ["ORDERS"]
    
    def test_input_is_not_modified(self):
        sql = "select * from orders"
        extract_sources(sql)
        
        assert sql == "select * from orders"


class TestExtractorQuirks:
    """Test the substring-matching behaviour callers rely on."""
    
    def test_keyword_inside_identifier_splits(self):
        """Test FROM inside an identifier introduces a split point."""
        assert extract_sources("select * from custom_from_table") == ["CUSTOM_", "_TABLE"]
    
    def test_keyword_inside_literal_splits(self):
        """Test CALL inside a string literal is picked up."""
        assert extract_sources("select 'recall' from orders") == ["'", "ORDERS"]
    
    def test_trailing_keyword_yields_nothing(self):
        assert extract_sources("select * from") == NO_SOURCES_SENTINEL
    
    def test_repeated_keyword_yields_empty_token(self):
        assert extract_sources("select * from from t") == ["", "T"]
    
    def test_keyword_only(self):
        assert extract_sources("FROM") == NO_SOURCES_SENTINEL


class TestFirstTokensAfter:
    """Test the per-keyword scan."""
    
    def test_absent_keyword_returns_none(self):
        assert first_tokens_after("select 1", "FROM") is None
    
    def test_one_token_per_occurrence(self):
        sql = "select * from a where x in (select y from b)"
        
        assert first_tokens_after(sql, "from") == ["A", "B)"]
    
    def test_empty_keyword_returns_none(self):
        assert first_tokens_after("select * from a", "") is None


class TestSourceLineageExtractor:
    """Test extractor configuration."""
    
    def test_default_keywords(self):
        assert SourceLineageExtractor().keywords == ("FROM", "JOIN", "CALL")
    
    def test_custom_keywords(self):
        extractor = SourceLineageExtractor(keywords=["INTO"])
        
        assert extractor.extract("insert into db.sch.target select * from src") == ["DB.SCH.TARGET"]
    
    @pytest.mark.parametrize("sql", ["", "   ", "\n\t", "select 1", "show tables"])
    def test_never_raises_on_strings(self, sql):
        assert SourceLineageExtractor().extract(sql) == NO_SOURCES_SENTINEL


class TestFormatSources:
    """Test joining lineage results."""
    
    def test_list_is_comma_joined(self):
        assert format_sources(["DB.SCH.OTHER", "DB.SCH.TBL"]) == "DB.SCH.OTHER, DB.SCH.TBL"
    
    def test_sentinel_passes_through(self):
        assert format_sources(NO_SOURCES_SENTINEL) == NO_SOURCES_SENTINEL


STATEMENTS = [
    "select * from DB.SCH.TBL a join DB.SCH.OTHER b on a.id=b.id",
    "select 1",
    "",
    "CALL my_proc(1,2)",
    "select * from custom_from_table",
    "select 'recall' from orders",
    "select * from",
    "select * from from t",
    "select id\n  from\n\tsales.orders o\n  left JOIN\n  sales.customers c on o.cid = c.id",
]


class TestExtractorProperties:
    """Test properties that hold for every statement."""
    
    @pytest.mark.parametrize("sql", STATEMENTS)
    def test_repeated_calls_agree(self, sql):
        assert extract_sources(sql) == extract_sources(sql)
    
    @pytest.mark.parametrize("sql", STATEMENTS)
    def test_case_insensitive(self, sql):
        assert extract_sources(sql.lower()) == extract_sources(sql.upper())
        assert extract_sources(sql.lower()) == extract_sources(sql)
    
    def test_case_insensitive_simple(self):
        assert extract_sources("select * from t") == extract_sources("SELECT * FROM T")
    
    @pytest.mark.parametrize("sql", STATEMENTS)
    def test_result_shape(self, sql):
        result = extract_sources(sql)
        
        if isinstance(result, str):
            assert result == NO_SOURCES_SENTINEL
        else:
            assert result
            assert result == sorted(set(result))
            assert all(token == token.upper() for token in result)
