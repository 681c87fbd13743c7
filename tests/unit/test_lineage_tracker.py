"""Tests for attaching lineage to result frames."""

import pandas as pd

from snowflaker.constants.lineage import LINEAGE_ATTRIBUTE, NO_SOURCES_SENTINEL
from snowflaker.lineage import LineageTracker, get_lineage


class TestLineageTracker:
    """Test LineageTracker.add_lineage."""
    
    def test_attaches_joined_sources(self):
        frame = pd.DataFrame({"x": [1, 2]})
        
        result = LineageTracker().add_lineage(
            frame, "select * from db.sch.a join db.sch.b on a.id = b.id"
        )
        
        assert result is frame
        assert result.attrs[LINEAGE_ATTRIBUTE] == "DB.SCH.A, DB.SCH.B"
        assert get_lineage(result) == "DB.SCH.A, DB.SCH.B"
    
    def test_attaches_sentinel(self):
        result = LineageTracker().add_lineage(pd.DataFrame(), "select 1")
        
        assert get_lineage(result) == NO_SOURCES_SENTINEL
    
    def test_coerces_non_frames(self):
        result = LineageTracker().add_lineage({"x": [1]}, "select x from t")
        
        assert isinstance(result, pd.DataFrame)
        assert list(result["x"]) == [1]
        assert get_lineage(result) == "T"
    
    def test_rows_are_untouched(self):
        frame = pd.DataFrame({"x": [3, 1, 2]})
        
        result = LineageTracker().add_lineage(frame, "select x from t")
        
        assert list(result["x"]) == [3, 1, 2]


def test_get_lineage_without_attribute():
    assert get_lineage(pd.DataFrame()) == ""
