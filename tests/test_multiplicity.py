"""Tests for multi-valued field detection."""

import pytest

from drupal_discovery.errors import UnknownIdentifierError
from drupal_discovery.extractor.multiplicity import MultiplicityCache, MultiplicityDetector
from tests.fakes import FakeConnector


class TestMultiplicityDetector:
    """Test MultiplicityDetector class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.connector = FakeConnector({"field_data_field_tags": ["entity_id", "language"]})
        self.cache = MultiplicityCache()
        self.detector = MultiplicityDetector(self.connector, self.cache)

    def test_multiple_values(self):
        """Test a top count above one marks the field multi-valued."""
        self.connector.db_connection.fetch_one.return_value = {
            "entity_id": 7, "language": "und", "value_count": 3
        }

        assert self.detector.is_multiple("article", "field_tags", "field_data_field_tags") is True
        query, params = self.connector.db_connection.fetch_one.call_args[0]
        assert "FROM field_data_field_tags" in query
        assert "AND entity_type = %s" in query
        assert "GROUP BY entity_id, language" in query
        assert "ORDER BY value_count DESC" in query
        assert params == ("article", "node")

    def test_single_value(self):
        """Test a top count of exactly one is single-valued."""
        self.connector.db_connection.fetch_one.return_value = {
            "entity_id": 1, "language": "und", "value_count": 1
        }
        assert self.detector.is_multiple("article", "field_tags", "field_data_field_tags") is False

    def test_no_rows(self):
        """Test an unused field is not multi-valued."""
        self.connector.db_connection.fetch_one.return_value = None
        assert self.detector.is_multiple("article", "field_tags", "field_data_field_tags") is False

    def test_results_are_cached_per_content_type(self):
        """Test the data is sampled once per content type and field."""
        self.connector.db_connection.fetch_one.return_value = {"value_count": 2}

        self.detector.is_multiple("article", "field_tags", "field_data_field_tags")
        self.detector.is_multiple("article", "field_tags", "field_data_field_tags")
        self.detector.is_multiple("page", "field_tags", "field_data_field_tags")

        assert self.connector.db_connection.fetch_one.call_count == 2
        assert self.cache.for_content_type("article") == {"field_tags": True}
        assert len(self.cache) == 2

    def test_shared_bundle_name(self):
        """Test a node type and a vocabulary with the same name are sampled separately."""
        self.connector.db_connection.fetch_one.side_effect = [
            {"entity_id": 5, "language": "und", "value_count": 1},
            {"entity_id": 5, "language": "und", "value_count": 2},
        ]

        assert self.detector.is_multiple("news", "field_tags", "field_data_field_tags") is False
        assert self.detector.is_multiple(
            "news", "field_tags", "field_data_field_tags", "taxonomy_term"
        ) is True

        calls = self.connector.db_connection.fetch_one.call_args_list
        assert [call[0][1] for call in calls] == [("news", "node"), ("news", "taxonomy_term")]
        assert self.cache.for_content_type("news") == {"field_tags": False}
        assert self.cache.for_content_type("news", "taxonomy_term") == {"field_tags": True}

    def test_no_table(self):
        """Test a field without storage is never queried."""
        assert self.detector.is_multiple("article", "title", "") is False
        self.connector.db_connection.fetch_one.assert_not_called()

    def test_unknown_table(self):
        """Test a table absent from the schema is refused before any SQL is built."""
        with pytest.raises(UnknownIdentifierError):
            self.detector.is_multiple("article", "field_x", "field_data_field_x")


class TestMultiplicityCache:
    """Test MultiplicityCache class."""

    def test_clear(self):
        cache = MultiplicityCache()
        cache.set("article", "field_tags", True)

        assert cache.get("article", "field_tags") is True
        assert cache.get("article", "body") is None

        cache.clear()
        assert len(cache) == 0
