"""Tests for site-level inspection."""

from drupal_discovery.extractor.site_inspector import SiteInspector, VERSION_MODULE_PATTERN
from drupal_discovery.models import NODE_KIND, TAXONOMY_KIND
from tests.fakes import FakeConnector, serialized

SITE_SCHEMA = {
    "system": ["filename", "name", "type", "info"],
    "node": ["nid", "type"],
    "url_alias": ["pid", "source", "alias", "language"],
    "taxonomy_vocabulary": ["vid", "machine_name"],
    "taxonomy_term_data": ["tid", "vid", "name"],
    "file_managed": ["fid", "filemime"],
    "languages": ["language", "name", "domain", "weight"],
}


class TestVersion:
    """Test Drupal version detection."""

    def setup_method(self):
        """Set up test fixtures."""
        self.connector = FakeConnector(SITE_SCHEMA)
        self.inspector = SiteInspector(self.connector)

    def test_version_from_field_module(self):
        """Test the version is read from the field module's info blob."""
        self.connector.db_connection.fetch_one.return_value = {
            "info": serialized({"name": "Field", "version": "7.67"})
        }

        assert self.inspector.get_version() == "7.67"
        query, params = self.connector.db_connection.fetch_one.call_args[0]
        assert params == (VERSION_MODULE_PATTERN,)
        assert "`system`" in query

    def test_missing_row(self):
        """Test an empty string when the module row is missing."""
        self.connector.db_connection.fetch_one.return_value = None
        assert self.inspector.get_version() == ""

    def test_unreadable_blob(self):
        """Test an empty string when the info blob is not serialized."""
        self.connector.db_connection.fetch_one.return_value = {"info": b"garbage"}
        assert self.inspector.get_version() == ""

    def test_missing_system_table(self):
        """Test an empty string without querying when there is no system table."""
        inspector = SiteInspector(FakeConnector({"node": ["nid"]}))
        assert inspector.get_version() == ""


class TestContentTypes:
    """Test node type and taxonomy listings."""

    def setup_method(self):
        """Set up test fixtures."""
        self.connector = FakeConnector(SITE_SCHEMA)
        self.inspector = SiteInspector(self.connector)

    def test_node_types_with_aliases(self):
        """Test node types carry counts and the alias of their first node."""
        self.connector.db_connection.fetch_all.side_effect = [
            [
                {"type": "article", "count": 5, "first_nid": 1},
                {"type": "page", "count": 2, "first_nid": 3},
            ],
        ]
        self.connector.db_connection.fetch_one.side_effect = [
            {"alias": "news/first-article"},
            None,
        ]

        node_types = self.inspector.get_node_types()

        assert list(node_types) == ["article", "page"]
        assert node_types["article"].count == 5
        assert node_types["article"].url_alias == "news/first-article"
        assert node_types["page"].url_alias == ""
        assert node_types["article"].to_dict() == {
            "type": "article", "count": 5, "url_alias": "news/first-article"
        }

    def test_node_types_are_read_once(self):
        """Test node types are memoized for the invocation."""
        self.connector.db_connection.fetch_all.side_effect = [
            [{"type": "page", "count": 1, "first_nid": None}],
        ]
        assert self.inspector._node_types is None

        self.inspector.get_node_types()
        self.inspector.get_node_types()

        assert self.connector.db_connection.fetch_all.call_count == 1
        assert list(self.inspector._node_types) == ["page"]

    def test_taxonomies(self):
        """Test vocabularies with term counts."""
        self.connector.db_connection.fetch_all.return_value = [
            {"type": "tags", "count": 12},
            {"type": "empty", "count": None},
        ]

        taxonomies = self.inspector.get_taxonomies()

        assert taxonomies["tags"].count == 12
        assert taxonomies["empty"].count == 0
        assert taxonomies["tags"].to_dict() == {"type": "tags", "count": 12}

    def test_classify(self):
        """Test names are classified as node type, taxonomy or neither."""
        self.connector.db_connection.fetch_all.side_effect = [
            [{"type": "article", "count": 1, "first_nid": None}],
            [{"type": "tags", "count": 3}],
        ]

        assert self.inspector.classify("article") == NODE_KIND
        assert self.inspector.classify("tags") == TAXONOMY_KIND
        assert self.inspector.classify("unknown") == ""


class TestMediaAndLanguages:
    """Test media type and language listings."""

    def test_media_types(self):
        connector = FakeConnector(SITE_SCHEMA)
        connector.db_connection.fetch_all.return_value = [
            {"type": "image/jpeg", "count": 40},
            {"type": "application/pdf", "count": 2},
        ]

        assert SiteInspector(connector).get_media_types() == [
            {"type": "image/jpeg", "count": 40},
            {"type": "application/pdf", "count": 2},
        ]

    def test_languages(self):
        connector = FakeConnector(SITE_SCHEMA)
        connector.db_connection.fetch_all.return_value = [
            {"language": "en", "name": "English", "domain": None},
        ]

        assert SiteInspector(connector).get_languages() == [
            {"language": "en", "name": "English", "domain": ""},
        ]

    def test_missing_tables(self):
        """Test modules that are not installed yield empty listings."""
        inspector = SiteInspector(FakeConnector({"node": ["nid"]}))

        assert inspector.get_media_types() == []
        assert inspector.get_languages() == []
        assert inspector.get_taxonomies() == {}
