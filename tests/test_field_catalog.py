"""Tests for the field catalog."""

from drupal_discovery.extractor.field_catalog import FieldCatalog
from tests.fakes import FakeConnector, serialized

CATALOG_SCHEMA = {
    "field_config": ["id", "field_name", "type", "module", "data", "cardinality"],
    "field_config_instance": ["id", "field_id", "field_name", "entity_type", "bundle", "data", "deleted"],
}


def _row(field_name, instance_data, field_type="text_long", field_data=None, cardinality=1):
    return {
        "field_name": field_name,
        "entity_type": "node",
        "bundle": "article",
        "instance_data": instance_data,
        "field_type": field_type,
        "module": "text",
        "cardinality": cardinality,
        "field_data": field_data,
    }


class TestFieldCatalog:
    """Test FieldCatalog class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.connector = FakeConnector(CATALOG_SCHEMA)
        self.catalog = FieldCatalog(self.connector)

    def test_fields_for(self):
        """Test instance and storage settings are unserialized."""
        self.connector.db_connection.fetch_all.return_value = [
            _row(
                "body",
                serialized({"label": "Body", "required": 0}),
                field_data=serialized({"settings": {}}),
            ),
            _row(
                "field_tags",
                serialized({"label": "Tags", "required": 1}),
                field_type="taxonomy_term_reference",
                field_data=serialized({"settings": {"allowed_values": [{"vocabulary": "tags"}]}}),
                cardinality=-1,
            ),
        ]

        fields = self.catalog.fields_for("article")

        assert [item.field_name for item in fields] == ["body", "field_tags"]
        assert fields[0].instance_settings == {"label": "Body", "required": 0}
        assert fields[1].field_type == "taxonomy_term_reference"
        assert fields[1].cardinality == -1
        assert fields[1].field_settings["settings"]["allowed_values"] == [{"vocabulary": "tags"}]
        self.connector.db_connection.fetch_all.assert_called_once_with(
            self.connector.queries.get_field_instances(), ("article",)
        )

    def test_malformed_settings_do_not_abort(self):
        """Test an unreadable settings blob leaves the settings empty."""
        self.connector.db_connection.fetch_all.return_value = [
            _row("body", b"a:1:{broken", field_data=None, cardinality=None),
        ]

        fields = self.catalog.fields_for("article")

        assert len(fields) == 1
        assert fields[0].instance_settings is None
        assert fields[0].field_settings is None
        assert fields[0].cardinality is None

    def test_duplicate_field_names_collapse(self):
        """Test one entry per machine name."""
        blob = serialized({"label": "Body"})
        self.connector.db_connection.fetch_all.return_value = [_row("body", blob), _row("body", blob)]

        assert len(self.catalog.fields_for("article")) == 1

    def test_shared_bundle_name_filtered_by_entity_type(self):
        """Test a node type and a vocabulary sharing a name keep their own fields."""
        node_row = _row("field_tags", serialized({"label": "Node tags"}))
        term_row = _row("field_tags", serialized({"label": "Term tags"}))
        term_row["entity_type"] = "taxonomy_term"
        self.connector.db_connection.fetch_all.return_value = [node_row, term_row]

        fields = self.catalog.fields_for("article", "taxonomy_term")

        assert len(fields) == 1
        assert fields[0].entity_type == "taxonomy_term"
        assert fields[0].instance_settings == {"label": "Term tags"}

    def test_missing_instance_table(self):
        """Test a database without field tables has no fields."""
        catalog = FieldCatalog(FakeConnector({"node": ["nid"]}))
        assert catalog.fields_for("article") == []

    def test_field_type(self):
        """Test field type lookup."""
        self.connector.db_connection.fetch_one.return_value = {"type": "entityreference"}
        assert self.catalog.field_type("field_related") == "entityreference"

        self.connector.db_connection.fetch_one.return_value = None
        assert self.catalog.field_type("field_missing") == ""
