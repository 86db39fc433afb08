"""Shared fixtures for drupal-discovery tests."""

from typing import Dict, List

import pytest

from tests.fakes import FakeConnector, FIELD_DATA_COLUMNS, NODE_COLUMNS


@pytest.fixture
def node_schema() -> Dict[str, List[str]]:
    return {
        "node": NODE_COLUMNS,
        "url_alias": ["pid", "source", "alias", "language"],
        "redirect": ["rid", "source", "redirect", "language"],
        "taxonomy_term_data": ["tid", "vid", "name", "description", "format", "weight"],
        "taxonomy_vocabulary": ["vid", "name", "machine_name"],
        "taxonomy_term_hierarchy": ["tid", "parent"],
        "field_data_body": FIELD_DATA_COLUMNS + ["body_value", "body_summary", "body_format"],
        "field_data_field_tags": FIELD_DATA_COLUMNS + ["field_tags_tid"],
        "field_data_field_image": FIELD_DATA_COLUMNS + [
            "field_image_fid", "field_image_alt", "field_image_title"
        ],
    }


@pytest.fixture
def fake_connector(node_schema) -> FakeConnector:
    return FakeConnector(node_schema)
