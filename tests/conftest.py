from __future__ import annotations

from unittest.mock import Mock

import pytest

from tssls.workspace.schema_cache import SchemaStore


@pytest.fixture
def schema_data() -> dict:
    """Small schema covering tags, flat, typed and enumerated properties."""
    return {
        "tags": {
            "Window": {"displayName": "Ti.UI.Window"},
            "Label": {"displayName": "Ti.UI.Label"},
            "TextField": {"displayName": "Ti.UI.TextField"},
        },
        "properties": {
            "font": {"type": "Font"},
            "width": {},
            "backgroundColor": {},
            "color": {"values": ["red", "green", "blue"]},
            "shadow": {"type": "Shadow"},
        },
        "types": {
            "Font": {"properties": ["fontSize", "fontFamily"]},
        },
    }


@pytest.fixture
def schema(schema_data: dict) -> SchemaStore:
    return SchemaStore.from_dict(schema_data)


@pytest.fixture
def mock_server():
    server = Mock()
    server.window_log_message = Mock()
    server.window_show_message = Mock()
    return server
