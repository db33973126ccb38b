"""
Basic tests for the Alloy style sheet Language Server.

These tests verify that the server can be created and has the expected features registered.
"""

from pathlib import Path
from unittest.mock import Mock

import pytest
from lsprotocol.types import TEXT_DOCUMENT_COMPLETION, CompletionParams, Position, TextDocumentIdentifier

from tssls.lsp.server import TRIGGER_CHARACTERS, create_server
from tssls.lsp.tss_language_server import TssLanguageServer


def test_server_creation():
    """Test that the server can be created successfully."""
    server = create_server()
    assert isinstance(server, TssLanguageServer)
    assert server.name == "tssls"
    assert server.version == "0.1.0"


def test_server_has_completion_feature():
    """Test that completion feature is registered."""
    server = create_server()

    # Check that completion handler is registered
    assert TEXT_DOCUMENT_COMPLETION in server.protocol.fm._features


def test_completion_trigger_characters():
    """Quotes, selector sigils and colons trigger completion."""
    server = create_server()

    options = server.protocol.fm.feature_options[TEXT_DOCUMENT_COMPLETION]
    assert options.trigger_characters == TRIGGER_CHARACTERS


def test_server_starts_uninitialized():
    server = create_server()

    assert server.schema_cache is None
    assert server.capability_manager is None
    assert server.project_root is None
    assert server.settings.style_suffix == ".tss"


@pytest.mark.asyncio
async def test_initialize_builds_capabilities(tmp_path: Path):
    (tmp_path / "tiapp.xml").write_text("<ti:app/>")
    (tmp_path / "app").mkdir()
    server = create_server()
    server.window_log_message = Mock()

    initialize = server.protocol.fm.features["initialize"]
    params = Mock(root_uri=tmp_path.as_uri(), initialization_options={"language": "fr"})
    await initialize(params)

    assert server.project_root == tmp_path
    assert server.settings.language == "fr"
    assert server.schema_cache is not None
    assert not server.schema_cache.is_loaded
    assert server.capability_manager.get_capability("style_completion") is not None


@pytest.mark.asyncio
async def test_completion_without_initialize():
    server = create_server()

    completion = server.protocol.fm.features[TEXT_DOCUMENT_COMPLETION]
    result = await completion(
        CompletionParams(
            text_document=TextDocumentIdentifier(uri="file:///x.tss"),
            position=Position(line=0, character=0),
        )
    )

    assert result.items == []
