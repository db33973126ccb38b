"""
Tests for tssls/workspace/schema_cache.py

Covers schema decoding, explicit missing-key handling and the lazy
single-flight loader.
"""
from __future__ import annotations

import asyncio
import json
import threading
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from lsprotocol.types import MessageType

from tssls.workspace import schema_cache as schema_cache_module
from tssls.workspace.schema_cache import (
    BUNDLED_SCHEMA_PATH,
    PropertyInfo,
    SchemaCache,
    SchemaStore,
    SchemaUnavailableError,
    TagInfo,
    read_schema_file,
)


class TestSchemaStoreFromDict:

    def test_flat_layout(self, schema: SchemaStore):
        assert schema.get_tag("Window") == TagInfo(display_name="Ti.UI.Window")
        assert schema.get_property("font") == PropertyInfo(type="Font")
        assert schema.get_property("color") == PropertyInfo(values=("red", "green", "blue"))
        assert schema.get_type("Font").properties == ("fontSize", "fontFamily")

    def test_extension_layout(self):
        schema = SchemaStore.from_dict(
            {
                "alloy": {"tags": {"Window": {"apiName": "Ti.UI.Window"}}},
                "titanium": {
                    "properties": {"font": {"type": "Font"}},
                    "types": {"Font": {"properties": ["fontSize"]}},
                },
            }
        )

        assert schema.get_tag("Window").display_name == "Ti.UI.Window"
        assert schema.nested_properties("font") == ("fontSize",)

    def test_tag_display_name_defaults_to_name(self):
        schema = SchemaStore.from_dict({"tags": {"View": None}})

        assert schema.get_tag("View").display_name == "View"

    def test_malformed_entries_are_skipped(self):
        schema = SchemaStore.from_dict(
            {
                "properties": {"ok": {}, "bad": "nope", "empty": None},
                "types": {"Font": ["fontSize"]},
            }
        )

        assert "ok" in schema.properties
        assert "empty" in schema.properties
        assert "bad" not in schema.properties
        assert schema.get_type("Font") is None

    def test_store_is_read_only(self, schema: SchemaStore):
        with pytest.raises(TypeError):
            schema.properties["new"] = PropertyInfo()  # type: ignore

    def test_missing_keys(self, schema: SchemaStore):
        assert schema.get_tag("Nope") is None
        assert schema.get_property("nope") is None
        assert schema.get_type("Nope") is None


class TestNestedProperties:

    def test_typed_parent(self, schema: SchemaStore):
        assert schema.nested_properties("font") == ("fontSize", "fontFamily")

    def test_no_parent(self, schema: SchemaStore):
        assert schema.nested_properties(None) is None

    def test_unknown_parent(self, schema: SchemaStore):
        assert schema.nested_properties('"#title"') is None

    def test_untyped_parent(self, schema: SchemaStore):
        assert schema.nested_properties("width") is None

    def test_type_missing_from_schema(self, schema: SchemaStore):
        assert schema.nested_properties("shadow") is None

    def test_type_without_properties(self):
        schema = SchemaStore.from_dict(
            {"properties": {"font": {"type": "Font"}}, "types": {"Font": {"properties": []}}}
        )

        assert schema.nested_properties("font") is None


class TestReadSchemaFile:

    def test_yaml(self, tmp_path: Path):
        schema_file = tmp_path / "completions.yml"
        schema_file.write_text("tags:\n  Window:\n    displayName: Ti.UI.Window\n")

        assert "Window" in read_schema_file(schema_file).tags

    def test_json(self, tmp_path: Path, schema_data: dict):
        schema_file = tmp_path / "completions.json"
        schema_file.write_text(json.dumps(schema_data))

        assert read_schema_file(schema_file).get_property("font").type == "Font"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SchemaUnavailableError):
            read_schema_file(tmp_path / "missing.yml")

    def test_invalid_json(self, tmp_path: Path):
        schema_file = tmp_path / "completions.json"
        schema_file.write_text("{not json")

        with pytest.raises(SchemaUnavailableError):
            read_schema_file(schema_file)

    def test_not_a_mapping(self, tmp_path: Path):
        schema_file = tmp_path / "completions.yml"
        schema_file.write_text("- a\n- b\n")

        with pytest.raises(SchemaUnavailableError):
            read_schema_file(schema_file)

    def test_bundled_schema(self):
        schema = read_schema_file(BUNDLED_SCHEMA_PATH)

        assert "Window" in schema.tags
        assert schema.nested_properties("font")
        assert schema.get_property("textAlign").values


class TestSchemaCache:

    @pytest.mark.asyncio
    async def test_loads_once(self, tmp_path: Path, schema_data: dict):
        schema_file = tmp_path / "completions.json"
        schema_file.write_text(json.dumps(schema_data))
        cache = SchemaCache(schema_file)

        first = await cache.get()
        schema_file.unlink()
        second = await cache.get()

        assert first is second
        assert cache.is_loaded

    @pytest.mark.asyncio
    async def test_concurrent_first_requests_share_one_load(self, schema: SchemaStore):
        calls = []

        def slow_read(path):
            calls.append(path)
            return schema

        cache = SchemaCache(Path("completions.yml"))
        with patch.object(schema_cache_module, "read_schema_file", side_effect=slow_read):
            results = await asyncio.gather(*(cache.get() for _ in range(5)))

        assert len(calls) == 1
        assert all(result is schema for result in results)

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_shared_load(self, schema: SchemaStore):
        release = threading.Event()

        def blocking_read(path):
            release.wait(5)
            return schema

        cache = SchemaCache(Path("completions.yml"))
        with patch.object(schema_cache_module, "read_schema_file", side_effect=blocking_read):
            first = asyncio.ensure_future(cache.get())
            second = asyncio.ensure_future(cache.get())
            await asyncio.sleep(0)

            first.cancel()
            with pytest.raises(asyncio.CancelledError):
                await first

            release.set()
            assert await second is schema
            assert await cache.get() is schema

    @pytest.mark.asyncio
    async def test_unexpected_load_error_is_retried(self, schema: SchemaStore):
        cache = SchemaCache(Path("completions.yml"))

        with patch.object(
            schema_cache_module,
            "read_schema_file",
            side_effect=[RuntimeError("boom"), schema],
        ):
            with pytest.raises(RuntimeError):
                await cache.get()
            assert await cache.get() is schema

    @pytest.mark.asyncio
    async def test_failure_propagates_then_retries(self, tmp_path: Path, schema_data: dict):
        schema_file = tmp_path / "completions.json"
        cache = SchemaCache(schema_file)

        with pytest.raises(SchemaUnavailableError):
            await cache.get()
        assert not cache.is_loaded

        schema_file.write_text(json.dumps(schema_data))
        schema = await cache.get()

        assert "Window" in schema.tags

    @pytest.mark.asyncio
    async def test_concurrent_waiters_all_see_failure(self, tmp_path: Path):
        cache = SchemaCache(tmp_path / "missing.yml")

        results = await asyncio.gather(
            *(cache.get() for _ in range(3)), return_exceptions=True
        )

        assert all(isinstance(r, SchemaUnavailableError) for r in results)

    @pytest.mark.asyncio
    async def test_defaults_to_bundled_schema(self):
        cache = SchemaCache()

        assert cache.schema_path == BUNDLED_SCHEMA_PATH
        assert "Label" in (await cache.get()).tags

    @pytest.mark.asyncio
    async def test_logs_to_server(self, tmp_path: Path, mock_server):
        cache = SchemaCache(tmp_path / "missing.yml", server=mock_server)

        with pytest.raises(SchemaUnavailableError):
            await cache.get()

        params = mock_server.window_log_message.call_args.args[0]
        assert params.type == MessageType.Error
        assert "missing.yml" in params.message
