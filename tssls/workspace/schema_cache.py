"""
Schema Store for style sheet completion.

Holds the static dictionary of known tags, properties and property types.
The schema is loaded once, lazily, on the first completion request, and is
never invalidated afterwards: it only changes with a new SDK release, not
with the documents being edited. Reloading means building a new
SchemaCache.

Schema layout (YAML or JSON):

    tags:
      Window:
        displayName: Ti.UI.Window
    properties:
      font:
        type: Font
      textAlign:
        values: [Ti.UI.TEXT_ALIGNMENT_LEFT, Ti.UI.TEXT_ALIGNMENT_CENTER]
    types:
      Font:
        properties: [fontSize, fontFamily, fontWeight]

The layout generated by the editor extension, with tags under `alloy` and
properties/types under `titanium`, is accepted as well.
"""
from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import yaml
from lsprotocol.types import LogMessageParams, MessageType

if TYPE_CHECKING:
    from tssls.lsp.tss_language_server import TssLanguageServer


BUNDLED_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "data" / "completions.yml"


class SchemaUnavailableError(RuntimeError):
    """The completion schema could not be loaded."""


@dataclass(frozen=True)
class TagInfo:
    """A known view tag (Window, Label, ...)."""

    display_name: str


@dataclass(frozen=True)
class PropertyInfo:
    """A known style property."""

    type: str | None = None
    values: tuple[str, ...] | None = None


@dataclass(frozen=True)
class TypeInfo:
    """A structured property type and its legal child properties."""

    properties: tuple[str, ...] = ()


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


@dataclass(frozen=True)
class SchemaStore:
    """Immutable in-memory schema."""

    tags: Mapping[str, TagInfo] = field(default_factory=lambda: _frozen({}))
    properties: Mapping[str, PropertyInfo] = field(default_factory=lambda: _frozen({}))
    types: Mapping[str, TypeInfo] = field(default_factory=lambda: _frozen({}))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SchemaStore:
        """Build a store from a decoded schema document."""
        alloy = data.get("alloy")
        titanium = data.get("titanium")
        tags_data = alloy.get("tags") if isinstance(alloy, Mapping) else data.get("tags")
        source = titanium if isinstance(titanium, Mapping) else data

        tags: dict[str, TagInfo] = {}
        for name, info in _mapping(tags_data).items():
            info = info if isinstance(info, Mapping) else {}
            display_name = info.get("displayName") or info.get("apiName") or name
            tags[str(name)] = TagInfo(display_name=str(display_name))

        properties: dict[str, PropertyInfo] = {}
        for name, info in _mapping(source.get("properties")).items():
            if info is None:
                info = {}
            if not isinstance(info, Mapping):
                continue
            prop_type = info.get("type")
            values = info.get("values")
            properties[str(name)] = PropertyInfo(
                type=str(prop_type) if prop_type else None,
                values=tuple(str(v) for v in values) if isinstance(values, list) else None,
            )

        types: dict[str, TypeInfo] = {}
        for name, info in _mapping(source.get("types")).items():
            if not isinstance(info, Mapping):
                continue
            children = info.get("properties")
            types[str(name)] = TypeInfo(
                properties=tuple(str(p) for p in children) if isinstance(children, list) else ()
            )

        return cls(tags=_frozen(tags), properties=_frozen(properties), types=_frozen(types))

    def get_tag(self, name: str) -> TagInfo | None:
        return self.tags.get(name)

    def get_property(self, name: str) -> PropertyInfo | None:
        return self.properties.get(name)

    def get_type(self, name: str) -> TypeInfo | None:
        return self.types.get(name)

    def nested_properties(self, parent: str | None) -> tuple[str, ...] | None:
        """
        Child properties allowed inside a `parent: { ... }` block.

        Returns None when nesting cannot be resolved: no parent, unknown
        parent, untyped parent, a type missing from the schema, or a type
        that declares no properties.
        """
        if parent is None:
            return None

        prop = self.get_property(parent)
        if prop is None or prop.type is None:
            return None

        type_info = self.get_type(prop.type)
        if type_info is None or not type_info.properties:
            return None

        return type_info.properties


def _mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def read_schema_file(schema_path: Path) -> SchemaStore:
    """Read and decode a schema file. Raises SchemaUnavailableError."""
    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            if schema_path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise SchemaUnavailableError(f"Cannot load schema {schema_path}: {e}") from e

    if not isinstance(data, Mapping):
        raise SchemaUnavailableError(f"Schema {schema_path} is not a mapping")

    return SchemaStore.from_dict(data)


class SchemaCache:
    """
    Lazy, single-flight holder of the SchemaStore.

    Concurrent first callers await the same in-flight load. A failed load
    is reported to every waiter and cleared, so the next call retries.

    Usage:
        cache = SchemaCache(Path("completions.yml"))
        schema = await cache.get()
    """

    def __init__(
        self,
        schema_path: Path | None = None,
        server: TssLanguageServer | None = None,
    ) -> None:
        self.schema_path = schema_path or BUNDLED_SCHEMA_PATH
        self.server = server

        self._store: SchemaStore | None = None
        self._loading: asyncio.Task[SchemaStore] | None = None

    @property
    def is_loaded(self) -> bool:
        return self._store is not None

    async def get(self) -> SchemaStore:
        """Return the schema, loading it on first use."""
        if self._store is not None:
            return self._store

        if self._loading is None:
            self._loading = asyncio.ensure_future(self._load())
        loading = self._loading

        try:
            # A cancelled waiter must not cancel the load shared with the others.
            store = await asyncio.shield(loading)
        except SchemaUnavailableError as e:
            if self._loading is loading:
                self._loading = None
                self._log(MessageType.Error, str(e))
            raise
        except BaseException:
            if self._loading is loading and loading.done() and (
                loading.cancelled() or loading.exception() is not None
            ):
                self._loading = None
            raise

        self._store = store
        return store

    async def _load(self) -> SchemaStore:
        store = await asyncio.to_thread(read_schema_file, self.schema_path)
        self._log(
            MessageType.Info,
            f"Loaded schema {self.schema_path.name}: {len(store.tags)} tags, "
            f"{len(store.properties)} properties, {len(store.types)} types",
        )
        return store

    def _log(self, type: MessageType, message: str) -> None:
        if self.server:
            self.server.window_log_message(LogMessageParams(type=type, message=message))
