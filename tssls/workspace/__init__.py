"""Workspace data for tssls: completion schema and companion views."""
from .schema_cache import SchemaCache, SchemaStore, SchemaUnavailableError
from .companion import CompanionReader

__all__ = ['SchemaCache', 'SchemaStore', 'SchemaUnavailableError', 'CompanionReader']
