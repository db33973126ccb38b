"""
Server settings.

Read from the client's `initializationOptions`, then overridden by
environment variables:

    schemaPath   / TSSLS_SCHEMA    completion schema (YAML or JSON)
    styleSuffix                    suffix of style sheets (default .tss)
    language     / TSSLS_LANGUAGE  i18n folder used for *id properties
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tssls.workspace.schema_cache import BUNDLED_SCHEMA_PATH


@dataclass
class ServerSettings:
    schema_path: Path = BUNDLED_SCHEMA_PATH
    style_suffix: str = ".tss"
    language: str = "en"

    @classmethod
    def load(
        cls,
        options: Any = None,
        environ: Mapping[str, str] | None = None,
        workspace_root: Path | None = None,
    ) -> ServerSettings:
        environ = os.environ if environ is None else environ
        options = options if isinstance(options, Mapping) else {}

        settings = cls()

        schema_path = environ.get("TSSLS_SCHEMA") or options.get("schemaPath")
        if schema_path:
            path = Path(str(schema_path)).expanduser()
            if not path.is_absolute() and workspace_root is not None:
                path = workspace_root / path
            settings.schema_path = path

        style_suffix = options.get("styleSuffix")
        if style_suffix:
            settings.style_suffix = str(style_suffix)

        language = environ.get("TSSLS_LANGUAGE") or options.get("language")
        if language:
            settings.language = str(language)

        return settings
