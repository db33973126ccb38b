from pathlib import Path

from pygls.lsp.server import LanguageServer

from tssls.lsp.capabilities.capabilities import CapabilityManager
from tssls.lsp.settings import ServerSettings
from tssls.workspace.schema_cache import SchemaCache


class TssLanguageServer(LanguageServer):
    """
    Custom Language Server with Alloy-specific attributes.

    Attributes:
        settings: Options from the client and the environment
        schema_cache: Lazily loaded completion schema
        project_root: Alloy project directory, if one was found
    """

    def __init__(self, name: str, version: str):
        super().__init__(name, version)

        self.settings: ServerSettings = ServerSettings()
        self.schema_cache: SchemaCache | None = None
        self.capability_manager: CapabilityManager | None = None
        self.project_root: Path | None = None
