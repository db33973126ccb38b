from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    LogMessageParams,
    MessageType,
)
from pygls.uris import to_fs_path

from tssls.lsp.capabilities.capabilities import CapabilityManager
from tssls.lsp.settings import ServerSettings
from tssls.lsp.tss_language_server import TssLanguageServer
from tssls.utils.find_files import find_alloy_root
from tssls.workspace.schema_cache import SchemaCache


# Quotes open tag and selector keys; `.`/`#` start selectors; `:` starts a value.
TRIGGER_CHARACTERS = ['"', "'", ".", "#", ":", " "]


def create_server() -> TssLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Document synchronization (open buffers live in ls.workspace)
    """
    server = TssLanguageServer("tssls", "0.1.0")

    @server.feature("initialize")
    async def initialize(ls: TssLanguageServer, params):
        """
        Initialize the server and set up any necessary state.

        The schema itself is loaded lazily on the first completion.
        """
        workspace_root = None
        if params.root_uri:
            fs_path = to_fs_path(params.root_uri)
            workspace_root = Path(fs_path) if fs_path else None

        ls.settings = ServerSettings.load(
            params.initialization_options, workspace_root=workspace_root
        )
        ls.schema_cache = SchemaCache(ls.settings.schema_path, server=ls)

        if workspace_root is not None:
            ls.project_root = find_alloy_root(workspace_root)

        if ls.project_root is None:
            ls.window_log_message(
                LogMessageParams(
                    MessageType.Info, "Alloy project not found in workspace"
                )
            )
        else:
            ls.window_log_message(
                LogMessageParams(MessageType.Info, f"Alloy project detected: {ls.project_root}")
            )

        # Initialize capability manager
        ls.capability_manager = CapabilityManager(ls)

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=TRIGGER_CHARACTERS),
    )
    async def completion(ls: TssLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return CompletionList(is_incomplete=False, items=[])

    return server
