"""
Main entry point for the Alloy style sheet Language Server.

This file is executed by the `tssls` console script.

The server communicates with editors via stdin/stdout using JSON-RPC.
"""
import os
import sys

from tssls.lsp.server import create_server


def main():
    """Start the language server on stdin/stdout."""

    # Check if we're in debug mode. Nothing may be printed to stdout:
    # it carries the JSON-RPC stream.
    if os.getenv("DEBUG"):
        print("tssls starting in DEBUG mode, waiting for debugger on port 5678", file=sys.stderr)
        try:
            import debugpy  # type: ignore
            debugpy.listen(("127.0.0.1", 5678))
            debugpy.wait_for_client()
        except ImportError:
            print("debugpy not available - install with: pip install tssls[dev]", file=sys.stderr)

    server = create_server()

    # Start the server - it will listen on stdin/stdout for LSP messages
    # from the editor client
    server.start_io()

if __name__ == "__main__":
    main()
