"""
Style sheet completion.

File: tssls/lsp/capabilities/style/__init__.py
"""
from tssls.lsp.capabilities.style.candidates import CURSOR_MARKER, Candidate, CandidateKind
from tssls.lsp.capabilities.style.engine import StyleCompletionEngine
from tssls.lsp.capabilities.style.matcher import matches

__all__ = [
    "CURSOR_MARKER",
    "Candidate",
    "CandidateKind",
    "StyleCompletionEngine",
    "matches",
]
