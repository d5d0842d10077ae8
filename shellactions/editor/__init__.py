"""Editor-side contract: document snapshots and output surfaces."""

from .bridge import EditorBridge, Replacement
from .buffer import BufferEditor, expand_snippet
from .document import RangeSpec, TextDocument

__all__ = [
    "BufferEditor",
    "EditorBridge",
    "RangeSpec",
    "Replacement",
    "TextDocument",
    "expand_snippet",
]
