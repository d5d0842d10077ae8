"""Built-in shell action handlers."""

from .file_action import ShellFileAction
from .text_action import ShellTextAction, aggregate_snippets, escape_snippet_text

__all__ = ["ShellFileAction", "ShellTextAction", "aggregate_snippets", "escape_snippet_text"]
