"""Shell action handlers and their registry."""

from .base import ActionContext, ActionResult, ActionStatus, ShellAction
from .builtin import ShellFileAction, ShellTextAction
from .registry import ActionRegistry

__all__ = [
    "ActionContext",
    "ActionRegistry",
    "ActionResult",
    "ActionStatus",
    "ShellAction",
    "ShellFileAction",
    "ShellTextAction",
]
