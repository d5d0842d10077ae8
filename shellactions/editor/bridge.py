"""Contract between the action engine and the host editor's UI."""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from .document import RangeSpec

Replacement = Tuple[RangeSpec, str]


class EditorBridge(ABC):
    """Surfaces the engine writes results to.

    Ranges passed to the bridge always refer to offsets in the document as
    it was when the action started; implementations apply batches of
    replacements as a single edit.
    """

    @abstractmethod
    async def apply_replacements(self, replacements: Sequence[Replacement]) -> None:
        """Replace each range with its text, as one undoable edit."""

    @abstractmethod
    async def insert_snippet(self, snippet: str, span: RangeSpec) -> None:
        """Replace span with a snippet, expanding its tab stops."""

    @abstractmethod
    async def replace_document(self, text: str, as_snippet: bool) -> None:
        """Replace the whole document."""

    @abstractmethod
    async def select_ranges(self, ranges: List[RangeSpec]) -> None:
        """Select the given ranges."""

    @abstractmethod
    async def show_tooltip(self, text: str, anchor: RangeSpec) -> None:
        """Show a tooltip next to anchor."""

    @abstractmethod
    async def show_console(self, text: str) -> None:
        """Show plain text in a new window."""

    @abstractmethod
    async def show_html(self, html: str, base_url: str) -> None:
        """Render HTML in a new window, resolving relative links against base_url."""

    @abstractmethod
    async def show_sheet(self, text: str) -> None:
        """Show text in a sheet attached to the current window."""
