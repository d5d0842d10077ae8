"""In-memory editor used by the command line runner and tests."""

import re
from typing import List, Sequence, Tuple

import structlog

from .bridge import EditorBridge, Replacement
from .document import RangeSpec

logger = structlog.get_logger(__name__)

_PLACEHOLDER = re.compile(r"\$\{\d+:([^}]*)\}|\$\d+|\\([\\$`}])")


def expand_snippet(snippet: str) -> str:
    """Flatten snippet markup to the text it would insert.

    Placeholders become their default text, bare tab stops disappear and
    escaped characters are unescaped.
    """

    def _replace(match: re.Match) -> str:
        if match.group(1) is not None:
            return match.group(1)
        if match.group(2) is not None:
            return match.group(2)
        return ""

    return _PLACEHOLDER.sub(_replace, snippet)


class BufferEditor(EditorBridge):
    """Applies edits to a string and records everything else it is shown."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.selected: List[RangeSpec] = []
        self.tooltips: List[Tuple[str, RangeSpec]] = []
        self.console: List[str] = []
        self.html: List[Tuple[str, str]] = []
        self.sheets: List[str] = []

    async def apply_replacements(self, replacements: Sequence[Replacement]) -> None:
        # Apply back to front so earlier offsets stay valid
        for span, text in sorted(replacements, key=lambda item: item[0].offset, reverse=True):
            self.text = self.text[:span.offset] + text + self.text[span.end:]
        logger.debug("Applied replacements", count=len(replacements))

    async def insert_snippet(self, snippet: str, span: RangeSpec) -> None:
        await self.apply_replacements([(span, expand_snippet(snippet))])

    async def replace_document(self, text: str, as_snippet: bool) -> None:
        self.text = expand_snippet(text) if as_snippet else text

    async def select_ranges(self, ranges: List[RangeSpec]) -> None:
        self.selected = list(ranges)

    async def show_tooltip(self, text: str, anchor: RangeSpec) -> None:
        self.tooltips.append((text, anchor))

    async def show_console(self, text: str) -> None:
        self.console.append(text)

    async def show_html(self, html: str, base_url: str) -> None:
        self.html.append((html, base_url))

    async def show_sheet(self, text: str) -> None:
        self.sheets.append(text)
