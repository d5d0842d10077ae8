"""Immutable snapshot of an editor document and its selections."""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WORD_CHAR = re.compile(r"\w")


@dataclass(frozen=True)
class RangeSpec:
    """A span of the document given as offset and length."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __str__(self) -> str:
        return f"{self.offset},{self.length}"


@dataclass(frozen=True)
class TextDocument:
    """Document text plus the editor state scripts are allowed to see."""

    text: str
    selections: Tuple[RangeSpec, ...] = field(default_factory=tuple)
    tab_string: str = "\t"
    line_ending: str = "\n"
    root_zone: str = ""
    active_zone: str = ""
    path: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def whole_range(self) -> RangeSpec:
        return RangeSpec(0, len(self.text))

    def substring(self, span: RangeSpec) -> str:
        return self.text[span.offset:span.end]

    def line_range_at(self, offset: int) -> RangeSpec:
        """Range of the line containing offset, excluding its line ending."""
        offset = self._clamp(offset)
        start = max(self.text.rfind("\n", 0, offset), self.text.rfind("\r", 0, offset)) + 1
        match = _LINE_BREAK.search(self.text, offset)
        end = match.start() if match else len(self.text)
        return RangeSpec(start, end - start)

    def word_range_at(self, offset: int) -> RangeSpec:
        """Range of the word touching offset; empty when the cursor is between non-word characters."""
        offset = self._clamp(offset)
        start = offset
        while start > 0 and _WORD_CHAR.match(self.text[start - 1]):
            start -= 1
        end = offset
        while end < len(self.text) and _WORD_CHAR.match(self.text[end]):
            end += 1
        return RangeSpec(start, end - start)

    def character_range_at(self, offset: int) -> RangeSpec:
        """The character after the cursor, or the last character at end of document."""
        offset = self._clamp(offset)
        if offset < len(self.text):
            return RangeSpec(offset, 1)
        if self.text:
            return RangeSpec(len(self.text) - 1, 1)
        return RangeSpec(0, 0)

    def line_number_at(self, offset: int) -> int:
        """1-based number of the line containing offset."""
        offset = self._clamp(offset)
        return len(_LINE_BREAK.findall(self.text, 0, offset)) + 1

    def line_index_at(self, offset: int) -> int:
        """Zero-based column of offset within its line."""
        offset = self._clamp(offset)
        return offset - self.line_range_at(offset).offset

    def _clamp(self, offset: int) -> int:
        return min(max(offset, 0), len(self.text))
