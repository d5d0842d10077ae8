"""Choose the bytes written to a script's STDIN."""

from typing import Optional, Sequence

from ..config.settings import AlternateMode, InputMode
from ..editor.document import RangeSpec, TextDocument
from ..exceptions import ConfigurationError
from .context import ExecutionContext


def input_range(
    mode: InputMode,
    alternate: Optional[AlternateMode],
    document: TextDocument,
    selection: RangeSpec,
) -> Optional[RangeSpec]:
    """Document range whose text becomes the input.

    Returns None when nothing is read from the document. For NOTHING the
    selection itself is still the range that "input" output replaces, so
    callers wanting a replacement target should use replacement_range().
    """
    if mode is InputMode.NOTHING:
        return None
    if mode is InputMode.DOCUMENT:
        return document.whole_range
    if mode is InputMode.SELECTION:
        if selection.length > 0:
            return selection
        return _alternate_range(alternate, document, selection.offset)
    raise ConfigurationError(f"Unsupported input mode: {mode}")


def replacement_range(
    mode: InputMode,
    alternate: Optional[AlternateMode],
    document: TextDocument,
    selection: RangeSpec,
) -> RangeSpec:
    """Range that output mode "input" overwrites."""
    span = input_range(mode, alternate, document, selection)
    return selection if span is None else span


def select_input(
    mode: InputMode,
    alternate: Optional[AlternateMode],
    context: ExecutionContext,
    encoding: str = "utf-8",
) -> bytes:
    """Bytes to feed the script for a text action."""
    if mode is InputMode.NOTHING:
        return b""

    document = context.document
    if document is None or context.selection is None:
        raise ConfigurationError(f"Input mode '{mode.value}' requires a document")

    span = input_range(mode, alternate, document, context.selection.range)
    if span is None:
        return b""
    return document.substring(span).encode(encoding)


def select_file_input(
    mode: InputMode,
    file_paths: Sequence[str],
    encoding: str = "utf-8",
) -> bytes:
    """Bytes to feed the script for a file action.

    Several files always produce the newline-joined path list, whatever the
    input mode.
    """
    if len(file_paths) > 1:
        return "\n".join(file_paths).encode(encoding)
    if mode is InputMode.NOTHING or not file_paths:
        return b""
    return file_paths[0].encode(encoding)


def _alternate_range(
    alternate: Optional[AlternateMode], document: TextDocument, cursor: int
) -> Optional[RangeSpec]:
    if alternate is None:
        return None
    if alternate is AlternateMode.DOCUMENT:
        return document.whole_range
    if alternate is AlternateMode.LINE:
        return document.line_range_at(cursor)
    if alternate is AlternateMode.WORD:
        return document.word_range_at(cursor)
    if alternate is AlternateMode.CHARACTER:
        return document.character_range_at(cursor)
    raise ConfigurationError(f"Unsupported alternate mode: {alternate}")
