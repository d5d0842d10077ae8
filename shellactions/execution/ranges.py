"""Range list format shared by script output and EDITOR_SELECTION_RANGE.

A range is written ``offset,length``; several ranges are joined with a
newline or ``&``, e.g. ``0,10&12,5``. format_ranges() emits the canonical
``&``-joined form.
"""

import re
from typing import Iterable, List, Optional, Sequence

import structlog

from ..editor.document import RangeSpec
from ..exceptions import ParseFailure

logger = structlog.get_logger(__name__)

_SEPARATOR = re.compile(r"[\r\n&]")


def clamp_range(span: RangeSpec, max_index: int) -> RangeSpec:
    """Fit span inside [0, max_index] by shortening it, never dropping it."""
    offset = min(span.offset, max_index)
    length = min(span.length, max_index - offset)
    if (offset, length) != (span.offset, span.length):
        logger.debug(
            "Clamped range to document bounds",
            original=str(span),
            max_index=max_index,
            offset=offset,
            length=length,
        )
        return RangeSpec(offset, length)
    return span


def parse_ranges(
    text: str,
    max_index: int,
    existing: Optional[Sequence[RangeSpec]] = None,
) -> List[RangeSpec]:
    """Parse a range list.

    Args:
        text: Script output in range list format
        max_index: Largest valid end offset (usually the document length)
        existing: Ranges to keep ahead of the parsed ones; None to replace

    Returns:
        existing followed by the parsed ranges, in input order

    Raises:
        ParseFailure: If any token is malformed; no partial result is returned
    """
    parsed: List[RangeSpec] = []
    for raw_token in _SEPARATOR.split(text):
        token = raw_token.strip()
        if not token:
            continue
        parsed.append(clamp_range(_parse_token(token, text), max_index))

    return list(existing or []) + parsed


def format_ranges(ranges: Iterable[RangeSpec]) -> str:
    return "&".join(str(span) for span in ranges)


def _parse_token(token: str, text: str) -> RangeSpec:
    fields = token.split(",")
    if len(fields) != 2:
        raise ParseFailure(token, text)
    try:
        offset, length = int(fields[0].strip()), int(fields[1].strip())
    except ValueError:
        raise ParseFailure(token, text) from None
    if offset < 0 or length < 0:
        raise ParseFailure(token, text)
    return RangeSpec(offset, length)
