"""Turn a script's STDOUT into an instruction for the editor."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union, assert_never

from ..config.settings import OutputFormat, OutputMode
from ..editor.document import RangeSpec
from .ranges import parse_ranges

TOOLTIP_MAX_LENGTH = 250


class Surface(Enum):
    """Windows that can display raw script output."""

    CONSOLE = "console"
    HTML = "html"


@dataclass(frozen=True)
class ReplaceInput:
    range: RangeSpec
    text: str
    as_snippet: bool = False


@dataclass(frozen=True)
class ReplaceDocument:
    text: str
    as_snippet: bool = False


@dataclass(frozen=True)
class SelectRanges:
    ranges: List[RangeSpec] = field(default_factory=list)


@dataclass(frozen=True)
class ShowTooltip:
    text: str


@dataclass(frozen=True)
class LogOutput:
    text: str


@dataclass(frozen=True)
class ShowContent:
    surface: Surface
    text: str


@dataclass(frozen=True)
class NoOutput:
    pass


OutputInstruction = Union[
    ReplaceInput, ReplaceDocument, SelectRanges, ShowTooltip, LogOutput, ShowContent, NoOutput
]


def truncate_tooltip(text: str) -> str:
    return text[:TOOLTIP_MAX_LENGTH]


def route_output(
    mode: OutputMode,
    output_format: OutputFormat,
    stdout: str,
    *,
    input_range: RangeSpec,
    max_index: int,
    selected: Optional[Sequence[RangeSpec]] = None,
) -> OutputInstruction:
    """Decide what happens with one invocation's STDOUT.

    Args:
        mode: Configured output mode
        output_format: Text or snippet; only used by the replacement modes
        stdout: Decoded script output
        input_range: Range the input came from, replaced by mode INPUT
        max_index: Document length, the bound for RANGE output
        selected: Ranges already collected from earlier selections

    Returns:
        Instruction for the caller to apply

    Raises:
        ParseFailure: If RANGE output is malformed
    """
    as_snippet = output_format is OutputFormat.SNIPPET

    if mode is OutputMode.INPUT:
        return ReplaceInput(input_range, stdout, as_snippet)
    elif mode is OutputMode.DOCUMENT:
        return ReplaceDocument(stdout, as_snippet)
    elif mode is OutputMode.RANGE:
        return SelectRanges(parse_ranges(stdout, max_index, existing=selected))
    elif mode is OutputMode.TOOLTIP:
        return ShowTooltip(truncate_tooltip(stdout))
    elif mode is OutputMode.LOG:
        return LogOutput(stdout)
    elif mode is OutputMode.HTML:
        return ShowContent(Surface.HTML, stdout)
    elif mode is OutputMode.CONSOLE:
        return ShowContent(Surface.CONSOLE, stdout)
    elif mode is OutputMode.NOTHING:
        return NoOutput()
    else:
        assert_never(mode)
