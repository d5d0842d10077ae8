"""Shell action run against the selections of a text document."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import structlog

from ...config.settings import InputMode
from ...editor.bridge import EditorBridge, Replacement
from ...editor.document import RangeSpec, TextDocument
from ...exceptions import ConfigurationError
from ...execution.context import ExecutionContext, SelectionInfo
from ...execution.input import replacement_range, select_input
from ...execution.output import (
    OutputInstruction,
    ReplaceDocument,
    ReplaceInput,
    SelectRanges,
    route_output,
)
from ..base import ActionContext, ActionResult, ActionStatus, ShellAction

logger = structlog.get_logger(__name__)


def escape_snippet_text(text: str) -> str:
    """Escape literal text so snippet expansion leaves it unchanged."""
    return text.replace("\\", "\\\\").replace("$", "\\$").replace("`", "\\`")


def _overlaps_any(span: RangeSpec, replacements: List[Replacement]) -> bool:
    """Whether span is, or intersects, a range that is already being replaced."""
    for other, _ in replacements:
        if span == other:
            return True
        if span.offset < other.end and other.offset < span.end:
            return True
    return False


@dataclass
class _OutputBatch:
    """Edits collected across the selections of one action run."""

    replacements: List[Replacement] = field(default_factory=list)
    snippets: List[Replacement] = field(default_factory=list)
    document_text: Optional[ReplaceDocument] = None
    selected: Optional[List[RangeSpec]] = None

    def add(self, instruction: OutputInstruction) -> bool:
        if isinstance(instruction, ReplaceInput):
            target = self.snippets if instruction.as_snippet else self.replacements
            if _overlaps_any(instruction.range, target):
                logger.warning(
                    "Dropping output for range already being replaced",
                    range=str(instruction.range),
                )
            else:
                target.append((instruction.range, instruction.text))
        elif isinstance(instruction, ReplaceDocument):
            self.document_text = instruction
        elif isinstance(instruction, SelectRanges):
            self.selected = instruction.ranges
        else:
            return False
        return True

    async def flush(self, bridge: EditorBridge, document: TextDocument) -> None:
        if self.replacements:
            await bridge.apply_replacements(self.replacements)
        if len(self.snippets) == 1:
            span, snippet = self.snippets[0]
            await bridge.insert_snippet(snippet, span)
        elif self.snippets:
            snippet, span = aggregate_snippets(self.snippets, document)
            await bridge.insert_snippet(snippet, span)
        if self.document_text is not None:
            await bridge.replace_document(self.document_text.text, self.document_text.as_snippet)
        if self.selected is not None:
            await bridge.select_ranges(self.selected)


def aggregate_snippets(snippets: List[Replacement], document: TextDocument) -> Tuple[str, RangeSpec]:
    """Join per-selection snippets into one covering the whole affected range.

    Each snippet replaces its own range, so they are laid out in document
    order whatever order the selections came in; document text between
    consecutive ranges is kept as escaped literal text. Ranges must not
    overlap.
    """
    ordered = sorted(snippets, key=lambda item: item[0].offset)
    start = ordered[0][0].offset
    cursor = start
    parts = []
    for span, snippet in ordered:
        if span.offset > cursor:
            parts.append(escape_snippet_text(document.text[cursor:span.offset]))
        parts.append(snippet)
        cursor = max(cursor, span.end)
    return "".join(parts), RangeSpec(start, cursor - start)


class ShellTextAction(ShellAction):
    """Runs a script once per selection, or once for document/nothing input."""

    async def can_handle(self, context: ActionContext) -> bool:
        selections = self._selections(context)
        empty = all(span.length == 0 for span in selections)
        return self.allows_selection_count(len(selections), empty)

    async def execute(self, context: ActionContext) -> ActionResult:
        document = context.document
        if document is None:
            raise ConfigurationError(f"Text action '{self.name}' requires a document")

        selections = self._selections(context)
        if not await self.can_handle(context):
            return self.skipped(len(selections))

        script = self.resolve_script(context.paths)
        total = len(selections)
        if self.config.input is InputMode.SELECTION:
            batch = list(enumerate(selections))
        else:
            batch = [(0, selections[0])]

        logger.info(
            "Running text action",
            action=self.name,
            script=self.config.script,
            selections=total,
            invocations=len(batch),
        )

        output = _OutputBatch()
        failed = 0
        for index, span in batch:
            execution = ExecutionContext(
                paths=context.paths,
                document=document,
                selection=SelectionInfo(index=index, total=total, range=span),
            )
            input_bytes = select_input(
                self.config.input, self.config.alternate, execution, self.settings.encoding
            )
            result, decision = await self.run_once(script, execution, input_bytes, context.bridge)

            if decision.failed:
                failed += 1
                logger.warning(
                    "Ignoring output of failed script",
                    action=self.name,
                    selection=index + 1,
                    exit_status=result.exit_status,
                )
                continue

            target = replacement_range(self.config.input, self.config.alternate, document, span)
            instruction = route_output(
                self.config.output,
                self.config.output_format,
                result.stdout_text,
                input_range=target,
                max_index=document.length,
                selected=output.selected,
            )
            if not output.add(instruction):
                await self.present(instruction, context.bridge, context.paths.sugar_path, target)

        await output.flush(context.bridge, document)

        return ActionResult(
            status=ActionStatus.SUCCESS,
            message=f"Ran {self.config.script} for {len(batch)} invocation(s)",
            details={
                "script": str(script),
                "invocations": len(batch),
                "failed_invocations": failed,
                "selections": total,
            },
        )

    def _selections(self, context: ActionContext) -> Tuple[RangeSpec, ...]:
        if context.document is None or not context.document.selections:
            return (RangeSpec(0, 0),)
        return context.document.selections
