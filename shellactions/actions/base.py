"""Base classes for shell action handlers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import structlog

from ..config.settings import ActionConfig, EngineSettings
from ..editor.bridge import EditorBridge
from ..editor.document import RangeSpec, TextDocument
from ..execution.context import ContextPaths, ExecutionContext, InvocationResult
from ..execution.environment import build_environment
from ..execution.errors import ErrorDecision, evaluate_result, report_errors
from ..execution.output import (
    LogOutput,
    NoOutput,
    OutputInstruction,
    ShowContent,
    ShowTooltip,
    Surface,
)
from ..execution.process import find_script, invoke_script

logger = structlog.get_logger(__name__)


class ActionStatus(Enum):
    """Status of action execution."""

    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    SKIPPED = "skipped"


@dataclass
class ActionResult:
    """Result of action execution."""

    status: ActionStatus
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    execution_time_seconds: float = 0.0


@dataclass(frozen=True)
class ActionContext:
    """Everything the editor hands over when the user triggers an action."""

    paths: ContextPaths
    bridge: EditorBridge
    document: Optional[TextDocument] = None


class ShellAction(ABC):
    """Base class for actions backed by a shell script."""

    def __init__(
        self,
        name: str,
        config: ActionConfig,
        description: str = "",
        settings: Optional[EngineSettings] = None,
    ) -> None:
        """Initialize a shell action.

        Args:
            name: Unique name for this action
            config: Action definition
            description: Human-readable description
            settings: Engine settings; defaults are read from the environment
        """
        self.name = name
        self.config = config
        self.description = description or f"Runs {config.script}"
        self.settings = settings or EngineSettings()

        logger.debug("Created shell action", action=name, script=config.script)

    @abstractmethod
    async def can_handle(self, context: ActionContext) -> bool:
        """Whether the action accepts the current selection cardinality."""

    @abstractmethod
    async def execute(self, context: ActionContext) -> ActionResult:
        """Run the action's script and deliver its output."""

    def allows_selection_count(self, count: int, empty: bool) -> bool:
        """Apply the multiple/single/empty selection policy."""
        if count > 1:
            return self.config.allow_multiple_selections
        if count == 0 or empty:
            return self.config.allow_empty_selection
        return self.config.allow_single_selection

    def resolve_script(self, paths: ContextPaths) -> Path:
        return find_script(paths.sugar_path, self.config.script, self.settings.scripts_directory)

    async def run_once(
        self,
        script: Path,
        context: ExecutionContext,
        input_bytes: bytes,
        bridge: EditorBridge,
    ) -> tuple[InvocationResult, ErrorDecision]:
        """Invoke the script for one context and apply the error policy.

        Raises:
            ProcessFailure: If the script failed and errors are not suppressed
        """
        environment = build_environment(self.config, context)
        result = await invoke_script(script, environment, input_bytes, self.settings.encoding)

        decision = evaluate_result(result, self.config.suppress_errors)
        decision.raise_for_abort()
        await report_errors(decision, self.config.error_output, bridge, context.paths.sugar_path)
        return result, decision

    async def present(
        self,
        instruction: OutputInstruction,
        bridge: EditorBridge,
        base_url: str,
        anchor: RangeSpec,
    ) -> bool:
        """Deliver output that does not modify the document.

        Returns:
            True if the instruction was handled here
        """
        if isinstance(instruction, ShowTooltip):
            await bridge.show_tooltip(instruction.text, anchor)
        elif isinstance(instruction, LogOutput):
            logger.info("Script output", action=self.name, output=instruction.text)
        elif isinstance(instruction, ShowContent):
            if instruction.surface is Surface.HTML:
                await bridge.show_html(instruction.text, base_url)
            else:
                await bridge.show_console(instruction.text)
        elif isinstance(instruction, NoOutput):
            pass
        else:
            return False
        return True

    def skipped(self, count: int) -> ActionResult:
        logger.info("Selection count not supported by action", action=self.name, selections=count)
        return ActionResult(
            status=ActionStatus.SKIPPED,
            message=f"Action '{self.name}' does not accept {count} selection(s)",
            details={"selections": count},
        )
