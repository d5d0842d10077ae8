"""Decide whether a script's failure aborts the batch, and report STDERR."""

from dataclasses import dataclass
from enum import Enum
from typing import assert_never

import structlog

from ..config.settings import ErrorOutput
from ..editor.bridge import EditorBridge
from ..exceptions import ProcessFailure
from .context import InvocationResult

logger = structlog.get_logger(__name__)


class ErrorOutcome(Enum):
    CONTINUE = "continue"
    ABORT = "abort"


@dataclass(frozen=True)
class ErrorDecision:
    """Outcome of checking one invocation for errors."""

    outcome: ErrorOutcome
    exit_status: int
    stderr: str

    @property
    def failed(self) -> bool:
        return self.exit_status != 0

    def raise_for_abort(self) -> None:
        if self.outcome is ErrorOutcome.ABORT:
            raise ProcessFailure(self.exit_status, self.stderr)


def evaluate_result(result: InvocationResult, suppress_errors: bool) -> ErrorDecision:
    """Apply the suppress-errors policy to an invocation result.

    Without suppression a nonzero exit or any STDERR output aborts; with
    suppression the batch always continues.
    """
    stderr = result.stderr_text
    has_error = not result.succeeded or bool(result.stderr)

    if has_error and not suppress_errors:
        outcome = ErrorOutcome.ABORT
    else:
        outcome = ErrorOutcome.CONTINUE

    return ErrorDecision(outcome=outcome, exit_status=result.exit_status, stderr=stderr)


async def report_errors(
    decision: ErrorDecision,
    channel: ErrorOutput,
    bridge: EditorBridge,
    base_url: str = "",
) -> None:
    """Send suppressed STDERR to its configured channel."""
    if not decision.stderr:
        if decision.failed:
            logger.warning("Script failed without error output", exit_status=decision.exit_status)
        return

    if channel is ErrorOutput.LOG:
        logger.warning(
            "Script error output",
            exit_status=decision.exit_status,
            stderr=decision.stderr,
        )
    elif channel is ErrorOutput.CONSOLE:
        await bridge.show_console(decision.stderr)
    elif channel is ErrorOutput.HTML:
        await bridge.show_html(decision.stderr, base_url)
    elif channel is ErrorOutput.SHEET:
        await bridge.show_sheet(decision.stderr)
    else:
        assert_never(channel)
