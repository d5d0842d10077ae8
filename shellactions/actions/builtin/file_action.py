"""Shell action run against the files selected in the project."""

import structlog

from ...config.settings import OutputMode
from ...editor.document import RangeSpec
from ...exceptions import ConfigurationError
from ...execution.context import ExecutionContext
from ...execution.input import select_file_input
from ...execution.output import route_output
from ..base import ActionContext, ActionResult, ActionStatus, ShellAction

logger = structlog.get_logger(__name__)

# Output modes that need a document to write into
_DOCUMENT_OUTPUTS = {OutputMode.INPUT, OutputMode.DOCUMENT, OutputMode.RANGE, OutputMode.TOOLTIP}


class ShellFileAction(ShellAction):
    """Runs a script once for the whole file selection."""

    async def can_handle(self, context: ActionContext) -> bool:
        count = len(context.paths.file_paths)
        return self.allows_selection_count(count, empty=count == 0)

    async def execute(self, context: ActionContext) -> ActionResult:
        paths = context.paths
        if self.config.output in _DOCUMENT_OUTPUTS:
            raise ConfigurationError(
                f"File action '{self.name}' cannot use output '{self.config.output.value}'"
            )

        if not await self.can_handle(context):
            return self.skipped(len(paths.file_paths))

        script = self.resolve_script(paths)
        execution = ExecutionContext(paths=paths)
        input_bytes = select_file_input(self.config.input, paths.file_paths, self.settings.encoding)

        logger.info(
            "Running file action",
            action=self.name,
            script=self.config.script,
            files=len(paths.file_paths),
        )

        result, decision = await self.run_once(script, execution, input_bytes, context.bridge)

        if decision.failed:
            logger.warning(
                "Ignoring output of failed script",
                action=self.name,
                exit_status=result.exit_status,
            )
        else:
            instruction = route_output(
                self.config.output,
                self.config.output_format,
                result.stdout_text,
                input_range=RangeSpec(0, 0),
                max_index=0,
            )
            await self.present(instruction, context.bridge, paths.sugar_path, RangeSpec(0, 0))

        return ActionResult(
            status=ActionStatus.SUCCESS,
            message=f"Ran {self.config.script} for {len(paths.file_paths)} file(s)",
            details={
                "script": str(script),
                "invocations": 1,
                "failed_invocations": int(decision.failed),
                "files": len(paths.file_paths),
            },
        )
