"""Registry of shell actions available to the editor."""

import asyncio
import time
from typing import Any, Dict, List, Optional

import structlog

from ..config.settings import EngineSettings
from ..exceptions import ScriptNotFound, ShellActionError
from .base import ActionContext, ActionResult, ActionStatus, ShellAction

logger = structlog.get_logger(__name__)


class ActionRegistry:
    """Registry for shell actions, keyed by action name."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        """Initialize the action registry."""
        self._actions: Dict[str, ShellAction] = {}
        self._lock = asyncio.Lock()
        self.settings = settings or EngineSettings()

        logger.info("Initialized ActionRegistry")

    async def register(self, action: ShellAction) -> None:
        """Register a shell action.

        Args:
            action: Action instance to register
        """
        async with self._lock:
            if action.name in self._actions:
                logger.warning("Overriding existing action", action=action.name)

            self._actions[action.name] = action

            logger.info(
                "Registered action",
                action=action.name,
                script=action.config.script,
                description=action.description,
            )

    async def get(self, action_name: str) -> Optional[ShellAction]:
        async with self._lock:
            return self._actions.get(action_name)

    async def execute_action(
        self,
        action_name: str,
        context: ActionContext,
        timeout_seconds: Optional[float] = None,
    ) -> ActionResult:
        """Execute an action and report the outcome instead of raising.

        Args:
            action_name: Name of the action to execute
            context: Editor state for this run
            timeout_seconds: Maximum execution time; falls back to the
                configured action_timeout, and None waits indefinitely

        Returns:
            Result of action execution
        """
        start_time = time.time()
        if timeout_seconds is None:
            timeout_seconds = self.settings.action_timeout

        action = await self.get(action_name)
        if action is None:
            return ActionResult(
                status=ActionStatus.FAILED,
                message=f"Action '{action_name}' not found",
                details={"available_actions": list(self._actions.keys())},
                execution_time_seconds=time.time() - start_time,
            )

        logger.info("Executing action", action=action_name, timeout=timeout_seconds)

        try:
            if timeout_seconds is None:
                result = await action.execute(context)
            else:
                result = await asyncio.wait_for(action.execute(context), timeout=timeout_seconds)

            result.execution_time_seconds = time.time() - start_time

            logger.info(
                "Action execution completed",
                action=action_name,
                status=result.status.value,
                execution_time=result.execution_time_seconds,
            )

            return result

        except asyncio.TimeoutError:
            execution_time = time.time() - start_time
            logger.error(
                "Action execution timed out",
                action=action_name,
                timeout=timeout_seconds,
                execution_time=execution_time,
            )

            return ActionResult(
                status=ActionStatus.TIMEOUT,
                message=f"Action '{action_name}' timed out after {timeout_seconds}s",
                details={"timeout_seconds": timeout_seconds},
                execution_time_seconds=execution_time,
            )

        except ShellActionError as e:
            execution_time = time.time() - start_time
            logger.error(
                "Action execution failed",
                action=action_name,
                error=str(e),
                error_type=type(e).__name__,
                execution_time=execution_time,
            )

            details: Dict[str, Any] = {"error": str(e), "error_type": type(e).__name__}
            if isinstance(e, ScriptNotFound):
                details["script"] = e.script

            return ActionResult(
                status=ActionStatus.FAILED,
                message=f"Action '{action_name}' failed: {e}",
                details=details,
                execution_time_seconds=execution_time,
            )

    async def list_actions(self) -> List[Dict[str, str]]:
        """List all registered actions.

        Returns:
            List of action info dictionaries
        """
        async with self._lock:
            return [
                {
                    "name": name,
                    "script": action.config.script,
                    "description": action.description,
                }
                for name, action in self._actions.items()
            ]

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "registered_actions": len(self._actions),
            "action_names": list(self._actions.keys()),
        }
