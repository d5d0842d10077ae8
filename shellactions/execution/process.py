"""Locating and running action scripts."""

import asyncio
import os
from pathlib import Path
from typing import Mapping

import structlog

from ..exceptions import ScriptNotFound
from .context import InvocationResult

logger = structlog.get_logger(__name__)


def find_script(sugar_path: str, script: str, scripts_directory: str = "Scripts") -> Path:
    """Resolve a script name to an executable file.

    Args:
        sugar_path: Root of the sugar the action belongs to
        script: Script file name, or an absolute path
        scripts_directory: Folder inside the sugar holding scripts

    Returns:
        Absolute path to the script

    Raises:
        ScriptNotFound: If the file is missing, unreadable or not executable
    """
    candidate = Path(script)
    if not candidate.is_absolute():
        candidate = Path(sugar_path) / scripts_directory / script

    if not candidate.is_file():
        raise ScriptNotFound(script, f"not found at {candidate}")
    if not os.access(candidate, os.R_OK):
        raise ScriptNotFound(script, "is not readable")
    if not os.access(candidate, os.X_OK):
        raise ScriptNotFound(script, "is not executable")

    return candidate.resolve()


async def invoke_script(
    script_path: Path,
    environment: Mapping[str, str],
    input_bytes: bytes,
    encoding: str = "utf-8",
) -> InvocationResult:
    """Run a script to completion.

    Input is written while stdout and stderr are drained concurrently, so a
    script producing more output than the pipe buffers hold cannot deadlock.
    There is no timeout; if the awaiting task is cancelled the child is
    killed before the cancellation propagates.

    Args:
        script_path: Executable to run
        environment: Variables merged over the current process environment
        input_bytes: Contents of the script's STDIN

    Returns:
        Exit status and captured streams
    """
    env = {**os.environ, **environment}

    logger.info("Running script", script=str(script_path), input_bytes=len(input_bytes))

    try:
        process = await asyncio.create_subprocess_exec(
            str(script_path),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )
    except OSError as e:
        logger.error("Failed to start script", script=str(script_path), error=str(e))
        raise ScriptNotFound(str(script_path), f"could not be started: {e}") from e

    try:
        stdout, stderr = await process.communicate(input_bytes)
    except asyncio.CancelledError:
        logger.warning("Script cancelled, killing process", script=str(script_path), pid=process.pid)
        if process.returncode is None:
            process.kill()
        await process.wait()
        raise

    exit_status = process.returncode if process.returncode is not None else -1

    logger.info(
        "Script finished",
        script=str(script_path),
        exit_status=exit_status,
        stdout_bytes=len(stdout),
        stderr_bytes=len(stderr),
    )

    return InvocationResult(
        exit_status=exit_status,
        stdout=stdout,
        stderr=stderr,
        encoding=encoding,
    )
