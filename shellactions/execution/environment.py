"""Environment variables exported to action scripts.

The variable names are a compatibility surface: existing scripts read them
verbatim, so they must never be renamed.
"""

import os
from typing import Dict

import structlog

from ..config.settings import ActionConfig
from ..exceptions import ConfigurationError
from .context import ExecutionContext

logger = structlog.get_logger(__name__)

CONFIG_PREFIX = "CONFIG_"


def build_environment(config: ActionConfig, context: ExecutionContext) -> Dict[str, str]:
    """Build the variables for one invocation.

    Args:
        config: Action being run
        context: Snapshot for this invocation

    Returns:
        Mapping of variable name to value, to be merged over os.environ

    Raises:
        ConfigurationError: If the context lacks fields the action needs
    """
    paths = context.paths
    if not paths.sugar_path:
        raise ConfigurationError("Sugar path is required to run a shell action")

    single_file = paths.single_file
    directory = paths.directory_path
    if not directory and single_file:
        directory = os.path.dirname(single_file)
    if not directory:
        directory = paths.project_path or ""

    env = {
        "EDITOR_SUGAR_PATH": paths.sugar_path,
        "EDITOR_DIRECTORY_PATH": directory,
        "EDITOR_PROJECT_PATH": paths.project_path or "",
    }

    if single_file:
        env["EDITOR_PATH"] = single_file
        env["EDITOR_FILENAME"] = os.path.basename(single_file)

    if context.is_text_action:
        env.update(_text_variables(context))

    for key, value in config.config.items():
        env[f"{CONFIG_PREFIX}{key}"] = value

    logger.debug("Built script environment", script=config.script, variables=sorted(env))
    return env


def _text_variables(context: ExecutionContext) -> Dict[str, str]:
    document = context.document
    selection = context.selection
    if document is None or selection is None:
        raise ConfigurationError("Text actions require selection metadata")

    cursor = selection.range.offset
    return {
        "EDITOR_CURRENT_WORD": document.substring(document.word_range_at(cursor)),
        "EDITOR_CURRENT_LINE": document.substring(document.line_range_at(cursor)),
        "EDITOR_LINE_INDEX": str(document.line_index_at(cursor)),
        "EDITOR_LINE_NUMBER": str(document.line_number_at(cursor)),
        "EDITOR_TAB_STRING": document.tab_string,
        "EDITOR_LINE_ENDING_STRING": document.line_ending,
        "EDITOR_ROOT_ZONE": document.root_zone,
        "EDITOR_ACTIVE_ZONE": document.active_zone,
        "EDITOR_SELECTIONS_TOTAL": str(selection.total),
        "EDITOR_SELECTION_NUMBER": str(selection.number),
        "EDITOR_SELECTION_RANGE": str(selection.range),
    }
