"""Execution stages: environment, input, process, output and error handling."""

from .context import ContextPaths, ExecutionContext, InvocationResult, SelectionInfo
from .environment import build_environment
from .errors import ErrorDecision, ErrorOutcome, evaluate_result, report_errors
from .input import replacement_range, select_file_input, select_input
from .output import OutputInstruction, route_output
from .process import find_script, invoke_script
from .ranges import clamp_range, format_ranges, parse_ranges

__all__ = [
    "ContextPaths",
    "ErrorDecision",
    "ErrorOutcome",
    "ExecutionContext",
    "InvocationResult",
    "OutputInstruction",
    "SelectionInfo",
    "build_environment",
    "clamp_range",
    "evaluate_result",
    "find_script",
    "format_ranges",
    "invoke_script",
    "parse_ranges",
    "replacement_range",
    "report_errors",
    "route_output",
    "select_file_input",
    "select_input",
]
