"""Configuration management with Pydantic models."""

from .settings import (
    ActionConfig,
    AlternateMode,
    EngineSettings,
    ErrorOutput,
    InputMode,
    OutputFormat,
    OutputMode,
    load_action_config,
)

__all__ = [
    "ActionConfig",
    "AlternateMode",
    "EngineSettings",
    "ErrorOutput",
    "InputMode",
    "OutputFormat",
    "OutputMode",
    "load_action_config",
]
