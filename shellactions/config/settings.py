"""Configuration models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InputMode(str, Enum):
    """What the script receives on STDIN."""

    SELECTION = "selection"
    DOCUMENT = "document"
    NOTHING = "nothing"


class AlternateMode(str, Enum):
    """Fallback input when the selection is empty."""

    DOCUMENT = "document"
    LINE = "line"
    WORD = "word"
    CHARACTER = "character"


class OutputMode(str, Enum):
    """Where the script's STDOUT goes."""

    INPUT = "input"
    DOCUMENT = "document"
    RANGE = "range"
    TOOLTIP = "tooltip"
    LOG = "log"
    HTML = "html"
    CONSOLE = "console"
    NOTHING = "nothing"


class OutputFormat(str, Enum):
    """How replacement output is inserted."""

    TEXT = "text"
    SNIPPET = "snippet"


class ErrorOutput(str, Enum):
    """Where STDERR goes when errors are suppressed."""

    LOG = "log"
    CONSOLE = "console"
    HTML = "html"
    SHEET = "sheet"


class ActionConfig(BaseModel):
    """Declarative description of a single shell action."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    script: str = Field(
        min_length=1,
        description="Name of the script inside the sugar's Scripts folder"
    )
    allow_multiple_selections: bool = Field(
        default=True,
        alias="multiple-selections",
        description="Whether the script can handle multiple selections"
    )
    allow_single_selection: bool = Field(
        default=True,
        alias="single-selection",
        description="Whether the script can handle a single selection"
    )
    allow_empty_selection: bool = Field(
        default=True,
        alias="empty-selection",
        description="Whether the script can handle an empty selection"
    )
    suppress_errors: bool = Field(
        default=True,
        alias="suppress-errors",
        description="Route STDERR to error_output instead of failing"
    )
    error_output: ErrorOutput = Field(
        default=ErrorOutput.LOG,
        alias="error-output",
        description="Channel for STDERR when errors are suppressed"
    )
    input: InputMode = Field(
        default=InputMode.SELECTION,
        description="Contents of STDIN"
    )
    alternate: Optional[AlternateMode] = Field(
        default=None,
        description="Fallback input for an empty selection"
    )
    output: OutputMode = Field(
        default=OutputMode.INPUT,
        description="What the script's STDOUT represents"
    )
    output_format: OutputFormat = Field(
        default=OutputFormat.TEXT,
        alias="output-format",
        description="Insertion format for replacement output"
    )
    config: Dict[str, str] = Field(
        default_factory=dict,
        description="Script-specific options exported as CONFIG_ variables"
    )

    @field_validator("config", mode="before")
    @classmethod
    def stringify_config(cls, value):
        """Accept YAML scalars for option values; the environment only holds strings."""
        if not isinstance(value, dict):
            return value
        converted = {}
        for key, item in value.items():
            if isinstance(item, bool):
                item = "true" if item else "false"
            elif isinstance(item, (int, float)):
                item = str(item)
            converted[key] = item
        return converted


def load_action_config(path: Path) -> ActionConfig:
    """Load an action definition from a YAML file.

    Args:
        path: YAML file whose top level is the action's setup mapping

    Returns:
        Validated action configuration
    """
    with open(path, "rt", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return ActionConfig.model_validate(data)


class EngineSettings(BaseSettings):
    """Global engine configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="SHELLACTIONS_",
        case_sensitive=False,
        validate_assignment=True,
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log format (json, plain)"
    )

    # Script resolution
    scripts_directory: str = Field(
        default="Scripts",
        min_length=1,
        description="Folder inside the sugar that holds action scripts"
    )

    # Action execution configuration
    action_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds before an action is cancelled (None waits forever)"
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding for script input and output"
    )
