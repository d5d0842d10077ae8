"""Error kinds raised by the action engine."""


class ShellActionError(Exception):
    """Base class for all shell action errors."""


class ScriptNotFound(ShellActionError):
    """Script file is missing, unreadable or cannot be executed."""

    def __init__(self, script: str, reason: str = "not found") -> None:
        self.script = script
        self.reason = reason
        super().__init__(f"Script '{script}' {reason}")


class ConfigurationError(ShellActionError):
    """Context required by the configured mode is missing."""


class ProcessFailure(ShellActionError):
    """Script exited nonzero or wrote to stderr while errors are not suppressed."""

    def __init__(self, exit_status: int, stderr: str) -> None:
        self.exit_status = exit_status
        self.stderr = stderr
        message = stderr.strip() or f"Script exited with status {exit_status}"
        super().__init__(message)


class ParseFailure(ShellActionError):
    """Script output could not be parsed as a range list."""

    def __init__(self, token: str, text: str) -> None:
        self.token = token
        self.text = text
        super().__init__(f"Malformed range '{token}' in script output")
