"""Per-invocation data passed between the execution stages."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..editor.document import RangeSpec, TextDocument


@dataclass(frozen=True)
class SelectionInfo:
    """Which selection of a batch is being processed."""

    index: int
    total: int
    range: RangeSpec

    @property
    def number(self) -> int:
        """1-based position, as exported to scripts."""
        return self.index + 1


@dataclass(frozen=True)
class ContextPaths:
    """Filesystem context supplied by the editor."""

    sugar_path: str
    directory_path: Optional[str] = None
    project_path: Optional[str] = None
    file_paths: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def single_file(self) -> Optional[str]:
        """The file in scope, if there is exactly one."""
        if len(self.file_paths) == 1:
            return self.file_paths[0]
        return None


@dataclass(frozen=True)
class ExecutionContext:
    """Snapshot for a single script invocation."""

    paths: ContextPaths
    document: Optional[TextDocument] = None
    selection: Optional[SelectionInfo] = None

    @property
    def is_text_action(self) -> bool:
        return self.document is not None


@dataclass(frozen=True)
class InvocationResult:
    """Exit status and captured streams of one script run."""

    exit_status: int
    stdout: bytes
    stderr: bytes
    encoding: str = "utf-8"

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode(self.encoding, errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode(self.encoding, errors="replace")
