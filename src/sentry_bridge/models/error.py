"""Data models for non-exception runtime errors."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from sentry_bridge.constants import ERROR_LEVELS


@dataclass
class ErrorRecord:
    """A runtime error that is reported without an exception object.

    Hosts build these from warnings, deprecation notices or their own
    error handlers.

    Attributes:
        code: Numeric or symbolic error code from the host
        message: Human-readable error message
        file: Source file the error was raised from
        line: Line number in ``file``
        label: Severity label ('fatal', 'error', 'warning', 'notice', 'deprecated', ...)
        trace: Stack frames, innermost first, each with 'file', 'line' and
            optionally 'function'
    """
    code: Any
    message: str
    file: Optional[str] = None
    line: Optional[int] = None
    label: str = "error"
    trace: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def level(self) -> str:
        """Sentry level for this error's label."""
        return ERROR_LEVELS.get(self.label.lower(), "error")

    @classmethod
    def from_warning(
        cls,
        message: Any,
        category: Type[Warning],
        filename: str,
        lineno: int,
    ) -> "ErrorRecord":
        """Build a record from ``warnings.showwarning`` arguments."""
        if issubclass(category, (DeprecationWarning, PendingDeprecationWarning, FutureWarning)):
            label = "deprecated"
        else:
            label = "warning"
        return cls(
            code=category.__name__,
            message=str(message),
            file=filename,
            line=lineno,
            label=label,
        )

    def to_stacktrace(self) -> Dict[str, Any]:
        """Render the trace (or the error location) as a Sentry stacktrace."""
        frames = []
        for frame in self.trace:
            frames.append({
                "filename": frame.get("file"),
                "lineno": frame.get("line"),
                "function": frame.get("function", "<unknown>"),
            })
        if not frames and self.file:
            frames.append({"filename": self.file, "lineno": self.line, "function": "<unknown>"})
        # Sentry expects the innermost frame last
        frames.reverse()
        return {"frames": frames}

    def __str__(self) -> str:
        location = f" in {self.file} on line {self.line}" if self.file else ""
        return f"{self.label.capitalize()} ({self.code}): {self.message}{location}"
