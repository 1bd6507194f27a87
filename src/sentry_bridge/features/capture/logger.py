"""Error logger that routes host errors and unhandled exceptions to Sentry."""
import dataclasses
import sys
import traceback
import warnings
from types import TracebackType
from typing import Any, Callable, Dict, Optional, Type, TextIO

from sentry_bridge.core.logging import get_logger
from sentry_bridge.features.capture.client import SentryClient
from sentry_bridge.models.error import ErrorRecord


def _current_trace(skip: int = 2) -> list:
    """Frames of the caller's stack, innermost first."""
    frames = traceback.extract_stack()[:-skip]
    return [
        {"file": frame.filename, "line": frame.lineno, "function": frame.name}
        for frame in reversed(frames)
    ]


class SentryErrorLogger:
    """Forwards exceptions, runtime errors and warnings to a SentryClient.

    ``install()`` hooks ``sys.excepthook`` and ``warnings.showwarning``;
    the previous handlers still run after each capture.
    """

    def __init__(self, client: SentryClient) -> None:
        self.client = client
        self.logger = get_logger("error_logger")
        self._previous_excepthook: Optional[Callable[..., Any]] = None
        self._previous_showwarning: Optional[Callable[..., Any]] = None

    def log_exception(
        self,
        exception: BaseException,
        request: Any = None,
        include_trace: bool = False,
    ) -> Optional[str]:
        """Report an exception.

        Args:
            exception: The exception to report
            request: Request being served, if any
            include_trace: Attach the formatted traceback as extra data
        """
        extras: Dict[str, Any] = {}
        if include_trace and exception.__traceback__ is not None:
            extras["trace"] = "".join(traceback.format_tb(exception.__traceback__))
        return self.client.capture_exception(exception, request, extras)

    def log_error(
        self,
        error: ErrorRecord,
        request: Any = None,
        include_trace: bool = False,
    ) -> Optional[str]:
        """Report a runtime error.

        Args:
            error: The error to report
            request: Request being served, if any
            include_trace: Report the current stack if the error has no trace;
                the caller's record is left unchanged
        """
        if include_trace and not error.trace:
            error = dataclasses.replace(error, trace=_current_trace())
        return self.client.capture_error(error, request)

    def log_message(self, level: str, message: str, context: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """Report a plain log message as an error event at ``level``."""
        error = ErrorRecord(code=None, message=message, label=level)
        return self.client.capture_error(error, extras=context)

    def install(self) -> None:
        """Capture unhandled exceptions and warnings."""
        if self._previous_excepthook is not None:
            return
        self._previous_excepthook = sys.excepthook
        self._previous_showwarning = warnings.showwarning
        sys.excepthook = self._excepthook
        warnings.showwarning = self._showwarning
        self.logger.debug("error_logger_installed")

    def uninstall(self) -> None:
        """Restore the handlers replaced by ``install()``."""
        if self._previous_excepthook is None:
            return
        sys.excepthook = self._previous_excepthook
        warnings.showwarning = self._previous_showwarning
        self._previous_excepthook = None
        self._previous_showwarning = None
        self.logger.debug("error_logger_uninstalled")

    def _excepthook(
        self,
        exc_type: Type[BaseException],
        exc_value: BaseException,
        exc_tb: Optional[TracebackType],
    ) -> None:
        try:
            if not issubclass(exc_type, KeyboardInterrupt):
                self.log_exception(exc_value)
        finally:
            previous = self._previous_excepthook or sys.__excepthook__
            previous(exc_type, exc_value, exc_tb)

    def _showwarning(
        self,
        message: Any,
        category: Type[Warning],
        filename: str,
        lineno: int,
        file: Optional[TextIO] = None,
        line: Optional[str] = None,
    ) -> None:
        try:
            self.log_error(ErrorRecord.from_warning(message, category, filename, lineno))
        finally:
            if self._previous_showwarning is not None:
                self._previous_showwarning(message, category, filename, lineno, file, line)
