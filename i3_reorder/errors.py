"""
Error types for i3-reorder.

Every failure carries a code, a message, an optional recovery suggestion and a
context dict with the ids involved, so a partially applied renumbering can be
diagnosed from the log alone.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """
    Error codes for i3-reorder.

    - 1000-1099: Request/intent errors
    - 1100-1199: Configuration errors
    - 1400-1499: i3/sway IPC errors
    - 1500-1599: Sequencing errors
    """

    # Request errors (1000-1099)
    CONFLICTING_INTENT = 1000
    MISSING_INTENT = 1001
    UNSUPPORTED_OPERATION = 1002

    # Configuration errors (1100-1199)
    CONFIG_LOAD_FAILED = 1100

    # IPC errors (1400-1499)
    IPC_UNREACHABLE = 1400
    COMMAND_FAILED = 1401

    # Sequencing errors (1500-1599)
    ID_COLLISION = 1500


class ReorderError(Exception):
    """Base exception for all i3-reorder errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize reorder error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging (ids, command text)
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def describe(self) -> str:
        """Single-line description including context, used by the CLI."""
        text = self.message
        if self.context:
            details = ", ".join(f"{key}={value}" for key, value in self.context.items())
            text = f"{text} ({details})"
        if self.suggestion:
            text = f"{text}. {self.suggestion}"
        return text


class IPCConnectionError(ReorderError, ConnectionError):
    """The i3/sway IPC socket could not be reached."""

    def __init__(self, reason: str, socket_path: Optional[str] = None):
        context = {"reason": reason}
        if socket_path:
            context["socket_path"] = socket_path

        super().__init__(
            code=ErrorCode.IPC_UNREACHABLE,
            message=f"Cannot reach i3/sway IPC: {reason}",
            suggestion="Ensure i3 or sway is running and its IPC socket is accessible",
            context=context
        )


class CommandError(ReorderError):
    """A single focus/move/rename command was rejected or could not be sent."""

    def __init__(
        self,
        operation: str,
        command: str,
        reason: str,
        ids: Optional[Dict[str, int]] = None
    ):
        """
        Initialize command error.

        Args:
            operation: Driver operation name ("focus", "move_focused_window", "rename")
            command: Exact command text sent to the window manager
            reason: Error reported by the window manager or the connection
            ids: Workspace ids involved in the command
        """
        context: Dict[str, Any] = {"operation": operation, "command": command}
        if ids:
            context.update(ids)

        super().__init__(
            code=ErrorCode.COMMAND_FAILED,
            message=f"Command '{command}' failed: {reason}",
            context=context
        )
        self.operation = operation
        self.command = command
        self.reason = reason


class InvalidIntentError(ReorderError, ValueError):
    """Conflicting or missing navigation flags."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFLICTING_INTENT):
        super().__init__(code=code, message=message)


class UnsupportedOperationError(ReorderError):
    """Operation the window manager offers through a primitive not modelled here."""

    def __init__(self, operation: str, suggestion: Optional[str] = None):
        super().__init__(
            code=ErrorCode.UNSUPPORTED_OPERATION,
            message=f"Unsupported operation: {operation}",
            suggestion=suggestion,
            context={"operation": operation}
        )


class SequencingError(ReorderError):
    """A planned rename would collide with, or refer to, a missing workspace id."""

    def __init__(self, message: str, old_id: int, new_id: int):
        super().__init__(
            code=ErrorCode.ID_COLLISION,
            message=message,
            context={"old_id": old_id, "new_id": new_id}
        )


class ConfigLoadError(ReorderError):
    """Configuration file could not be read or failed validation."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            code=ErrorCode.CONFIG_LOAD_FAILED,
            message=f"Failed to load configuration from {file_path}: {reason}",
            suggestion="Check file syntax and values",
            context={"file_path": file_path, "reason": reason}
        )
