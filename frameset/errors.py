"""
Error handling for frameset save and restore.

Structured error codes, grouped by the stage that raises them:
- 1000-1099: Document validation errors
- 1100-1199: Minibuffer dependency errors
- 1200-1299: Filter rule errors
- 1300-1399: Windowing host errors
- 1400-1499: Storage errors
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """Error codes for frameset operations."""

    # Document validation errors (1000-1099)
    INVALID_FRAMESET = 1000
    UNSUPPORTED_VERSION = 1001
    EMPTY_FRAMESET = 1002

    # Minibuffer dependency errors (1100-1199)
    MINIBUFFER_FRAME_NOT_SAVED = 1100
    MINIBUFFER_FRAME_NOT_FOUND = 1101
    NOT_A_MINIBUFFER_WINDOW = 1102

    # Filter rule errors (1200-1299)
    UNKNOWN_FILTER = 1200

    # Windowing host errors (1300-1399)
    HOST_OPERATION_FAILED = 1300
    FRAME_NOT_LIVE = 1301
    FRAME_CREATE_FAILED = 1302
    FRAME_DELETE_FAILED = 1303

    # Storage errors (1400-1499)
    FRAMESET_NOT_FOUND = 1400
    FRAMESET_READ_ERROR = 1401


class FramesetError(Exception):
    """Base exception for frameset errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize frameset error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for reports and JSON output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = {k: str(v) for k, v in self.context.items()}

        return result


class FramesetValidationError(FramesetError):
    """A value does not have the shape of a frameset document."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_FRAMESET):
        super().__init__(
            code=code,
            message=message,
            suggestion="Re-save the frameset with a current version",
        )


class DependencyError(FramesetError):
    """A frame's minibuffer provider is missing or unusable."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.MINIBUFFER_FRAME_NOT_SAVED,
        context: Optional[Dict[str, Any]] = None
    ):
        suggestion = None
        if code == ErrorCode.MINIBUFFER_FRAME_NOT_SAVED:
            suggestion = "Include the minibuffer frame in the set of frames to save"
        super().__init__(code=code, message=message, suggestion=suggestion, context=context)


class RuleError(FramesetError):
    """A filter table names an action the engine does not know."""

    def __init__(self, name: str, rule: Any):
        """
        Initialize rule error.

        Args:
            name: Attribute name the rule is attached to
            rule: The unrecognized rule value
        """
        super().__init__(
            code=ErrorCode.UNKNOWN_FILTER,
            message=f"Unknown filter {rule!r} for parameter {name}",
            suggestion="Use a FilterAction or a CustomFilter",
            context={"parameter": name, "rule": rule}
        )


class HostOperationError(FramesetError):
    """A call into the windowing host failed."""

    def __init__(
        self,
        operation: str,
        reason: str,
        code: ErrorCode = ErrorCode.HOST_OPERATION_FAILED
    ):
        """
        Initialize host error.

        Args:
            operation: Host operation that failed (e.g., "make_frame")
            reason: Reason for failure
            code: More specific error code
        """
        super().__init__(
            code=code,
            message=f"Host {operation} failed: {reason}",
            suggestion="Check that the windowing host is running and the frame is live",
            context={"operation": operation, "reason": reason}
        )


class FramesetNotFoundError(FramesetError):
    """No stored frameset under the requested name."""

    def __init__(self, name: str, path: str):
        super().__init__(
            code=ErrorCode.FRAMESET_NOT_FOUND,
            message=f"Frameset not found: {name}",
            suggestion="List stored framesets with: frameset list",
            context={"name": name, "file_path": path}
        )
