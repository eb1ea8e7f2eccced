"""Error taxonomy for task operations and its mapping to transport responses."""

from enum import Enum

from pydantic import BaseModel

from src.core.config import constants


class ErrorCode:
    """Error codes for specific error conditions."""

    # Input errors
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"

    # Task errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_TERMINAL_STATE = "ERR_TERMINAL_STATE"
    ERR_INVALID_STATE_TRANSITION = "ERR_INVALID_STATE_TRANSITION"

    # Infrastructure errors
    ERR_STORAGE = "ERR_STORAGE"

    # Auth errors
    ERR_NOT_AUTHENTICATED = "ERR_NOT_AUTHENTICATED"
    ERR_INVALID_TOKEN = "ERR_INVALID_TOKEN"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TaskflowError(Exception):
    """Base class for every error raised by taskflow."""

    code: str = ErrorCode.ERR_UNKNOWN
    status_code: int = constants.HTTP_SERVER_ERROR
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InputValidationError(TaskflowError):
    """Malformed or missing input, rejected before reaching the service layer."""

    code = ErrorCode.ERR_INVALID_INPUT
    status_code = constants.HTTP_BAD_REQUEST
    severity = ErrorSeverity.LOW
    default_message = "Invalid input data"


class NotFoundError(TaskflowError):
    """Task is absent or owned by another user.

    Both cases share this error and its message so that non-owners cannot
    probe for the existence of other users' tasks.
    """

    code = ErrorCode.ERR_TASK_NOT_FOUND
    status_code = constants.HTTP_NOT_FOUND
    severity = ErrorSeverity.LOW
    default_message = "Task not found"


class TransitionError(TaskflowError):
    """A requested status change violates the task state machine."""

    code = ErrorCode.ERR_INVALID_STATE_TRANSITION
    status_code = constants.HTTP_BAD_REQUEST
    severity = ErrorSeverity.LOW


class TerminalStateError(TransitionError):
    """The task is COMPLETED or CANCELED and its status can no longer change."""

    code = ErrorCode.ERR_TERMINAL_STATE
    default_message = "Cannot change status of completed or canceled task"


class InvalidTransitionError(TransitionError):
    """The task is PENDING and the requested status is not a legal successor."""

    default_message = "Pending tasks can only be changed to completed or canceled"


class StorageError(TaskflowError):
    """Underlying persistence failure. Never retried."""

    code = ErrorCode.ERR_STORAGE
    severity = ErrorSeverity.HIGH
    default_message = "Storage operation failed"


class RecordNotFoundError(NotFoundError):
    """A store-level write by primary key matched no row."""


class AuthError(TaskflowError):
    """Credential problem reported by the auth provider."""

    code = ErrorCode.ERR_NOT_AUTHENTICATED
    status_code = constants.HTTP_UNAUTHORIZED
    default_message = "Not authenticated"


class InvalidTokenError(AuthError):
    """Token signature is wrong, the payload is malformed, or it has expired."""

    code = ErrorCode.ERR_INVALID_TOKEN
    default_message = "Invalid or expired token"


class ErrorResponse(BaseModel):
    """Structured error response."""

    code: str
    message: str
    status_code: int
    severity: ErrorSeverity


def error_response_for(exception: Exception) -> ErrorResponse:
    """Classify an exception and return the response it should produce.

    Known taskflow errors carry their own code, status and message.
    Transition errors keep the validator's literal message. Anything else
    becomes a generic 500 so internal details are not exposed.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message, HTTP status and severity
    """
    if isinstance(exception, TaskflowError):
        return ErrorResponse(
            code=exception.code,
            message=exception.message,
            status_code=exception.status_code,
            severity=exception.severity,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message=TaskflowError.default_message,
        status_code=constants.HTTP_SERVER_ERROR,
        severity=ErrorSeverity.MEDIUM,
    )
