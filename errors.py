# Exception hierarchy shared by the task engine, sessions and the gateway


class MirrorError(Exception):
    """Base class for every error raised by the mirror service."""


# --- Task Execution ---
class TaskExecutionError(MirrorError):
    """A task could not be executed. `kind` names the failing step."""
    kind = "task_execution"

    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class PathExtractionError(TaskExecutionError):
    kind = "path_extraction"


class DirectoryCreationError(TaskExecutionError):
    kind = "directory_creation"


class FileWriteError(TaskExecutionError):
    kind = "file_write"


class FileCopyError(TaskExecutionError):
    kind = "file_copy"


# --- Task Deserialization ---
NO_TASK_TYPE = "no_task_type"
UNKNOWN_TASK_TYPE = "unknown_task_type"
MISSING_FIELD = "missing_field"
INVALID_FIELD = "invalid_field"


class TaskDeserializationError(MirrorError):
    """A task payload could not be turned into a Task."""

    def __init__(self, message, reason):
        super().__init__(message)
        self.reason = reason


# --- Shared State ---
class SessionError(MirrorError):
    pass


class SessionAlreadyActiveError(SessionError):
    pass


class SessionNotActiveError(SessionError):
    pass


class LockFailureError(MirrorError):
    """Shared state could not be locked in time."""
