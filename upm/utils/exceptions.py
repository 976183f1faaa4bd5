"""Custom exceptions for upm.

Provides a hierarchy of exceptions for consistent error handling.
"""


class UpmError(Exception):
    """Base exception for upm.

    All custom exceptions should inherit from this class.
    """
    pass


class ConfigError(UpmError):
    """Error in configuration.

    Raised when the workspace is missing or config.yaml cannot be loaded.
    """
    pass


class TaskNotFoundError(UpmError):
    """Raised when a task id does not match any stored task."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class PlanNotFoundError(UpmError):
    """Raised when a plan id does not match any stored plan."""

    def __init__(self, plan_id: str):
        self.plan_id = plan_id
        super().__init__(f"Plan {plan_id} not found")


class ValidationFailedError(UpmError):
    """Validation reported one or more errors."""
    pass


class ManifestError(UpmError):
    """Error while generating or writing deployment manifests."""
    pass


class FileOperationError(UpmError):
    """Error in file operations.

    Raised when file read/write operations fail.
    """
    pass
