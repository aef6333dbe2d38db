"""Exception types shared by the application and the admin tools."""


class ConfigurationError(RuntimeError):
    """Raised when required configuration such as DATABASE_URL is missing."""


class TaskFailed(RuntimeError):
    """Raised by an admin task for an expected failure that must exit non-zero."""
