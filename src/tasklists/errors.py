"""Error types raised by resolvers, the auth layer and the data store gateway."""


class TaskListsError(Exception):
    """Base class for application errors."""

    pass


class AuthenticationRequired(TaskListsError):
    """Raised when a protected operation runs without an authenticated user."""

    def __init__(self, message: str = "Authentication error"):
        super().__init__(message)


class InvalidCredentials(TaskListsError):
    """Raised when sign-in email or password do not match."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class NotFound(TaskListsError):
    """Raised when an operation addresses a document that does not exist."""

    pass


class MalformedInput(TaskListsError):
    """Raised for unparseable identifiers or blank required fields."""

    pass


class EmailAlreadyInUse(TaskListsError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(f"Email already in use: {email}")
        self.email = email


class UpstreamUnavailable(TaskListsError):
    """Raised when the document store cannot be reached."""

    pass


class ConfigurationError(TaskListsError):
    """Raised at startup when required configuration is missing."""

    pass
