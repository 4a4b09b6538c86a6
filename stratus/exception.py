# Copyright Stratus Labs 2026
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .serverless import ServerlessOutput


class Error(Exception):
    """
    Base class for all Stratus errors.

    **Usage**

    ```python notest
    import stratus

    try:
        ...
    except stratus.Error:
        # Catch any exception raised by the Stratus client.
        print("Responding to error...")
    ```
    """


class InvalidError(Error):
    """Raised when user does something invalid."""


class MissingArgumentsError(InvalidError):
    """Raised when a command is invoked without its required positional arguments."""


class TooManyArgumentsError(InvalidError):
    """Raised when a command is invoked with more positional arguments than it accepts."""


class UnsupportedLanguageError(InvalidError):
    """Raised when a language keyword does not select a supported runtime."""


class PathConflictError(InvalidError):
    """Raised when a project directory already exists and may not be replaced."""


class InternalError(Error):
    """Raised when an internal invariant of the client is violated."""


class AuthError(Error):
    """Raised when a client has missing or invalid credentials."""


class ServerlessNotInstalledError(Error):
    """Raised when the serverless plugin can't be found on this machine."""


class RemoteError(Error):
    """Raised when an error occurs on the remote platform."""


class BackendError(RemoteError):
    """Raised when an invocation of the serverless plugin fails.

    `output` holds whatever the plugin managed to report before failing. Its
    `captured` transcript is often needed to interpret the error.
    """

    def __init__(self, message: str, output: Optional["ServerlessOutput"] = None):
        super().__init__(message)
        if output is None:
            from .serverless import ServerlessOutput

            output = ServerlessOutput()
        self.output = output
