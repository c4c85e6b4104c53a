"""Exception hierarchy for restassured-gen.

All exceptions inherit from :class:`RestAssuredGenError`, which carries an
``exit_code`` the CLI uses when it aborts. The HTTP service maps
:class:`InvalidRequestError` to a 400 response.

    RestAssuredGenError   (exit 1)
    +-- InvalidRequestError (exit 2)
    +-- RequestFileError    (exit 3)
    +-- ToolchainError      (exit 4)
    +-- DependencyError     (exit 5)
"""


class RestAssuredGenError(Exception):
    """Base exception for all restassured-gen errors."""

    exit_code: int = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidRequestError(RestAssuredGenError):
    """Raised when a request description is missing required fields or is malformed."""

    exit_code = 2


class RequestFileError(RestAssuredGenError):
    """Raised when a request or collection file cannot be read or parsed."""

    exit_code = 3


class ToolchainError(RestAssuredGenError):
    """Raised when javac or java cannot be started."""

    exit_code = 4


class DependencyError(RestAssuredGenError):
    """Raised when the test classpath jars cannot be downloaded."""

    exit_code = 5
