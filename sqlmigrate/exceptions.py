from typing import Any, Optional

__all__ = (
    "ConflictingFlagsError",
    "EngineError",
    "ImproperConfigurationError",
    "InvalidInputError",
    "MalformedMigrationNameError",
    "MigrationFileError",
    "MissingDependencyError",
    "NoChangeError",
    "NonNumericArgumentError",
    "NonNumericTokenError",
    "NonPositiveSequenceError",
    "SQLMigrateError",
    "SequenceOverflowError",
    "TooManyArgumentsError",
)


class SQLMigrateError(Exception):
    """Base exception class from which all sqlmigrate exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLMigrateError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(SQLMigrateError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install sqlmigrate[{install_package or package}]' to install sqlmigrate with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class ImproperConfigurationError(SQLMigrateError):
    """Improper Configuration error.

    Raised when a command needs a collaborator (such as a migration engine) that was not configured.
    """


# -- Input Errors --
class InvalidInputError(SQLMigrateError, ValueError):
    """Base class for rejected user input."""


class MalformedMigrationNameError(InvalidInputError):
    """An existing migration filename does not have the ``prefix_name`` shape."""

    path: str

    def __init__(self, path: str) -> None:
        super().__init__(f"Malformed migration filename: {path}")
        self.path = path


class NonNumericTokenError(InvalidInputError):
    """The sequence token of an existing migration filename is not an integer."""

    token: str
    path: Optional[str]

    def __init__(self, token: str, path: Optional[str] = None) -> None:
        message = f"Invalid sequence number {token!r}"
        if path:
            message = f"{message} in migration filename: {path}"
        super().__init__(message)
        self.token = token
        self.path = path


class NonPositiveSequenceError(InvalidInputError):
    """The computed sequence number is zero or negative."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Next sequence number must be positive"
        super().__init__(message)


class SequenceOverflowError(InvalidInputError):
    """The computed sequence number needs more digits than allowed."""

    value: int
    digits: int

    def __init__(self, value: int, digits: int) -> None:
        super().__init__(f"Next sequence number {value} too large. At most {digits} digits are allowed")
        self.value = value
        self.digits = digits


class ConflictingFlagsError(InvalidInputError):
    """Mutually exclusive options were combined."""


class NonNumericArgumentError(InvalidInputError):
    """A command argument that must be an integer could not be parsed."""

    argument: str

    def __init__(self, message: str, argument: str = "") -> None:
        super().__init__(message)
        self.argument = argument


class TooManyArgumentsError(InvalidInputError):
    """A command received more positional arguments than it accepts."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "too many arguments"
        super().__init__(message)


# -- Filesystem Errors --
class MigrationFileError(SQLMigrateError):
    """A migration file or directory could not be created."""

    path: str

    def __init__(self, path: str, reason: Any = None) -> None:
        message = f"Could not create {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


# -- Engine Errors --
class EngineError(SQLMigrateError):
    """Base class engines may use for their own failures."""


class NoChangeError(SQLMigrateError):
    """Raised by an engine when the requested state is already reached."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "no change"
        super().__init__(message)
