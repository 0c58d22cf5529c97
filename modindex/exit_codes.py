"""
Standard exit codes for modindex commands.

Following Unix/POSIX conventions for command-line tools.
"""
from .errors import (
    CancelledError,
    InconsistencyError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
)

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NOT_FOUND = 64           # Lookup matched nothing
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Data format or invariant error
STORAGE_ERROR = 74       # Database could not be read
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT) or cancelled

# Exit code mappings for common exceptions, most specific first
EXCEPTION_EXIT_CODES = (
    (CancelledError, INTERRUPTED),
    (KeyboardInterrupt, INTERRUPTED),
    (InvalidArgumentError, USAGE_ERROR),
    (NotFoundError, NOT_FOUND),
    (InconsistencyError, DATA_ERROR),
    (StorageError, STORAGE_ERROR),
    (PermissionError, STORAGE_ERROR),
    (FileNotFoundError, STORAGE_ERROR),
)


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    for exc_type, code in EXCEPTION_EXIT_CODES:
        if isinstance(exc, exc_type):
            return code
    return GENERAL_ERROR


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
