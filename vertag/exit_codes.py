"""
Standard exit codes and error types for vertag commands.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors (also: user aborted a prompt)
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Module/channel validation error
REPOSITORY_ERROR = 72    # git could not list tags, read HEAD, or write a tag
COMMIT_NOT_FOUND = 73    # Commit reference did not resolve
DUPLICATE_TAG = 74       # Tag name already exists
EMPTY_SELECTION = 75     # Multi-select confirmed with nothing chosen
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': CONFIG_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ValidationError(CommandError):
    """Raised when a module or channel name contains reserved characters."""
    def __init__(self, message: str):
        super().__init__(message, DATA_ERROR)


class RepositoryAccessError(CommandError):
    """Raised when the repository cannot be read or written."""
    def __init__(self, message: str):
        super().__init__(message, REPOSITORY_ERROR)


class CommitNotFound(CommandError):
    """Raised when a commit reference does not resolve to an existing commit."""
    def __init__(self, ref: str, message: Optional[str] = None):
        super().__init__(message or f"Commit not found: {ref}", COMMIT_NOT_FOUND)
        self.ref = ref


class DuplicateTagError(CommandError):
    """Raised when the tag to create already exists."""
    def __init__(self, tag_name: str):
        super().__init__(f"Tag already exists: {tag_name}", DUPLICATE_TAG)
        self.tag_name = tag_name


class EmptySelectionError(CommandError):
    """Raised when a multi-selection is confirmed with nothing chosen."""
    def __init__(self, message: str = "Select at least one item before confirming"):
        super().__init__(message, EMPTY_SELECTION)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class AbortedError(CommandError):
    """Raised when the user cancels a prompt or declines a confirmation."""
    def __init__(self, message: str = "Aborted."):
        super().__init__(message, GENERAL_ERROR)
