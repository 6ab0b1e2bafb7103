"""Exception types for osh.

FatalError ends the interpreter, CommandError only the current line.
ChildError is raised inside a forked child and never crosses back into
the interpreter.
"""

from config import EXEC_FAILURE_STATUS, REDIRECT_FAILURE_STATUS


class OshError(Exception):
    """Base exception for osh."""


class FatalError(OshError):
    """The host environment can no longer support the interpreter."""


class InputError(FatalError):
    """Reading the next line failed."""


class ProcessCreationError(FatalError):
    """fork() or pipe() failed."""


class CommandError(OshError):
    """The line cannot be run; report and re-prompt."""


class NoHistoryError(CommandError):
    """Recall was requested before any command was entered."""

    def __init__(self, message="No commands in history."):
        super().__init__(message)


class MalformedCommandError(CommandError):
    """Operators in a position the interpreter does not accept."""


class ChildError(OshError):
    """Failure inside a child before its program image was replaced."""

    status = 1


class RedirectionError(ChildError):
    """The redirection target could not be opened."""

    status = REDIRECT_FAILURE_STATUS


class ExecError(ChildError):
    """execvp() failed."""

    def __init__(self, message, status=EXEC_FAILURE_STATUS):
        super().__init__(message)
        self.status = status
