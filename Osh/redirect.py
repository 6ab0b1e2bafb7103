import os

from config import OUTPUT_FILE_MODE, TRUNCATE_OUTPUT
from Osh.errors import RedirectionError
from Osh.parser import RedirectKind

STDIN_FILENO = 0
STDOUT_FILENO = 1


def open_redirect_target(redirect, truncate=None):
    """
    Open the file named by a redirect.
    Returns: (fd, target stream fd)
    """
    if truncate is None:
        truncate = TRUNCATE_OUTPUT
    path = os.path.expanduser(redirect.path)

    try:
        if redirect.kind is RedirectKind.OUTPUT:
            flags = os.O_WRONLY | os.O_CREAT
            if truncate:
                flags |= os.O_TRUNC
            return os.open(path, flags, OUTPUT_FILE_MODE), STDOUT_FILENO
        return os.open(path, os.O_RDONLY), STDIN_FILENO
    except OSError as e:
        raise RedirectionError(f"{redirect.path}: {e.strerror}") from e


def move_fd(fd, target):
    """Make `target` refer to the channel behind `fd`, then release `fd`.
    `target` stays open across exec."""
    if fd == target:
        # the stream was closed and the number was reused; os.open/os.pipe
        # descriptors are close-on-exec, so it must be marked inheritable
        os.set_inheritable(fd, True)
        return
    try:
        os.dup2(fd, target)
    finally:
        os.close(fd)


def apply_redirection(redirect, truncate=None):
    """Rewire stdin or stdout of the current process onto the redirect target.
    Only ever called in a freshly forked child."""
    fd, target = open_redirect_target(redirect, truncate)
    try:
        move_fd(fd, target)
    except OSError as e:
        raise RedirectionError(f"{redirect.path}: {e.strerror}") from e
