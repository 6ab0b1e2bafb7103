import contextlib
import functools
import os
import signal
import sys
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from config import EXEC_NOT_FOUND_STATUS
from Osh.errors import ChildError, ExecError, ProcessCreationError
from Osh.redirect import STDIN_FILENO, STDOUT_FILENO, apply_redirection, move_fd


@dataclass
class ChildDescriptor:
    """A spawned child and whether the interpreter waits on it."""

    pid: int
    argv: list
    background: bool = False
    status: Optional[int] = None

    @property
    def reaped(self):
        return self.status is not None


def _report(message):
    # Raw write: the child must not touch the interpreter's buffered streams
    with contextlib.suppress(OSError):
        os.write(2, message.encode(errors="replace"))


def _fork():
    # Anything still buffered would otherwise be written twice
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        return os.fork()
    except OSError as e:
        raise ProcessCreationError(f"fork: {e.strerror}") from e


def _execvp(argv):
    try:
        os.execvp(argv[0], argv)
    except FileNotFoundError as e:
        raise ExecError(f"{argv[0]}: command not found", EXEC_NOT_FOUND_STATUS) from e
    except OSError as e:
        raise ExecError(f"{argv[0]}: {e.strerror}") from e


def _exec_child(argv, prepare=None):
    """
    Body of a freshly forked child: rewire streams, then replace the image.
    Never returns.
    """
    status = 1
    try:
        signal.signal(signal.SIGINT, signal.SIG_DFL)
        if prepare is not None:
            prepare()
        _execvp(argv)
    except ChildError as e:
        _report(f"osh: {e}\n")
        status = e.status
    except BaseException as e:
        # Nothing may unwind back into the interpreter's loop from here
        _report(f"osh: {argv[0]}: {e}\n")
    finally:
        os._exit(status)


def spawn(argv, background=False, prepare=None):
    """
    Fork a child that runs `prepare` and then execs argv.
    Returns: ChildDescriptor (parent only)
    """
    pid = _fork()
    if pid == 0:
        _exec_child(argv, prepare)
    logger.debug("spawned pid={} argv={} background={}", pid, argv, background)
    return ChildDescriptor(pid, list(argv), background)


def wait_for(child):
    """Block until the child terminates and record its exit status."""
    while True:
        try:
            _, status = os.waitpid(child.pid, 0)
            break
        except KeyboardInterrupt:
            # Ctrl+C reached the foreground child as well; keep waiting for it
            continue
        except ChildProcessError:
            logger.debug("pid={} already reaped", child.pid)
            return None

    child.status = os.waitstatus_to_exitcode(status)
    logger.debug("pid={} exited status={}", child.pid, child.status)
    return child.status


def reap_if_done(child):
    """Collect the child's status if it has already exited, without blocking."""
    try:
        pid, status = os.waitpid(child.pid, os.WNOHANG)
    except ChildProcessError:
        return None
    if pid == 0:
        return None
    child.status = os.waitstatus_to_exitcode(status)
    return child.status


def _announce(child):
    print(f"[{child.pid}] started in background")
    logger.info("background pid={} argv={}", child.pid, child.argv)


def run_single(command, background=False):
    """
    Run one command in one child.
    Returns: ChildDescriptor
    """
    prepare = None
    if command.redirect is not None:
        prepare = functools.partial(apply_redirection, command.redirect)

    child = spawn(command.argv, background, prepare)
    if background:
        _announce(child)
    else:
        wait_for(child)
    return child


def run_pipeline(left, right, background=False):
    """
    Run "left | right" as two children joined by one pipe.
    Returns: (first ChildDescriptor, second ChildDescriptor)
    """
    try:
        read_fd, write_fd = os.pipe()
    except OSError as e:
        raise ProcessCreationError(f"pipe: {e.strerror}") from e

    def writer_end():
        os.close(read_fd)
        move_fd(write_fd, STDOUT_FILENO)

    def reader_end():
        os.close(write_fd)
        move_fd(read_fd, STDIN_FILENO)

    try:
        first = spawn(left.argv, background, writer_end)
        second = spawn(right.argv, background, reader_end)
    finally:
        # The reader only sees end-of-stream once no process holds the write end
        os.close(read_fd)
        os.close(write_fd)

    if background:
        _announce(second)
        return first, second

    wait_for(second)
    reap_if_done(first)
    return first, second


def execute(plan):
    """
    Run a CommandPlan.
    Returns: list of ChildDescriptor
    """
    if plan.is_pipeline:
        left, right = plan.commands
        return list(run_pipeline(left, right, plan.background))
    return [run_single(plan.commands[0], plan.background)]
