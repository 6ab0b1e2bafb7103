import sys
from dataclasses import dataclass, field

from loguru import logger

from config import PROMPT
from Osh.builtin import execute_builtin, exit_status, is_exit
from Osh.errors import CommandError, FatalError, InputError
from Osh.executor import execute
from Osh.history import HistoryCell, init_readline
from Osh.parser import parse_command, tokenize


@dataclass
class ShellContext:
    """State carried from one prompt to the next."""

    history: HistoryCell = field(default_factory=HistoryCell)
    prompt: str = PROMPT
    last_status: int = 0
    running: bool = True


def read_line(prompt):
    """
    Read one line from the terminal.
    Returns: the line with its terminator, or None at end of input
    """
    try:
        return input(prompt) + "\n"
    except EOFError:
        return None
    except OSError as e:
        raise InputError(f"read: {e.strerror or e}") from e


def handle_line(ctx, raw):
    """
    Tokenize, plan and run one raw line.
    Returns: list of ChildDescriptor (empty when nothing was forked)
    """
    try:
        tokens = tokenize(raw, ctx.history)
        if tokens.recalled:
            print(tokens.line)

        args = tokens.args
        if not args:
            return []
        logger.debug("args {}", args)

        if is_exit(args):
            ctx.last_status = exit_status(args, ctx.last_status)
            ctx.running = False
            return []

        executed, exit_code = execute_builtin(args)
        if executed:
            ctx.last_status = exit_code
            return []

        plan = parse_command(args)
    except CommandError as e:
        print(f"osh: {e}", file=sys.stderr)
        ctx.last_status = 1
        return []

    children = execute(plan)
    if not plan.background and children[-1].reaped:
        status = children[-1].status
        # killed by signal N reads as 128+N, like sh
        ctx.last_status = 128 - status if status < 0 else status
    return children


def main_loop(ctx=None):
    """
    Main shell loop.
    Returns: interpreter exit status, the last command's status unless fatal
    """
    ctx = ctx or ShellContext()
    init_readline()

    try:
        while ctx.running:
            try:
                raw = read_line(ctx.prompt)
            except KeyboardInterrupt:
                print()
                continue

            if raw is None:
                print()
                break

            try:
                handle_line(ctx, raw)
            except KeyboardInterrupt:
                print()
    except FatalError as e:
        logger.error("fatal: {}", e)
        print(f"osh: {e}", file=sys.stderr)
        return 1

    return ctx.last_status
