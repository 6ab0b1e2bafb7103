from enum import Enum
from typing import NamedTuple, Optional

from loguru import logger

from config import (
    BACKGROUND_TOKEN,
    INPUT_TOKEN,
    OUTPUT_TOKEN,
    PIPE_TOKEN,
    RECALL_LINE,
)
from Osh.errors import MalformedCommandError, NoHistoryError


class DirectiveKind(Enum):
    NONE = "none"
    PIPELINE = "pipeline"
    REDIRECT = "redirect"


class RedirectKind(Enum):
    INPUT = INPUT_TOKEN
    OUTPUT = OUTPUT_TOKEN


class Directive(NamedTuple):
    kind: DirectiveKind
    index: int = -1
    redirect: Optional[RedirectKind] = None


NO_DIRECTIVE = Directive(DirectiveKind.NONE)


class Tokens(NamedTuple):
    args: list
    line: str
    recalled: bool = False


class Redirect(NamedTuple):
    kind: RedirectKind
    path: str


class Command(NamedTuple):
    argv: list
    redirect: Optional[Redirect] = None


class CommandPlan(NamedTuple):
    commands: tuple
    background: bool = False

    @property
    def is_pipeline(self):
        return len(self.commands) == 2


def _strip_terminator(raw):
    if raw.endswith("\r\n"):
        return raw[:-2]
    if raw.endswith("\n"):
        return raw[:-1]
    return raw


def tokenize(raw, history):
    """
    Split one raw line into arguments.
    "!!" re-tokenizes the history cell without touching it; any other line
    replaces the history cell first.
    Returns: Tokens(args, line, recalled)
    """
    line = _strip_terminator(raw)

    if line == RECALL_LINE:
        if history.is_empty():
            raise NoHistoryError()
        line = history.recall()
        return Tokens(line.split(), line, recalled=True)

    history.remember(line)
    return Tokens(line.split(), line)


def pipe_check(args):
    """Index of the pipe separator, or -1"""
    for i, tok in enumerate(args):
        if tok == PIPE_TOKEN:
            return i
    return -1


def has_redirection(args):
    return any(tok in (INPUT_TOKEN, OUTPUT_TOKEN) for tok in args)


def scan_directive(args):
    """
    Return the directive acted on for this argument list.
    Pipeline status is checked before redirection status.
    """
    index = pipe_check(args)
    if index != -1:
        return Directive(DirectiveKind.PIPELINE, index)

    for i, tok in enumerate(args):
        if tok in (INPUT_TOKEN, OUTPUT_TOKEN):
            return Directive(DirectiveKind.REDIRECT, i, RedirectKind(tok))
    return NO_DIRECTIVE


def strip_background(args):
    """
    Remove a trailing background marker.
    Returns: (args without marker, background)
    """
    if args and args[-1] == BACKGROUND_TOKEN:
        return args[:-1], True
    return args, False


def split_pipeline(args, index):
    """
    Split "left | right [&]" at the separator.
    Returns: (left, right, background)
    """
    left = args[:index]
    right = list(args[index + 1:])

    right, background = strip_background(right)
    left, _ = strip_background(left)

    if not left or not right:
        raise MalformedCommandError("missing command around '|'")
    if pipe_check(right) != -1:
        raise MalformedCommandError("only one '|' per line is supported")
    if has_redirection(left) or has_redirection(right):
        raise MalformedCommandError("'|' cannot be combined with '<' or '>'")
    return left, right, background


def build_command(args):
    """
    Validate a single command and strip its redirection.
    The operator must be second-to-last and the filename last.
    """
    directive = scan_directive(args)
    if directive.kind is DirectiveKind.NONE:
        return Command(list(args))

    op = args[directive.index]
    if directive.index != len(args) - 2:
        raise MalformedCommandError(f"'{op}' must be followed by exactly one file name at the end of the line")
    if directive.index == 0:
        raise MalformedCommandError(f"missing command before '{op}'")

    argv = list(args[:directive.index])
    if has_redirection(argv):
        raise MalformedCommandError("only one redirection per command is supported")
    return Command(argv, Redirect(directive.redirect, args[-1]))


def parse_command(args):
    """
    Turn an argument list into a CommandPlan.
    Returns None when there is nothing to run.
    """
    if not args:
        return None

    directive = scan_directive(args)
    if directive.kind is DirectiveKind.PIPELINE:
        left, right, background = split_pipeline(args, directive.index)
        plan = CommandPlan((Command(left), Command(right)), background)
    else:
        argv, background = strip_background(args)
        if not argv:
            raise MalformedCommandError(f"missing command before '{BACKGROUND_TOKEN}'")
        plan = CommandPlan((build_command(argv),), background)

    logger.debug("plan {}", plan)
    return plan
