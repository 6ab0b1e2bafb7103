import os
import sys

from config import BACKGROUND_TOKEN, EXIT_COMMAND, INPUT_TOKEN, OUTPUT_TOKEN, PIPE_TOKEN
from Osh.monitor import show_children


def builtin_help():
    """Print help message"""
    print("""osh help:
 Built-in commands:
  cd [dir]      : change directory
  exit [n]      : exit shell (status n, default last status)
  help          : print this help
  pmon          : show child processes still attached to the shell

Features:
  Pipe two commands with |      (ps -ael | grep root)
  Redirection with > or <       (ls > out.txt, sort < in.txt)
  Background with a trailing &  (sleep 5 &)
  !! re-runs the previous command
""")
    return 0


def builtin_cd(args):
    """Change directory"""
    path = args[0] if args else "~"
    try:
        os.chdir(os.path.expanduser(path))
        return 0
    except OSError as e:
        print(f"cd: {path}: {e.strerror}")
        return 1


def builtin_pmon():
    """Process monitor - children of this shell"""
    show_children()
    return 0


OPERATORS = (PIPE_TOKEN, INPUT_TOKEN, OUTPUT_TOKEN, BACKGROUND_TOKEN)


def is_exit(args):
    return bool(args) and args[0] == EXIT_COMMAND


def exit_status(args, last_status):
    """
    Status for "exit [n]": n when given, otherwise the last command's status.
    """
    rest = strip_operators(args)[1:]
    if not rest:
        return last_status
    try:
        return int(rest[0]) & 0xFF
    except ValueError:
        print(f"osh: exit: {rest[0]}: numeric argument required", file=sys.stderr)
        return 2


def strip_operators(args):
    """
    Builtins run inside the shell, so "|", "<", ">" and "&" do not apply to
    them. Report and drop any that were given.
    """
    ignored = [tok for tok in args[1:] if tok in OPERATORS]
    if not ignored:
        return args
    print(f"osh: {args[0]}: ignoring {' '.join(ignored)} (builtins run in the shell)", file=sys.stderr)
    return [args[0]] + [tok for tok in args[1:] if tok not in OPERATORS]


builtins = {
    'cd': builtin_cd,
    'help': lambda rest: builtin_help(),
    'pmon': lambda rest: builtin_pmon(),
}


def execute_builtin(args):
    """
    Execute built-in command if it matches.
    Returns (executed: bool, exit_code: int)
    """
    if not args or args[0] not in builtins:
        return False, 0

    rest = strip_operators(args)[1:]
    return True, builtins[args[0]](rest)
