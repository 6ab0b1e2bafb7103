import sys

try:
    import readline
except ImportError:  # no GNU readline on this platform, input() still works
    readline = None


class HistoryCell:
    """The single most recent command line."""

    def __init__(self, line=""):
        self._line = line

    def remember(self, line):
        """Overwrite the stored line"""
        self._line = line

    def recall(self):
        return self._line

    def is_empty(self):
        return self._line == ""

    def __repr__(self):
        return f"HistoryCell({self._line!r})"


def init_readline():
    """Enable line editing keys for input(), like a Linux terminal"""
    if readline is None or not sys.stdin.isatty():
        return
    try:
        # Ctrl+Left/Right to jump between words
        readline.parse_and_bind("\\e[1;5D: backward-word")
        readline.parse_and_bind("\\e[1;5C: forward-word")

        # Emacs key bindings (like bash)
        readline.parse_and_bind("set editing-mode emacs")

        # osh only remembers one line; keep readline's own list from growing
        readline.set_auto_history(False)
    except Exception as e:
        print(f"Warning: Could not configure readline: {e}", file=sys.stderr)
