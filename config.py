import os

# Prompt printed before every line
PROMPT = os.getenv("OSH_PROMPT", "osh>")

LOG_LEVEL = os.getenv("OSH_LOG_LEVEL", "WARNING").upper()

# Special tokens (exact, case-sensitive matches)
PIPE_TOKEN = "|"
OUTPUT_TOKEN = ">"
INPUT_TOKEN = "<"
BACKGROUND_TOKEN = "&"
RECALL_LINE = "!!"
EXIT_COMMAND = "exit"

# Output redirection: owner rw, group rw
OUTPUT_FILE_MODE = 0o660
# Off by default: "> file" overwrites in place without truncating
TRUNCATE_OUTPUT = os.getenv("OSH_TRUNCATE_OUTPUT", "0").lower() in ("1", "true", "yes")

# Exit statuses of a child that never reached its program
REDIRECT_FAILURE_STATUS = 1
EXEC_FAILURE_STATUS = 126
EXEC_NOT_FOUND_STATUS = 127
