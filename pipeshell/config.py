import os

PROMPT_NAME = "pipeshell"

# History
HISTORY_FILE = os.path.expanduser(os.getenv("PIPESHELL_HISTFILE", "~/.pipeshell_history"))
MAX_HISTORY = int(os.getenv("PIPESHELL_HISTSIZE", "1000"))

# Logging goes to stderr, quiet unless asked for
LOG_LEVEL = os.getenv("PIPESHELL_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
