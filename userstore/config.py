"""Centralized configuration with env var overrides.

Defaults for the CLI live here. Override any via environment variables or
a .env file in the project root. The store itself never reads these; the
CLI copies them into an Arguments struct at startup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(PROJECT_ROOT / ".env")

# ── Paths ──
USERS_FILE = os.environ.get("USERS_FILE", "")
FILE_MODE = 0o666

# ── Locking ──
USE_FILE_LOCK = os.environ.get("USERSTORE_LOCK", "").strip().lower() in ("1", "true", "yes", "on")

# ── Logging ──
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# ── Operations ──
OP_ADD = "add"
OP_LIST = "list"
OP_FIND_BY_ID = "findById"
OP_REMOVE = "remove"
OPERATIONS = (OP_ADD, OP_LIST, OP_FIND_BY_ID, OP_REMOVE)
