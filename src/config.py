"""Configuration module for the Review Hub data store.

This module provides centralized configuration management, including directory
paths, the database URL, logging settings and role naming conventions.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = Path(os.getenv("REVIEW_HUB_DATA_DIR", str(ROOT_DIR / DATA_DIR_NAME)))

# --- Database Configuration ---

DATABASE_FILE_NAME = "review_hub.db"

# Full SQLAlchemy URL; defaults to a SQLite file inside DATA_DIR
DATABASE_URL: str = os.getenv(
    "REVIEW_HUB_DATABASE_URL", f"sqlite:///{DATA_DIR / DATABASE_FILE_NAME}"
)

# Echo SQL statements (set to "true" to debug queries)
DATABASE_ECHO: bool = os.getenv("REVIEW_HUB_DATABASE_ECHO", "false").lower() == "true"

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# --- Account Configuration ---

# Invitation codes are the first characters of a random UUID
INVITATION_CODE_LENGTH: int = 4

# Length of one-time passwords handed out by admins
TEMP_PASSWORD_LENGTH: int = int(os.getenv("TEMP_PASSWORD_LENGTH", "15"))

# Role strings are free text. These are the values the store looks for.
ADMIN_ROLE: str = "admin"
INSTRUCTOR_ROLE: str = "Instructor"
REVIEWER_ROLE_MARKER: str = "Reviewer"

# Separator between notification lines in the stored log
NOTIFICATION_SEPARATOR: str = "\n"

TRUSTED_REVIEWER_MESSAGE: str = "{student} has added you to their trusted reviewers list!"
