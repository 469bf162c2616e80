import os

DB_PATH = os.getenv("DB", "messageboard.db")
ALLOWED_ORIGINS = ["http://localhost:3000", "http://localhost:8080"]

# Server Configuration
DEFAULT_HOST = os.getenv("HOST", "0.0.0.0")
DEFAULT_PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Routes are served under each prefix ("" keeps the bare paths)
API_PREFIXES = ("/api", "")

# Listing Limits
THREAD_LIST_LIMIT = 10
REPLY_PREVIEW_LIMIT = 3

# Security Settings
BCRYPT_ROUNDS = 10
MAX_REQUEST_SIZE_MB = 1
GZIP_MIN_SIZE = 1000

# Response Literals
DELETED_REPLY_TEXT = "[deleted]"
REPORTED = "reported"
SUCCESS = "success"
INCORRECT_PASSWORD = "incorrect password"
BOARD_NOT_FOUND = "board not found"
THREAD_NOT_FOUND = "thread not found"
REPLY_NOT_FOUND = "reply not found"

# HTTP Status Codes
HTTP_REQUEST_ENTITY_TOO_LARGE = 413
