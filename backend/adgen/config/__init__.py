"""
Application configuration and settings
"""

import os
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from adgen.core.runtime import parse_bool_env, env_int, env_float

from .models import (
    ModelConfig,
    CHAT_MODEL,
    VIDEO_MODEL,
    IMAGE_MODEL,
    VIDEO_ASPECT_RATIOS,
    VIDEO_RESOLUTIONS,
    IMAGE_ASPECT_RATIOS,
    list_models,
)

# Base directories
APP_DIR = Path(__file__).parent.parent
BACKEND_DIR = APP_DIR.parent

# API settings
API_TITLE = "AdGen Studio API"
API_DESCRIPTION = "Write marketing video scripts with Gemini and render them with Veo"
API_VERSION = "1.0.0"

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]

# Gemini credentials. API_KEY is accepted for parity with AI Studio apps.
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
USE_VERTEX_AI = parse_bool_env(os.getenv("USE_VERTEX_AI"), default=False)
GCP_PROJECT_ID = os.getenv("GCP_PROJECT_ID")
GCP_LOCATION = os.getenv("GCP_LOCATION", "us-central1")

# Poll loop for long-running generation jobs
POLL_INTERVAL_SECONDS = env_float("POLL_INTERVAL_SECONDS", 5.0, 0.0)
POLL_MAX_INTERVAL_SECONDS = env_float("POLL_MAX_INTERVAL_SECONDS", 30.0, 0.0)
POLL_BACKOFF_FACTOR = env_float("POLL_BACKOFF_FACTOR", 2.0, 1.0)
POLL_TIMEOUT_SECONDS = env_float("POLL_TIMEOUT_SECONDS", 15 * 60.0, 1.0)
POLL_MAX_TRANSIENT_ERRORS = env_int("POLL_MAX_TRANSIENT_ERRORS", 12, 0)

# When the access check itself blows up, proceed as if access was granted.
AUTH_CHECK_FAIL_OPEN = parse_bool_env(os.getenv("AUTH_CHECK_FAIL_OPEN"), default=True)

# Attachments travel base64-encoded in JSON bodies
MAX_REQUEST_BODY_BYTES = env_int("MAX_REQUEST_BODY_BYTES", 20 * 1024 * 1024, 1024)

ALLOWED_ATTACHMENT_MIME_PREFIXES = ("image/", "video/")
