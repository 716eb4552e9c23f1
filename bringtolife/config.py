import os
from dotenv import load_dotenv

load_dotenv()

# API Keys and Config - loaded from .env
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-pro-preview")
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.5"))

# Local creation history (JSON array on disk)
HISTORY_PATH = os.getenv("HISTORY_PATH", "data/history.json")
HISTORY_QUOTA_BYTES = int(os.getenv("HISTORY_QUOTA_BYTES", str(5 * 1024 * 1024)))  # browser local storage size

# First-run examples, one portable creation document per URL
_DEFAULT_EXAMPLE_URLS = (
    "https://storage.googleapis.com/sideprojects-asronline/bringanythingtolife/vibecode-blog.json,"
    "https://storage.googleapis.com/sideprojects-asronline/bringanythingtolife/cassette.json,"
    "https://storage.googleapis.com/sideprojects-asronline/bringanythingtolife/chess.json"
)
EXAMPLE_URLS = [url.strip() for url in os.getenv("EXAMPLE_URLS", _DEFAULT_EXAMPLE_URLS).split(",") if url.strip()]
EXAMPLE_FETCH_TIMEOUT = float(os.getenv("EXAMPLE_FETCH_TIMEOUT", "30"))

# Interface
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "en")  # "en" or "ar"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
