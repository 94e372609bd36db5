"""
Configuration for the Search API - Environment-driven settings
"""
from pathlib import Path

from services.core.settings import get_env, get_env_bool, get_env_float, get_env_int, get_env_list

# Repository root (one level above services/)
REPO_ROOT = Path(__file__).resolve().parents[2]


def _resolve(path: str) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else (REPO_ROOT / candidate).resolve()


# Server
API_TITLE = "Webpage Search API"
API_VERSION = get_env("API_VERSION", "v1.0.0")
MAIN_PORT = get_env_int("MAIN_PORT", 3000)
LOG_LEVEL = get_env("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = get_env_list("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001")
# Take the caller origin from X-Forwarded-For (only behind a trusted proxy)
TRUST_FORWARDED_FOR = get_env_bool("TRUST_FORWARDED_FOR", False)

# Static resources, loaded once at startup
DATABASE_PATH = _resolve(get_env("DATABASE_PATH", "data/search.db"))
LEMMA_PATH = _resolve(get_env("LEMMA_PATH", "data/lemmatised_words.txt"))
TOP_DOMAINS_PATH = _resolve(get_env("TOP_DOMAINS_PATH", "data/top-domains.txt"))

# Ranking
MAX_RESULTS = get_env_int("MAX_RESULTS", 100)
# Longer queries are rejected with 422; keeps the store IN-list under SQLite's variable limit
MAX_QUERY_LENGTH = get_env_int("MAX_QUERY_LENGTH", 2048)
DEFAULT_RESULTS = get_env_int("DEFAULT_RESULTS", 100)
RANKING_POLICY = get_env("RANKING_POLICY", "precision")

# Admission (Cloudflare Turnstile)
ADMISSION_WINDOW_SEC = get_env_float("ADMISSION_WINDOW_SEC", 120.0)
TURNSTILE_SECRET_KEY = get_env("TURNSTILE_SECRET_KEY") or get_env("CLOUDFLARE_TURNSTILE_SECRET_KEY")
TURNSTILE_VERIFY_URL = get_env(
    "TURNSTILE_VERIFY_URL", "https://challenges.cloudflare.com/turnstile/v0/siteverify"
)
VERIFY_TIMEOUT_SEC = get_env_float("VERIFY_TIMEOUT_SEC", 5.0)
