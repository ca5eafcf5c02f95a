# xalgrow/core/config.py
import os
from anthropic import Anthropic
from openai import OpenAI

from xalgrow.core.env import ROOT_DIR, env

LOG_LEVEL = env("LOG_LEVEL", default="INFO").upper()

# ================== AI PROVIDERS ==================

OPENAI_MODEL = env("OPENAI_MODEL", default="gpt-4o")
ANTHROPIC_MODEL = env("ANTHROPIC_MODEL", default="claude-3-7-sonnet-20250219")
ANTHROPIC_MAX_TOKENS = int(env("ANTHROPIC_MAX_TOKENS", default="4000"))

def get_openai_client() -> OpenAI:
    """
    Lazy init: the server starts without keys.
    Only the generation endpoints require OPENAI_API_KEY.
    """
    key = os.environ.get("OPENAI_API_KEY")
    if not key:
        raise RuntimeError("OPENAI_API_KEY not configured (.env).")
    return OpenAI(api_key=key)

def get_anthropic_client() -> Anthropic:
    key = os.environ.get("ANTHROPIC_API_KEY")
    if not key:
        raise RuntimeError("ANTHROPIC_API_KEY not configured (.env).")
    return Anthropic(api_key=key)

# ================== SERVER ==================

CORS_ORIGINS = [o.strip() for o in env("CORS_ORIGINS", default="*").split(",") if o.strip()]

# Projects created without a user belong to this account (demo mode, no auth).
DEV_USER_ID = int(env("DEV_USER_ID", default="1"))

# ================== DATABASE ==================

SQLITE_PATH = ROOT_DIR / "xalgrow" / "xalgrow.db"

def get_database_url() -> str:
    """
    DATABASE_URL wins; otherwise MySQL when MYSQL_HOST is set,
    otherwise a local SQLite file.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return url

    host = os.environ.get("MYSQL_HOST")
    if not host:
        return f"sqlite+aiosqlite:///{SQLITE_PATH}"

    user = env("MYSQL_USER", default="root")
    password = os.environ.get("MYSQL_PASSWORD", "")
    port = int(env("MYSQL_PORT", default="3306"))
    name = env("MYSQL_DB", default="xalgrow")
    return f"mysql+aiomysql://{user}:{password}@{host}:{port}/{name}?charset=utf8mb4"
