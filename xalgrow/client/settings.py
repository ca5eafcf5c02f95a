# xalgrow/client/settings.py
import os

from xalgrow.core.env import env

API_URL = env("XALGROW_API_URL", default="http://localhost:5000").rstrip("/")
API_TOKEN = os.environ.get("XALGROW_API_TOKEN", "").strip() or None
REQUEST_TIMEOUT_SECONDS = float(env("XALGROW_REQUEST_TIMEOUT", default="120"))
