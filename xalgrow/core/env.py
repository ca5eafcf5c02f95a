# xalgrow/core/env.py
# Environment loading shared by the client and the server. Imports no SDKs.
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[2]

# variables already set in the process win over the .env file
load_dotenv(ROOT_DIR / "xalgrow/.env")

def env(*names: str, default: Optional[str] = None) -> str:
    for n in names:
        v = os.environ.get(n)
        if v is not None and str(v).strip() != "":
            return v
    if default is not None:
        return default
    raise KeyError(f"Missing required env var. Tried: {', '.join(names)}")
