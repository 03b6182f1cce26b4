from __future__ import annotations

import os
from pathlib import Path

# repository_root/data (we are in backend/noteful/)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def data_dir() -> Path:
    return Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR)))


def jwt_secret() -> str:
    s = os.getenv("JWT_SECRET", "")
    if not s:
        # must be set explicitly, also in tests
        raise RuntimeError("JWT_SECRET is not set")
    return s


def jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def jwt_exp_minutes() -> int:
    try:
        return int(os.getenv("JWT_EXP_MINUTES", "15"))
    except ValueError:
        return 15


def bcrypt_rounds() -> int | None:
    raw = os.environ.get("BCRYPT_ROUNDS")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO")
