import os


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return int(v)


_PROJECT_ROOT = os.path.dirname(__file__)


class Config:
    """Base configuration loaded from environment variables."""

    # Storage
    DB_PATH: str = os.getenv(
        "OPENCLIMATE_DB_PATH", os.path.join(_PROJECT_ROOT, "data", "openclimate.db")
    )
    SQLITE_WAL: bool = _env_bool("OPENCLIMATE_SQLITE_WAL", True)
    SQLITE_BUSY_TIMEOUT_MS: int = _env_int("OPENCLIMATE_SQLITE_BUSY_TIMEOUT_MS", 5000)

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: str = os.getenv("OPENCLIMATE_LOG_DIR", os.path.join(_PROJECT_ROOT, "logs"))
