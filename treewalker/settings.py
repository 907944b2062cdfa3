# treewalker/settings.py

import os


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    # --- Traversal ---
    FOLLOW_SYMLINKS: bool = _env_flag("TREEWALKER_FOLLOW_SYMLINKS", False)

    # --- Teardown ---
    # Seconds close() waits for a stopped worker to reach its next checkpoint.
    JOIN_TIMEOUT: float = float(os.getenv("TREEWALKER_JOIN_TIMEOUT", "5.0"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("TREEWALKER_LOG_LEVEL", "WARNING").upper()


settings = Settings()
