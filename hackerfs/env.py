"""
Utilities for loading environment variables from the project .env file.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@lru_cache(maxsize=1)
def load_env() -> Path:
    """
    Load environment variables from the repository-level .env file once.
    Returns the path to the .env that was attempted.
    """
    root = Path(__file__).resolve().parents[1]
    dotenv_path = root / ".env"
    # values already exported in the environment take precedence
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return dotenv_path


def seed_fs_path() -> Optional[Path]:
    """
    Path of the JSON snapshot named by HACKERFS_SEED_FS, if any.
    """
    load_env()
    value = os.getenv("HACKERFS_SEED_FS")
    return Path(value) if value else None


def log_level() -> str:
    load_env()
    return (os.getenv("HACKERFS_LOG_LEVEL") or "INFO").upper()
