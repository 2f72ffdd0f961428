"""Local JSON cache for read-only API responses."""

import hashlib
import json
import logging
import os
import tempfile
import time
from pathlib import Path

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".config" / "gsc-cli" / "cache"


def _ensure_dir(cache_dir: Path):
    cache_dir.mkdir(parents=True, exist_ok=True)


def cache_key(prefix: str, *parts) -> str:
    """Stable key from a prefix and JSON-serializable parts."""
    raw = json.dumps(parts, sort_keys=True, default=str)
    return prefix + hashlib.sha1(raw.encode()).hexdigest()


def load_cached(key: str, ttl: int, cache_dir: Path = CACHE_DIR) -> dict | None:
    """Load {cache_dir}/{key}.json if it is younger than ttl seconds.

    An unreadable entry counts as a miss and is overwritten by the next save.
    """
    path = cache_dir / f"{key}.json"
    if not path.exists():
        return None
    try:
        with open(path) as f:
            entry = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable cache entry %s: %s", path, e)
        return None
    if not isinstance(entry, dict) or not isinstance(entry.get("stored_at"), (int, float)):
        return None
    if time.time() - entry["stored_at"] > ttl:
        return None
    return entry.get("data")


def save_cached(key: str, data: dict, cache_dir: Path = CACHE_DIR):
    """Save data to {cache_dir}/{key}.json with the current time."""
    _ensure_dir(cache_dir)
    path = cache_dir / f"{key}.json"
    fd, tmp = tempfile.mkstemp(dir=cache_dir, prefix=f".{key}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump({"stored_at": time.time(), "data": data}, f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise
