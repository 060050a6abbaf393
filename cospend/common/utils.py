import json
import os
import tempfile
from datetime import datetime, timezone

from cospend.constants.logging_config import LOG


def mkdir_p(path, mode=0o777):
    os.makedirs(path, mode=mode, exist_ok=True)


def now_iso():
    # Use timezone-aware UTC timestamp
    return datetime.now(timezone.utc).isoformat()


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an RFC3339/ISO 8601 timestamp into an aware datetime.

    Naive timestamps are taken as UTC. Raises ValueError on bad input.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def save_state_atomic(path, obj, mode=None):
    """Write JSON to a temp file then atomically replace the destination.

    Args:
        path: Destination file path
        obj: JSON-serializable object
        mode: Optional permission bits applied to the file before the replace
    """
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp", dir=d)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2, ensure_ascii=False)
        if mode is not None:
            os.chmod(tmp, mode)
        os.replace(tmp, path)
    except OSError as e:
        # If replace failed, try to remove the temp file. Only catch OSError for filesystem ops.
        try:
            os.remove(tmp)
        except OSError:
            LOG.warning("Failed to remove temp file %s: %s", tmp, e)
        raise


def parse_float_safe(v) -> float:
    try:
        return float(v)
    except (ValueError, TypeError):
        return 0.0


def clean_bill_name(what: str) -> str:
    """Trim a bill's free-text name and flatten newlines/tabs to spaces."""
    if not what:
        return ""
    cleaned = what.strip()
    for ch in ("\r", "\n", "\t"):
        cleaned = cleaned.replace(ch, " ")
    return cleaned
