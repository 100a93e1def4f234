"""Scan cache persistence inside the vault's reserved directory"""

import json
import logging
import tempfile
from pathlib import Path

from ..config import Settings, get_settings
from ..models import ScanResult

logger = logging.getLogger("vaulttriage.scanner")


def write_scan_cache(result: ScanResult, settings: Settings | None = None) -> Path:
    """
    Atomically overwrite the scan cache with the given result.

    The JSON is written to a temp file next to the cache and then renamed over
    it, so readers see either the old or the new cache, never a partial one.
    """
    settings = settings or get_settings()
    cache_path = settings.cache_path(Path(result.vault_path))
    cache_path.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=cache_path.parent,
        delete=False,
        prefix=f".{cache_path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        tmp.write(payload)

    tmp_path.replace(cache_path)
    return cache_path


def load_scan_cache(vault_path: Path | str, settings: Settings | None = None) -> ScanResult | None:
    """Load the cached scan of a vault; None if missing or unreadable"""
    settings = settings or get_settings()
    cache_path = settings.cache_path(Path(vault_path).resolve())
    if not cache_path.exists():
        return None

    try:
        payload = json.loads(cache_path.read_text(encoding="utf-8"))
        return ScanResult.from_dict(payload)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Ignoring unreadable scan cache {cache_path}: {e}")
        return None
