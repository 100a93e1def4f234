"""Vault scanner: recursive note walk, metadata extraction and cache write"""

import logging
import os
import time
from pathlib import Path
from typing import Iterator

from ..config import Settings, get_settings
from ..errors import VaultNotFoundError
from ..models import ScanResult, utc_timestamp
from .cache import write_scan_cache
from .parser import index_note

logger = logging.getLogger("vaulttriage.scanner")


def walk_note_files(root: Path, extension: str = ".md", _prefix: str = "") -> Iterator[str]:
    """
    Depth-first walk yielding note paths relative to root.

    Entries whose name starts with "." are skipped entirely, which keeps
    .obsidian, the cache directory and any hidden folder out of the result.
    Symlinks are not followed. Listing order is whatever the OS returns.
    Paths always use "/" as separator.
    """
    with os.scandir(root) as entries:
        for entry in entries:
            if entry.name.startswith("."):
                continue

            relative = f"{_prefix}{entry.name}"
            if entry.is_file(follow_symlinks=False) and entry.name.endswith(extension):
                yield relative
            elif entry.is_dir(follow_symlinks=False):
                yield from walk_note_files(Path(entry.path), extension, f"{relative}/")


def count_note_files(root: Path, extension: str = ".md") -> int:
    """Count notes under root using the same rules as walk_note_files"""
    return sum(1 for _ in walk_note_files(root, extension))


def scan_vault(vault_path: Path | str, settings: Settings | None = None) -> ScanResult:
    """
    Scan a vault, index every note and overwrite the scan cache.

    Any read error aborts the whole scan; nothing is cached in that case.

    Args:
        vault_path: Vault directory, relative paths resolve against the CWD

    Returns:
        ScanResult with one entry per note in walk order
    """
    settings = settings or get_settings()
    root = Path(vault_path).resolve()
    if not root.is_dir():
        raise VaultNotFoundError(root)

    start = time.perf_counter()
    extension = settings.note_extension
    notes = [
        index_note(root, relative_path, extension)
        for relative_path in walk_note_files(root, extension)
    ]

    result = ScanResult(
        vault_path=str(root),
        scanned_at=utc_timestamp(),
        notes=notes,
        health_score=100,
    )

    cache_file = write_scan_cache(result, settings)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Scanned {root}: {len(notes)} notes in {elapsed_ms:.2f}ms -> {cache_file}")
    return result
