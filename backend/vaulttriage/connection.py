"""Vault connection state: which vault directory is the active target"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from .config import Settings, get_settings
from .errors import NotAVaultError, VaultNotFoundError
from .models import VaultConnectionInfo, utc_timestamp
from .vault.scanner import count_note_files

logger = logging.getLogger("vaulttriage.connection")


class VaultConnection:
    """
    Holds at most one connected vault.

    The owner (the FastAPI app, a CLI command or a test) creates the instance,
    so separate owners never share state. connect() replaces the current
    vault wholesale; disconnect() clears it.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._current: VaultConnectionInfo | None = None
        self._lock = threading.Lock()

    def inspect(self, path: str | Path) -> VaultConnectionInfo:
        """Validate a vault directory without connecting to it"""
        resolved = Path(path).resolve()
        if not resolved.is_dir():
            raise VaultNotFoundError(resolved)

        has_obsidian_dir = (resolved / self.settings.obsidian_dir_name).is_dir()
        markdown_file_count = count_note_files(resolved, self.settings.note_extension)
        if not has_obsidian_dir and markdown_file_count == 0:
            raise NotAVaultError(resolved)

        return VaultConnectionInfo(
            path=str(resolved),
            has_obsidian_dir=has_obsidian_dir,
            markdown_file_count=markdown_file_count,
            connected_at=utc_timestamp(),
        )

    def connect(self, path: str | Path) -> VaultConnectionInfo:
        """Validate and connect a vault directory; raises VaultError on failure"""
        info = self.inspect(path)
        with self._lock:
            self._current = info
        logger.info(
            f"Connected vault {info.path} "
            f"(obsidian={info.has_obsidian_dir}, notes={info.markdown_file_count})"
        )
        return info

    def status(self) -> VaultConnectionInfo | None:
        """Currently connected vault, or None"""
        with self._lock:
            return self._current

    def disconnect(self) -> None:
        """Forget the connected vault (idempotent)"""
        with self._lock:
            previous, self._current = self._current, None
        if previous is not None:
            logger.info(f"Disconnected vault {previous.path}")
