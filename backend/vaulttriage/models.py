"""Data models for Vault Triage"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format a moment as ISO-8601 UTC with millisecond precision, e.g. 2026-01-01T00:00:00.000Z"""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def timestamp_from_epoch(seconds: float) -> str:
    """Format a POSIX mtime as an ISO-8601 UTC timestamp"""
    return utc_timestamp(datetime.fromtimestamp(seconds, tz=timezone.utc))


class NoteIssue(str, Enum):
    """Problems a future analysis stage can flag on a note"""
    ORPHAN = "orphan"
    BROKEN_LINKS = "broken_links"
    EMPTY = "empty"
    INBOX = "inbox"
    NO_TAGS = "no_tags"


@dataclass
class NoteMetadata:
    """Metadata for a single note"""
    path: str               # Relative to vault root, "/" separated
    title: str
    size: int               # Bytes
    modified_at: str        # ISO-8601 UTC
    tags: list[str] = field(default_factory=list)
    issues: list[NoteIssue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "title": self.title,
            "size": self.size,
            "modifiedAt": self.modified_at,
            "tags": list(self.tags),
            "issues": [issue.value for issue in self.issues],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "NoteMetadata":
        return cls(
            path=payload["path"],
            title=payload["title"],
            size=int(payload["size"]),
            modified_at=payload["modifiedAt"],
            tags=[str(tag) for tag in payload.get("tags", [])],
            issues=[NoteIssue(issue) for issue in payload.get("issues", [])],
        )


@dataclass
class ScanResult:
    """Result of a vault scan"""
    vault_path: str         # Absolute, resolved
    scanned_at: str
    notes: list[NoteMetadata] = field(default_factory=list)
    health_score: int = 100  # Placeholder until scoring exists

    def to_dict(self) -> dict:
        return {
            "vaultPath": self.vault_path,
            "scannedAt": self.scanned_at,
            "notes": [note.to_dict() for note in self.notes],
            "healthScore": self.health_score,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "ScanResult":
        return cls(
            vault_path=payload["vaultPath"],
            scanned_at=payload["scannedAt"],
            notes=[NoteMetadata.from_dict(note) for note in payload.get("notes", [])],
            health_score=int(payload.get("healthScore", 100)),
        )


@dataclass
class VaultConnectionInfo:
    """Record of the currently connected vault"""
    path: str
    has_obsidian_dir: bool
    markdown_file_count: int
    connected_at: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "hasObsidianDir": self.has_obsidian_dir,
            "markdownFileCount": self.markdown_file_count,
            "connectedAt": self.connected_at,
        }


@dataclass
class VaultStatus:
    """Summary counts of a scanned vault"""
    path: str
    note_count: int
    inbox_count: int
    orphan_count: int
    broken_link_count: int
    health_score: int

    @classmethod
    def from_scan(cls, scan: ScanResult) -> "VaultStatus":
        def count(issue: NoteIssue) -> int:
            return sum(1 for note in scan.notes if issue in note.issues)

        return cls(
            path=scan.vault_path,
            note_count=len(scan.notes),
            inbox_count=count(NoteIssue.INBOX),
            orphan_count=count(NoteIssue.ORPHAN),
            broken_link_count=count(NoteIssue.BROKEN_LINKS),
            health_score=scan.health_score,
        )

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "noteCount": self.note_count,
            "inboxCount": self.inbox_count,
            "orphanCount": self.orphan_count,
            "brokenLinkCount": self.broken_link_count,
            "healthScore": self.health_score,
        }
