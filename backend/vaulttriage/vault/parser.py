"""Note metadata extraction: title, tags, size and mtime"""

import re
from pathlib import Path, PurePosixPath

from ..models import NoteMetadata, timestamp_from_epoch
from .frontmatter import FrontmatterValue, parse_frontmatter

HEADING_PATTERN = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)


def extract_title(
    content: str,
    frontmatter: dict[str, FrontmatterValue],
    file_path: str,
    extension: str = ".md",
) -> str:
    """
    Resolve the display title of a note.

    Order: first level-1 heading anywhere in the file, then the frontmatter
    ``title`` scalar, then the file name without its extension.
    """
    for match in HEADING_PATTERN.finditer(content):
        heading = match.group(1).strip()
        if heading:
            return heading

    title = frontmatter.get("title")
    if isinstance(title, str) and title:
        return title

    name = PurePosixPath(file_path).name
    if extension and name.endswith(extension) and len(name) > len(extension):
        return name[: -len(extension)]
    return name


def extract_tags(frontmatter: dict[str, FrontmatterValue]) -> list[str]:
    """Tags from frontmatter, only when ``tags`` is a list"""
    tags = frontmatter.get("tags")
    if isinstance(tags, list):
        return [str(tag) for tag in tags]
    return []


def index_note(vault_root: Path, relative_path: str, extension: str = ".md") -> NoteMetadata:
    """
    Build metadata for one note.

    Args:
        vault_root: Absolute vault directory
        relative_path: "/" separated path relative to vault_root

    Returns:
        NoteMetadata with no issues assigned

    Raises:
        OSError when the file cannot be stat-ed or read. Bytes that are not
        valid UTF-8 become U+FFFD instead of failing the note.
    """
    file_path = vault_root / relative_path
    stat = file_path.stat()
    content = file_path.read_text(encoding="utf-8", errors="replace")
    frontmatter = parse_frontmatter(content)

    return NoteMetadata(
        path=relative_path,
        title=extract_title(content, frontmatter, relative_path, extension),
        size=stat.st_size,
        modified_at=timestamp_from_epoch(stat.st_mtime),
        tags=extract_tags(frontmatter),
        issues=[],
    )
