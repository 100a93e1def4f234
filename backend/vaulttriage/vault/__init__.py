"""Vault module - frontmatter parsing, note extraction, scanning and caching"""

from .frontmatter import parse_frontmatter
from .parser import extract_title, extract_tags, index_note
from .scanner import walk_note_files, count_note_files, scan_vault
from .cache import write_scan_cache, load_scan_cache

__all__ = [
    "parse_frontmatter",
    "extract_title",
    "extract_tags",
    "index_note",
    "walk_note_files",
    "count_note_files",
    "scan_vault",
    "write_scan_cache",
    "load_scan_cache",
]
