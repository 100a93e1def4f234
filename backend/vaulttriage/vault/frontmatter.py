"""Minimal frontmatter parser.

Only two line-oriented rules are understood inside the leading ``---`` block:

    key: value              scalar, or an inline list when written as [a, b]
    key:                    block list, gathered from the following "- item" lines
      - item

Anything else is ignored. This is not a YAML parser.
"""

import re

FrontmatterValue = str | list[str]

DELIMITER = "---"

KEY_VALUE_PATTERN = re.compile(r"^([A-Za-z_][\w-]*)\s*:\s*(.+)$", re.ASCII)
LIST_KEY_PATTERN = re.compile(r"^([A-Za-z_][\w-]*)\s*:\s*$", re.ASCII)
LIST_ITEM_PATTERN = re.compile(r"^\s*-\s+(\S.*)$")
INLINE_LIST_PATTERN = re.compile(r"^\[(.*)\]$")


def extract_block(content: str) -> list[str] | None:
    """Return the lines between the leading --- delimiters, or None if there is no block"""
    lines = [line.rstrip("\r") for line in content.split("\n")]
    if not lines or lines[0] != DELIMITER:
        return None

    for index in range(1, len(lines)):
        if lines[index] == DELIMITER:
            return lines[1:index]
    return None


def _parse_scalar(raw_value: str) -> FrontmatterValue:
    value = raw_value.strip()
    inline = INLINE_LIST_PATTERN.match(value)
    if inline:
        return [item.strip() for item in inline.group(1).split(",") if item.strip()]
    return value


def parse_frontmatter(content: str) -> dict[str, FrontmatterValue]:
    """
    Parse the leading frontmatter block of a note.

    Args:
        content: Raw note text

    Returns:
        Mapping of key to a scalar string or a list of strings. Empty when the
        note has no well-formed block.
    """
    block = extract_block(content)
    if block is None:
        return {}

    result: dict[str, FrontmatterValue] = {}

    # Pass 1: scalars and inline lists
    for line in block:
        match = KEY_VALUE_PATTERN.match(line)
        if match:
            result[match.group(1)] = _parse_scalar(match.group(2))

    # Pass 2: block lists, overriding pass 1
    index = 0
    while index < len(block):
        key_match = LIST_KEY_PATTERN.match(block[index])
        index += 1
        if not key_match:
            continue

        items = []
        while index < len(block):
            item_match = LIST_ITEM_PATTERN.match(block[index])
            if not item_match:
                break
            items.append(item_match.group(1).strip())
            index += 1

        if items:
            result[key_match.group(1)] = items

    return result
