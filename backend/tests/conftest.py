"""测试公共夹具：在临时目录中构造 vault。"""

from pathlib import Path

import pytest


def write_note(root: Path, relative_path: str, content: str) -> Path:
    """在 root 下写入一篇笔记，自动创建父目录。"""
    file_path = root / relative_path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path


@pytest.fixture
def sample_vault(tmp_path: Path) -> Path:
    """包含隐藏目录、嵌套目录与多种 frontmatter 形式的样例 vault。"""
    vault = tmp_path / "vault"
    vault.mkdir()

    write_note(vault, ".obsidian/app.json", "{}")
    (vault / ".vault-triage").mkdir()
    write_note(vault, ".hidden/secret.md", "# Secret")

    write_note(
        vault,
        "note1.md",
        "---\ntags:\n  - journal\n  - daily\n---\n# Note One\n\nSome content here.",
    )
    write_note(vault, "note2.md", "# Note Two\n\nNo frontmatter.")
    write_note(vault, "readme.txt", "Not a markdown file")
    write_note(vault, "subfolder/deep-note.md", "---\ntags: [project, active]\n---\n# Deep Note")
    write_note(vault, "subfolder/deeper/leaf.md", "# Leaf\n\nDeep leaf note.")
    write_note(
        vault,
        "frontmatter-only.md",
        "---\ntags:\n  - meta\ntitle: Custom Title\n---\nBody text without heading.",
    )
    write_note(vault, "empty.md", "")
    return vault
