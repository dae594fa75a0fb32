"""Frontmatter parsing and file discovery helpers."""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiofiles
import aiofiles.os
import yaml

SKILL_FILENAME = "SKILL.md"
COMMANDS_DIRNAME = "commands"
SKILLS_DIRNAME = "skills"

# Files in a flat collection that document the collection rather than being commands
_NON_DOCUMENT_FILES = {"readme.md", "changelog.md", "license.md", "contributing.md"}


def split_frontmatter(text: str) -> tuple[dict[str, object], str]:
    lines = text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, text

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, text

    yaml_text = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError:
        return {}, text

    if not isinstance(data, dict):
        return {}, body

    return data, body


def header_text(frontmatter: dict[str, object], key: str) -> str:
    """Return a header field as stripped text, or "" when absent or not scalar."""
    value = frontmatter.get(key)
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def header_list(frontmatter: dict[str, object], key: str) -> tuple[str, ...]:
    value = frontmatter.get(key, [])
    if isinstance(value, list):
        return tuple(str(item).strip() for item in value if str(item).strip())
    if isinstance(value, str) and value.strip():
        return (value.strip(),)
    return ()


def first_line_summary(body: str) -> str:
    for line in body.splitlines():
        stripped = line.strip().lstrip("#").strip()
        if stripped:
            return stripped
    return ""


def split_invocation(value: str, prefix: str) -> tuple[str, str]:
    stripped = value[len(prefix) :].strip()
    name, _, rest = stripped.partition(" ")
    return name.strip(), rest.strip()


async def read_text(path: Path) -> str:
    async with aiofiles.open(path, encoding="utf-8") as handle:
        return await handle.read()


async def list_command_files(commands_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.isdir(commands_dir):
        return []

    def _collect() -> list[Path]:
        return sorted(p for p in commands_dir.glob("*.md") if p.is_file())

    return await asyncio.to_thread(_collect)


async def list_skill_files(skills_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.isdir(skills_dir):
        return []

    def _collect() -> list[Path]:
        results: list[Path] = []
        for entry in sorted(skills_dir.iterdir()):
            if not entry.is_dir():
                continue
            candidate = entry / SKILL_FILENAME
            if candidate.is_file():
                results.append(candidate)
        return results

    return await asyncio.to_thread(_collect)


async def list_flat_command_files(collection_dir: Path) -> list[Path]:
    """Markdown files directly inside a collection without commands/ or skills/."""

    def _collect() -> list[Path]:
        return sorted(
            p
            for p in collection_dir.glob("*.md")
            if p.is_file() and p.name.lower() not in _NON_DOCUMENT_FILES
        )

    return await asyncio.to_thread(_collect)


async def list_collection_dirs(root: Path) -> list[Path]:
    if not await aiofiles.os.path.isdir(root):
        return []

    def _collect() -> list[Path]:
        return sorted(p for p in root.iterdir() if p.is_dir() and not p.name.startswith("."))

    return await asyncio.to_thread(_collect)
