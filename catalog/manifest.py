"""Readers for plugin and marketplace manifests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import aiofiles.os

from .errors import MalformedDocumentError
from .parser import read_text
from .types import PluginManifest

MANIFEST_DIRNAME = ".claude-plugin"
PLUGIN_MANIFEST = "plugin.json"
MARKETPLACE_MANIFEST = "marketplace.json"


@dataclass(frozen=True)
class MarketplaceEntry:
    name: str
    source: Path | None
    description: str = ""


async def _read_json(path: Path) -> dict:
    try:
        data = json.loads(await read_text(path))
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(path, f"unreadable manifest ({e})") from e
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e
    if not isinstance(data, dict):
        raise MalformedDocumentError(path, "manifest must be a JSON object")
    return data


def _path_list(data: dict, key: str, path: Path) -> tuple[str, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MalformedDocumentError(path, f"'{key}' must be a path or a list of paths")
    if any("\0" in item for item in value):
        raise MalformedDocumentError(path, f"'{key}' contains a path with a NUL byte")
    return tuple(value)


def _author(value: object) -> str:
    # Either "Jane Doe" or {"name": "Jane Doe", "email": ...}
    if isinstance(value, dict):
        return str(value.get("name", "")).strip()
    if value is None:
        return ""
    return str(value).strip()


async def read_plugin_manifest(collection_dir: Path) -> PluginManifest | None:
    """Read `<collection>/.claude-plugin/plugin.json`, or None when absent.

    Raises:
        MalformedDocumentError: If the manifest exists but cannot be used.
    """
    path = collection_dir / MANIFEST_DIRNAME / PLUGIN_MANIFEST
    if not await aiofiles.os.path.isfile(path):
        return None

    data = await _read_json(path)
    return PluginManifest(
        name=str(data.get("name", "")).strip(),
        version=str(data.get("version", "")).strip(),
        description=str(data.get("description", "")).strip(),
        author=_author(data.get("author")),
        commands=_path_list(data, "commands", path),
        skills=_path_list(data, "skills", path),
    )


async def read_marketplace(root: Path) -> list[MarketplaceEntry] | None:
    """Read `<root>/.claude-plugin/marketplace.json`, or None when absent.

    Entries whose source is not a local directory path (e.g. a GitHub
    reference object) get `source=None`; they cannot be loaded from disk.

    Raises:
        MalformedDocumentError: If the marketplace file cannot be used.
    """
    path = root / MANIFEST_DIRNAME / MARKETPLACE_MANIFEST
    if not await aiofiles.os.path.isfile(path):
        return None

    data = await _read_json(path)
    plugins = data.get("plugins", [])
    if not isinstance(plugins, list):
        raise MalformedDocumentError(path, "'plugins' must be a list")

    entries: list[MarketplaceEntry] = []
    for index, item in enumerate(plugins):
        if not isinstance(item, dict):
            raise MalformedDocumentError(path, f"plugins[{index}] must be an object")
        name = str(item.get("name", "")).strip()
        source = item.get("source", name)
        if not name:
            raise MalformedDocumentError(path, f"plugins[{index}] has no name")
        local = isinstance(source, str) and source.strip()
        entries.append(
            MarketplaceEntry(
                name=name,
                source=(root / source.strip()).resolve() if local else None,
                description=str(item.get("description", "")).strip(),
            )
        )
    return entries
