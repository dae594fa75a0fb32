"""Install and uninstall collections under a plugins directory."""

from __future__ import annotations

import asyncio
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

import aiofiles
import aiofiles.os

from utils import get_logger

from .errors import InstallError, NotFoundError
from .loader import RegistryLoader
from .manifest import MANIFEST_DIRNAME, PLUGIN_MANIFEST
from .types import Collection

logger = get_logger(__name__)

_GIT_URL_RE = re.compile(r"^(https?://|git@|ssh://)")
_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def is_git_url(value: str) -> bool:
    return bool(_GIT_URL_RE.match(value)) or value.partition("#")[0].endswith(".git")


async def copy_file(src: Path, dst: Path) -> None:
    async with aiofiles.open(src, "rb") as reader, aiofiles.open(dst, "wb") as writer:
        while True:
            chunk = await reader.read(1024 * 128)
            if not chunk:
                break
            await writer.write(chunk)


async def copy_tree(src: Path, dst: Path) -> None:
    def _walk() -> list[tuple[Path, list[str], list[str]]]:
        results = []
        for root, dirs, files in os.walk(src):
            # Never copy a cloned repository's git metadata
            dirs[:] = [d for d in dirs if d != ".git"]
            results.append((Path(root), list(dirs), files))
        return results

    for root, dirs, files in await asyncio.to_thread(_walk):
        rel = root.relative_to(src)
        target_dir = dst / rel
        await aiofiles.os.makedirs(target_dir, exist_ok=True)
        for filename in files:
            await copy_file(root / filename, target_dir / filename)
        for dirname in dirs:
            await aiofiles.os.makedirs(target_dir / dirname, exist_ok=True)


async def remove_tree(path: Path) -> None:
    if not await aiofiles.os.path.exists(path):
        return
    await asyncio.to_thread(shutil.rmtree, path, True)


def format_candidate_list(paths: Iterable[Path]) -> str:
    return "\n".join(f"- {p}" for p in paths)


async def install_collection(source: str, plugins_dir: Path | str) -> Collection:
    """Install a collection from a local directory or a git URL.

    A git URL may name a subdirectory with `#path`. The collection is copied
    to `<plugins_dir>/<collection name>`.

    Raises:
        InstallError: If the source is invalid or the collection already exists.
    """
    source = source.strip()
    if not source:
        raise InstallError("Install source cannot be empty")

    plugins_dir = Path(plugins_dir).expanduser()
    if is_git_url(source):
        return await _install_from_git(source, plugins_dir)

    path = Path(source).expanduser().resolve()
    return await _install_from_path(path, plugins_dir)


async def uninstall_collection(name: str, plugins_dir: Path | str) -> Path:
    """Remove an installed collection and return the removed directory.

    Raises:
        InstallError: If the name is empty or unsafe.
        NotFoundError: If no such collection is installed.
    """
    name = name.strip()
    if not name:
        raise InstallError("Collection name cannot be empty")
    if not _SAFE_NAME_RE.match(name):
        raise InstallError(f"Invalid collection name: {name!r}")

    target_dir = Path(plugins_dir).expanduser() / name
    if not await aiofiles.os.path.isdir(target_dir):
        raise NotFoundError(name)
    await remove_tree(target_dir)
    logger.info(f"Uninstalled collection {name} from {target_dir}")
    return target_dir


async def _install_from_path(
    path: Path, plugins_dir: Path, default_name: str | None = None
) -> Collection:
    if not await aiofiles.os.path.isdir(path):
        raise InstallError(f"Collection directory not found: {path}")

    # Validate strictly so a broken collection is never installed
    collection = await RegistryLoader(path.parent, strict=True).load_collection(
        path, default_name=default_name
    )
    if collection is None:
        raise InstallError(f"No commands or skills found in {path}")
    if not _SAFE_NAME_RE.match(collection.name):
        raise InstallError(f"Invalid collection name: {collection.name!r}")

    dest_root = plugins_dir / collection.name
    if await aiofiles.os.path.exists(dest_root):
        raise InstallError(f"Collection '{collection.name}' already exists at {dest_root}")

    await aiofiles.os.makedirs(plugins_dir, exist_ok=True)
    await copy_tree(path, dest_root)
    logger.info(f"Installed collection {collection.name} from {path} to {dest_root}")

    installed = await RegistryLoader(plugins_dir).load_collection(dest_root, name=collection.name)
    return installed or collection


async def _install_from_git(url: str, plugins_dir: Path) -> Collection:
    subdir = None
    if "#" in url:
        url, _, subdir = url.partition("#")
        subdir = subdir.strip() or None

    def _mktemp() -> str:
        return tempfile.mkdtemp(prefix="skillbook-")

    temp_dir = Path(await asyncio.to_thread(_mktemp))
    try:
        try:
            result = await asyncio.create_subprocess_exec(
                "git",
                "clone",
                "--depth",
                "1",
                url,
                str(temp_dir),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise InstallError("git is required to install from URL") from e
        _, stderr = await result.communicate()
        if result.returncode != 0:
            raise InstallError(f"Git clone failed: {stderr.decode(errors='ignore').strip()}")

        if subdir:
            candidate = temp_dir / subdir
            if not candidate.exists():
                raise InstallError(f"Collection path not found in repository: {subdir}")
            return await _install_from_path(candidate, plugins_dir)

        pattern = f"{MANIFEST_DIRNAME}/{PLUGIN_MANIFEST}"
        candidates = await asyncio.to_thread(
            lambda: sorted(p.parent.parent for p in temp_dir.rglob(pattern))
        )
        if not candidates:
            return await _install_from_path(temp_dir, plugins_dir, _repo_name(url))
        if len(candidates) > 1:
            raise InstallError(
                "Multiple collections found. Specify one with '#<path>':\n"
                f"{format_candidate_list(c.relative_to(temp_dir) for c in candidates)}"
            )
        return await _install_from_path(candidates[0], plugins_dir)
    finally:
        await remove_tree(temp_dir)


def _repo_name(url: str) -> str:
    tail = url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    return tail[: -len(".git")] if tail.endswith(".git") else tail
