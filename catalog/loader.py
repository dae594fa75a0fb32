"""Discover collections under a root directory and build a Registry."""

from __future__ import annotations

from pathlib import Path

import aiofiles.os

from utils import get_logger

from .errors import DuplicateNameError, MalformedDocumentError
from .manifest import read_marketplace, read_plugin_manifest
from .parser import (
    COMMANDS_DIRNAME,
    SKILL_FILENAME,
    SKILLS_DIRNAME,
    first_line_summary,
    header_list,
    header_text,
    list_collection_dirs,
    list_command_files,
    list_flat_command_files,
    list_skill_files,
    read_text,
    split_frontmatter,
)
from .registry import Registry
from .types import Collection, Document, InvocationMode, LoadWarning, PluginManifest

logger = get_logger(__name__)


class RegistryLoader:
    """Scan a root directory once and produce a Registry.

    Malformed documents and manifests are skipped and recorded as warnings;
    with ``strict=True`` the first one is raised instead. Duplicate names are
    always raised.
    """

    def __init__(self, root: Path | str, strict: bool = False) -> None:
        self.root = Path(root).expanduser()
        self.strict = strict
        self._warnings: list[LoadWarning] = []

    async def load(self) -> Registry:
        self._warnings = []
        collections: list[Collection] = []

        for name, path in await self._discover():
            collection = await self.load_collection(path, name=name)
            if collection is not None:
                collections.append(collection)

        registry = Registry(collections=tuple(collections), warnings=tuple(self._warnings))
        logger.info(
            f"Loaded {len(registry)} collection(s), {len(registry.documents())} document(s) "
            f"from {self.root} ({len(registry.warnings)} warning(s))"
        )
        return registry

    async def _discover(self) -> list[tuple[str | None, Path]]:
        try:
            entries = await read_marketplace(self.root)
        except MalformedDocumentError as e:
            self._skip(e)
            entries = None

        if entries is None:
            try:
                paths = await list_collection_dirs(self.root)
            except OSError as e:
                self._warn(self.root, f"unreadable root directory ({e})")
                return []
            return [(None, path) for path in paths]

        results: list[tuple[str | None, Path]] = []
        for entry in entries:
            if entry.source is None:
                self._warn(self.root, f"plugin '{entry.name}' has no local source; skipped")
                continue
            if not await aiofiles.os.path.isdir(entry.source):
                self._warn(entry.source, f"plugin '{entry.name}' source directory not found")
                continue
            results.append((entry.name, entry.source))
        return results

    async def load_collection(
        self, path: Path, name: str | None = None, default_name: str | None = None
    ) -> Collection | None:
        """Load one collection directory, or None when it holds no usable documents.

        The collection is named `name`, else by its manifest, else `default_name`,
        else after its directory.
        """
        try:
            manifest = await read_plugin_manifest(path)
        except MalformedDocumentError as e:
            self._skip(e)
            return None
        manifest = manifest or PluginManifest()
        collection_name = name or manifest.name or default_name or path.name

        try:
            files = await self._document_files(path, manifest)
        except OSError as e:
            self._warn(path, f"unreadable collection ({e})")
            return None

        documents: list[Document] = []
        seen: dict[str, Path] = {}
        for doc_path, mode in files:
            doc = await self._load_document(doc_path, mode, collection_name)
            if doc is None:
                continue
            if doc.name in seen:
                raise DuplicateNameError(
                    doc.name, seen[doc.name], doc.path, collection=collection_name
                )
            seen[doc.name] = doc.path
            documents.append(doc)

        if not documents:
            logger.debug(f"Omitting empty collection {collection_name} at {path}")
            return None

        return Collection(
            name=collection_name,
            path=path,
            documents=tuple(documents),
            manifest=manifest,
        )

    async def _document_files(
        self, path: Path, manifest: PluginManifest
    ) -> list[tuple[Path, InvocationMode]]:
        commands_dir = path / COMMANDS_DIRNAME
        skills_dir = path / SKILLS_DIRNAME

        if manifest.commands is not None:
            commands = await self._resolve_listed(path, manifest.commands, InvocationMode.COMMAND)
        else:
            commands = await list_command_files(commands_dir)

        if manifest.skills is not None:
            skills = await self._resolve_listed(path, manifest.skills, InvocationMode.SKILL)
        else:
            skills = await list_skill_files(skills_dir)

        structured = (
            manifest.commands is not None
            or manifest.skills is not None
            or await aiofiles.os.path.isdir(commands_dir)
            or await aiofiles.os.path.isdir(skills_dir)
        )
        if not structured:
            commands = await list_flat_command_files(path)

        return [(p, InvocationMode.COMMAND) for p in commands] + [
            (p, InvocationMode.SKILL) for p in skills
        ]

    async def _resolve_listed(
        self, base: Path, listed: tuple[str, ...], mode: InvocationMode
    ) -> list[Path]:
        results: list[Path] = []
        for item in listed:
            try:
                target = (base / item).resolve()
            except (OSError, ValueError) as e:
                self._warn(base, f"invalid listed {mode.value} path {item!r} ({e})")
                continue
            if await aiofiles.os.path.isfile(target):
                results.append(target)
            elif mode is InvocationMode.SKILL and await aiofiles.os.path.isfile(
                target / SKILL_FILENAME
            ):
                results.append(target / SKILL_FILENAME)
            elif await aiofiles.os.path.isdir(target):
                if mode is InvocationMode.SKILL:
                    results.extend(await list_skill_files(target))
                else:
                    results.extend(await list_command_files(target))
            else:
                self._warn(target, f"listed {mode.value} path not found")
        return results

    async def _load_document(
        self, path: Path, mode: InvocationMode, collection: str
    ) -> Document | None:
        try:
            content = await read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            self._warn(path, f"unreadable document ({e})")
            return None

        frontmatter, body = split_frontmatter(content)
        try:
            if mode is InvocationMode.SKILL:
                name, description = _skill_metadata(path, frontmatter)
            else:
                name = path.stem
                description = header_text(frontmatter, "description") or first_line_summary(body)
        except MalformedDocumentError as e:
            self._skip(e)
            return None

        return Document(
            name=name,
            description=description,
            invocation_mode=mode,
            body=body.strip(),
            collection=collection,
            path=path,
            argument_hint=header_text(frontmatter, "argument-hint"),
            requires_skills=header_list(frontmatter, "requires-skills"),
        )

    def _skip(self, error: MalformedDocumentError) -> None:
        if self.strict:
            raise error
        self._warn(error.path, error.reason)

    def _warn(self, path: Path, message: str) -> None:
        logger.warning(f"Skipping {path}: {message}")
        self._warnings.append(LoadWarning(path=path, message=message))


def _skill_metadata(path: Path, frontmatter: dict[str, object]) -> tuple[str, str]:
    name = header_text(frontmatter, "name")
    description = header_text(frontmatter, "description")
    missing = [field for field, value in (("name", name), ("description", description)) if not value]
    if missing:
        fields = " and ".join(f"'{f}'" for f in missing)
        raise MalformedDocumentError(path, f"skill is missing required {fields}")
    return name, description


async def load_registry(root: Path | str, strict: bool = False) -> Registry:
    """Load the registry rooted at `root`."""
    return await RegistryLoader(root, strict=strict).load()
