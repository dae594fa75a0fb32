"""Data models for the document catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class InvocationMode(str, Enum):
    COMMAND = "explicit-command"
    SKILL = "model-invoked-skill"


@dataclass(frozen=True)
class Document:
    name: str
    description: str
    invocation_mode: InvocationMode
    body: str
    collection: str
    path: Path
    argument_hint: str = ""
    requires_skills: tuple[str, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.collection}:{self.name}"

    @property
    def is_skill(self) -> bool:
        return self.invocation_mode is InvocationMode.SKILL

    def summary(self) -> DocumentSummary:
        return DocumentSummary(self.name, self.description, self.invocation_mode)


@dataclass(frozen=True)
class DocumentSummary:
    name: str
    description: str
    invocation_mode: InvocationMode


@dataclass(frozen=True)
class PluginManifest:
    """Contents of `.claude-plugin/plugin.json` (all fields optional)."""

    name: str = ""
    version: str = ""
    description: str = ""
    author: str = ""
    commands: tuple[str, ...] | None = None
    skills: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Collection:
    name: str
    path: Path
    documents: tuple[Document, ...] = ()
    manifest: PluginManifest = field(default_factory=PluginManifest)

    @property
    def description(self) -> str:
        return self.manifest.description

    def names(self) -> list[str]:
        return [doc.name for doc in self.documents]

    def get(self, name: str) -> Document | None:
        for doc in self.documents:
            if doc.name == name:
                return doc
        return None


@dataclass(frozen=True)
class LoadWarning:
    """A document or collection skipped during a load."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class ResolvedInput:
    original: str
    rendered: str
    invoked_command: str | None
    invoked_skill: str | None
    arguments: str
