"""Plugin catalog: load, query and render command/skill collections."""

import logging

from .errors import (
    AmbiguousNameError,
    DuplicateNameError,
    InstallError,
    MalformedDocumentError,
    NotFoundError,
    RegistryError,
)
from .installer import install_collection, uninstall_collection
from .loader import RegistryLoader, load_registry
from .registry import Registry
from .render import render_commands_section, render_skills_section
from .resolve import resolve_invocation
from .types import (
    Collection,
    Document,
    DocumentSummary,
    InvocationMode,
    LoadWarning,
    PluginManifest,
    ResolvedInput,
)

# Library use stays silent until the CLI calls setup_logger()
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AmbiguousNameError",
    "Collection",
    "Document",
    "DocumentSummary",
    "DuplicateNameError",
    "InstallError",
    "InvocationMode",
    "LoadWarning",
    "MalformedDocumentError",
    "NotFoundError",
    "PluginManifest",
    "Registry",
    "RegistryError",
    "RegistryLoader",
    "ResolvedInput",
    "install_collection",
    "load_registry",
    "render_commands_section",
    "render_skills_section",
    "resolve_invocation",
    "uninstall_collection",
]
