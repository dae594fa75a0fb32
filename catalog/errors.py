"""Exceptions raised while loading and querying the catalog."""

from __future__ import annotations

from pathlib import Path


class RegistryError(Exception):
    """Base class for catalog errors."""


class DuplicateNameError(RegistryError):
    """Two documents of one collection (or two collections) share a name."""

    def __init__(
        self,
        name: str,
        first: Path | None,
        second: Path | None,
        collection: str | None = None,
    ):
        self.name = name
        self.first = first
        self.second = second
        self.collection = collection
        where = f" in collection '{collection}'" if collection else ""
        super().__init__(f"Duplicate name '{name}'{where}: {first} and {second}")


class MalformedDocumentError(RegistryError):
    """A document lacks metadata it is required to declare."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class NotFoundError(RegistryError, LookupError):
    """A collection or document lookup failed."""

    def __init__(self, name: str, collection: str | None = None):
        self.name = name
        self.collection = collection
        if collection:
            message = f"Document '{name}' not found in collection '{collection}'"
        else:
            message = f"'{name}' not found"
        super().__init__(message)


class AmbiguousNameError(RegistryError):
    """A bare document name matches documents in several collections."""

    def __init__(self, name: str, collections: list[str]):
        self.name = name
        self.collections = collections
        choices = ", ".join(f"{c}:{name}" for c in collections)
        super().__init__(f"'{name}' is defined in several collections; use one of: {choices}")


class InstallError(RegistryError):
    """Installing a collection failed."""
