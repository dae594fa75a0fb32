"""Immutable registry of collections and their documents."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import AmbiguousNameError, DuplicateNameError, NotFoundError
from .types import Collection, Document, DocumentSummary, InvocationMode, LoadWarning

QUALIFIER = ":"


@dataclass(frozen=True)
class Registry:
    """Snapshot of every collection found under one root.

    Collections keep discovery order. Names are unique across the registry and
    document names are unique within each collection; both are checked on
    construction so a Registry value always satisfies them.
    """

    collections: tuple[Collection, ...] = ()
    warnings: tuple[LoadWarning, ...] = ()
    _index: dict[str, Collection] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, Collection] = {}
        for collection in self.collections:
            existing = index.get(collection.name)
            if existing is not None:
                raise DuplicateNameError(collection.name, existing.path, collection.path)
            seen: dict[str, Document] = {}
            for doc in collection.documents:
                if doc.name in seen:
                    raise DuplicateNameError(
                        doc.name, seen[doc.name].path, doc.path, collection=collection.name
                    )
                seen[doc.name] = doc
            index[collection.name] = collection
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.collections)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def collection_names(self) -> list[str]:
        return [c.name for c in self.collections]

    def get_collection(self, name: str) -> Collection:
        collection = self._index.get(name)
        if collection is None:
            raise NotFoundError(name)
        return collection

    def list_documents(self, collection: str) -> list[DocumentSummary]:
        """List (name, description, invocation mode) of a collection in discovery order."""
        return [doc.summary() for doc in self.get_collection(collection).documents]

    def find(self, collection: str, name: str) -> Document:
        doc = self.get_collection(collection).get(name)
        if doc is None:
            raise NotFoundError(name, collection=collection)
        return doc

    def find_qualified(self, qualified: str) -> Document:
        """Find a document by `collection:name`."""
        collection, sep, name = qualified.partition(QUALIFIER)
        if not sep or not collection or not name:
            raise NotFoundError(qualified)
        return self.find(collection, name)

    def find_by_name(self, name: str, mode: InvocationMode | None = None) -> Document:
        """Find a document by bare or qualified name across all collections.

        Raises:
            NotFoundError: If no collection defines the name.
            AmbiguousNameError: If more than one collection defines it.
        """
        if QUALIFIER in name:
            doc = self.find_qualified(name)
            if mode is not None and doc.invocation_mode is not mode:
                raise NotFoundError(name)
            return doc

        matches = [
            doc
            for doc in self.documents()
            if doc.name == name and (mode is None or doc.invocation_mode is mode)
        ]
        if not matches:
            raise NotFoundError(name)
        if len(matches) > 1:
            raise AmbiguousNameError(name, [doc.collection for doc in matches])
        return matches[0]

    def documents(self) -> list[Document]:
        return [doc for collection in self.collections for doc in collection.documents]

    def skills(self) -> list[Document]:
        return [doc for doc in self.documents() if doc.invocation_mode is InvocationMode.SKILL]

    def commands(self) -> list[Document]:
        return [doc for doc in self.documents() if doc.invocation_mode is InvocationMode.COMMAND]
