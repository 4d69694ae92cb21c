"""Incremental prefix search over catalog snapshots.

A query matches an entity when the entity's id, written in decimal, starts
with the query, or when its name starts with the query ignoring case. An
empty query matches everything. Matching is prefix only: "ack" does not
find "Bracket".
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Generic

from ..infrastructure.memory.store import CatalogEntity, EntityT


def matches(entity: CatalogEntity, query: str | None) -> bool:
    """Check whether ``entity`` matches the search ``query``."""
    if not query:
        return True
    return str(entity.id).startswith(query) or entity.name.lower().startswith(
        query.lower()
    )


def make_predicate(query: str | None) -> Callable[[CatalogEntity], bool]:
    """Build a predicate for ``query`` that can be applied to many entities."""

    def predicate(entity: CatalogEntity) -> bool:
        return matches(entity, query)

    return predicate


def search(entities: Iterable[EntityT], query: str | None) -> list[EntityT]:
    """Filter ``entities`` by ``query``, keeping their original order."""
    predicate = make_predicate(query)
    return [entity for entity in entities if predicate(entity)]


class SearchView(Generic[EntityT]):
    """A filtered view over a snapshot of one catalog collection.

    Every query change re-filters the whole snapshot. ``refresh`` takes a new
    snapshot from the supplier (e.g. after a deletion) and re-applies the
    current query, so the visible results stay consistent with what the
    user has typed.
    """

    def __init__(self, supplier: Callable[[], list[EntityT]], query: str = ""):
        self._supplier = supplier
        self._snapshot = supplier()
        self._query = query
        self._results = search(self._snapshot, query)

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, value: str | None) -> None:
        self._query = value or ""
        self._results = search(self._snapshot, self._query)

    @property
    def results(self) -> list[EntityT]:
        return list(self._results)

    @property
    def first(self) -> EntityT | None:
        """The entity a search would select first, if any."""
        if not self._query or not self._results:
            return None
        return self._results[0]

    def refresh(self) -> None:
        """Take a fresh snapshot and re-apply the current query."""
        self._snapshot = self._supplier()
        self._results = search(self._snapshot, self._query)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[EntityT]:
        return iter(self.results)
