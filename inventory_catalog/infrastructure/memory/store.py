"""Infrastructure layer - In-memory catalog store.

The store owns the canonical parts and products for the lifetime of the
process. Both collections keep insertion order, which callers rely on for
display and for index-addressed updates.
"""

import threading
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from ...domain.constants import DEFAULT_FIRST_ID
from ...domain.entities import Part, Product
from ...domain.exceptions import CatalogIndexError


class CatalogEntity(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def name(self) -> str: ...


EntityT = TypeVar("EntityT", bound=CatalogEntity)


class EntityCollection(Generic[EntityT]):
    """Insertion-ordered collection of entities guarded by a single lock."""

    def __init__(self, kind: str, first_id: int = DEFAULT_FIRST_ID):
        self.kind = kind
        self._entities: list[EntityT] = []
        self._next_id = first_id
        self._lock = threading.RLock()

    def next_id(self) -> int:
        """Hand out the next id. Ids are never reused, even after deletion."""
        with self._lock:
            assigned = self._next_id
            self._next_id += 1
            return assigned

    def add(self, entity: EntityT) -> None:
        with self._lock:
            self._entities.append(entity)
            # Keep the counter ahead of ids assigned by callers
            if entity.id >= self._next_id:
                self._next_id = entity.id + 1

    def find_by_id(self, entity_id: int) -> EntityT | None:
        with self._lock:
            for entity in self._entities:
                if entity.id == entity_id:
                    return entity
        return None

    def find_by_name(self, name: str) -> list[EntityT]:
        wanted = name.lower()
        return [e for e in self.snapshot() if e.name.lower() == wanted]

    def index_of(self, entity_id: int) -> int | None:
        with self._lock:
            for index, entity in enumerate(self._entities):
                if entity.id == entity_id:
                    return index
        return None

    def replace(self, index: int, entity: EntityT) -> None:
        with self._lock:
            if not 0 <= index < len(self._entities):
                raise CatalogIndexError(
                    f"No {self.kind} at index {index} "
                    + f"(collection holds {len(self._entities)})"
                )
            self._entities[index] = entity
            if entity.id >= self._next_id:
                self._next_id = entity.id + 1

    def remove(
        self, entity_id: int, guard: Callable[[EntityT], None] | None = None
    ) -> bool:
        """Remove the first entity with ``entity_id``.

        ``guard`` sees the stored entity under the lock and may raise to
        veto the removal.
        """
        with self._lock:
            for index, entity in enumerate(self._entities):
                if entity.id == entity_id:
                    if guard is not None:
                        guard(entity)
                    del self._entities[index]
                    return True
        return False

    def snapshot(self) -> list[EntityT]:
        with self._lock:
            return list(self._entities)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)


class CatalogStore:
    """In-memory store for parts and products.

    Lookups never raise: a missing entity is reported as ``None`` (by id) or
    an empty list (by name). Deleting an absent entity returns ``False``.
    Updating an index outside the collection raises ``CatalogIndexError``,
    which signals a caller bug rather than bad user input.

    The store does not enforce business rules such as refusing to delete a
    product that still has associated parts; that belongs to the service
    layer.
    """

    def __init__(self, first_id: int = DEFAULT_FIRST_ID):
        self._parts: EntityCollection[Part] = EntityCollection("part", first_id)
        self._products: EntityCollection[Product] = EntityCollection(
            "product", first_id
        )

    # Id assignment

    def next_part_id(self) -> int:
        return self._parts.next_id()

    def next_product_id(self) -> int:
        return self._products.next_id()

    # Parts

    def add_part(self, part: Part) -> None:
        """Append a part. Id uniqueness is the caller's responsibility."""
        self._parts.add(part)

    def lookup_part(self, part_id: int) -> Part | None:
        """Find the first part with the given id."""
        return self._parts.find_by_id(part_id)

    def lookup_part_by_name(self, name: str) -> list[Part]:
        """Find all parts whose name equals ``name``, ignoring case."""
        return self._parts.find_by_name(name)

    def index_of_part(self, part_id: int) -> int | None:
        """Position of the part with the given id, or None."""
        return self._parts.index_of(part_id)

    def update_part(self, index: int, part: Part) -> None:
        """Replace the part at ``index`` with a new part.

        Raises:
            CatalogIndexError: If ``index`` is not a valid position
        """
        self._parts.replace(index, part)

    def delete_part(self, part: Part) -> bool:
        """Remove the first part with the same id as ``part``.

        Returns:
            True if a part was removed, False if none matched
        """
        return self._parts.remove(part.id)

    def all_parts(self) -> list[Part]:
        """Return an independent copy of the parts collection."""
        return self._parts.snapshot()

    @property
    def part_count(self) -> int:
        return len(self._parts)

    # Products

    def add_product(self, product: Product) -> None:
        """Append a product. Id uniqueness is the caller's responsibility."""
        self._products.add(product)

    def lookup_product(self, product_id: int) -> Product | None:
        """Find the first product with the given id."""
        return self._products.find_by_id(product_id)

    def lookup_product_by_name(self, name: str) -> list[Product]:
        """Find all products whose name equals ``name``, ignoring case."""
        return self._products.find_by_name(name)

    def index_of_product(self, product_id: int) -> int | None:
        """Position of the product with the given id, or None."""
        return self._products.index_of(product_id)

    def update_product(self, index: int, product: Product) -> None:
        """Replace the product at ``index`` with a new product.

        Raises:
            CatalogIndexError: If ``index`` is not a valid position
        """
        self._products.replace(index, product)

    def delete_product(
        self, product: Product, guard: Callable[[Product], None] | None = None
    ) -> bool:
        """Remove the first product with the same id as ``product``.

        Args:
            product: Product to remove, matched by id
            guard: Called with the stored product before removal, while the
                collection is locked; raising aborts the removal

        Returns:
            True if a product was removed, False if none matched
        """
        return self._products.remove(product.id, guard)

    def all_products(self) -> list[Product]:
        """Return an independent copy of the products collection."""
        return self._products.snapshot()

    @property
    def product_count(self) -> int:
        return len(self._products)
