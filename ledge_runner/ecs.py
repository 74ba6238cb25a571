"""
Entity-Component-System Core
=============================
Data-driven ECS using integer entity IDs and component dictionaries.

Every store is an insertion-ordered dict, so queries always visit
entities in creation order. Platform landing and bullet hit scans
depend on that order being stable from run to run.
"""

from typing import Dict, Type, TypeVar, Optional, Iterator, Tuple, Any


# Type variable for component types
C = TypeVar('C')


class World:
    """
    The ECS World manages all entities and their components.

    Entities are integer IDs. Components are stored in dictionaries
    keyed by entity ID, with one dict per component type.
    """

    def __init__(self):
        self._next_entity_id: int = 0
        self._entities: Dict[int, None] = {}
        self._components: Dict[Type, Dict[int, Any]] = {}
        self._dead_entities: Dict[int, None] = {}  # Marked for removal

    def create_entity(self) -> int:
        """Create a new entity and return its ID."""
        entity_id = self._next_entity_id
        self._next_entity_id += 1
        self._entities[entity_id] = None
        return entity_id

    def destroy_entity(self, entity_id: int) -> None:
        """Mark an entity for destruction (processed at end of tick)."""
        self._dead_entities[entity_id] = None

    def process_dead_entities(self) -> int:
        """Remove all entities marked for destruction. Returns how many went."""
        removed = 0
        for entity_id in self._dead_entities:
            if entity_id in self._entities:
                del self._entities[entity_id]
                removed += 1
                for component_store in self._components.values():
                    component_store.pop(entity_id, None)
        self._dead_entities.clear()
        return removed

    def add_component(self, entity_id: int, component: Any) -> None:
        """Add a component to an entity."""
        self._components.setdefault(type(component), {})[entity_id] = component

    def remove_component(self, entity_id: int, component_type: Type[C]) -> None:
        """Remove a component from an entity."""
        if component_type in self._components:
            self._components[component_type].pop(entity_id, None)

    def get_component(self, entity_id: int, component_type: Type[C]) -> Optional[C]:
        """Get a component for an entity, or None if not found."""
        if component_type in self._components:
            return self._components[component_type].get(entity_id)
        return None

    def has_component(self, entity_id: int, component_type: Type) -> bool:
        """Check if an entity has a specific component."""
        if component_type in self._components:
            return entity_id in self._components[component_type]
        return False

    def query(self, *component_types: Type) -> Iterator[Tuple[Any, ...]]:
        """
        Query for all entities that have ALL specified component types.

        Yields tuples of (entity_id, component1, component2, ...) in
        entity creation order.
        """
        if not component_types:
            return

        stores = []
        for component_type in component_types:
            if component_type not in self._components:
                return
            stores.append(self._components[component_type])

        # Snapshot ids so systems may add entities while iterating
        for entity_id in list(stores[0]):
            if entity_id in self._dead_entities:
                continue
            if not all(entity_id in store for store in stores):
                continue
            yield (entity_id,) + tuple(store[entity_id] for store in stores)

    def entity_count(self) -> int:
        """Return the number of active entities."""
        return len(self._entities) - sum(
            1 for eid in self._dead_entities if eid in self._entities
        )

    def is_alive(self, entity_id: int) -> bool:
        """Check if an entity is alive (exists and not marked for death)."""
        return entity_id in self._entities and entity_id not in self._dead_entities
