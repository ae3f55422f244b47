"""In-memory relation store holding the flat set of person records."""

import logging
from typing import Any, Iterable, Iterator

import networkx as nx

from errors import DuplicateIdError, ValidationError
from models import Person

logger = logging.getLogger("legacytree.store")

# Fields that may be rewritten on an existing record as a side effect of an add
LINK_FIELDS = frozenset({"parent_id", "spouse_id"})


class RelationStore:
    """
    Owns every Person record, keyed by id in insertion order.

    Insertion order is significant: it decides sibling order in the
    hierarchy and therefore left-to-right placement in the layout.
    """

    def __init__(self, people: Iterable[Person] = ()):
        self._people: dict[str, Person] = {}
        self.revision = 0
        for person in people:
            if person.id in self._people:
                raise DuplicateIdError(person.id)
            self._people[person.id] = person.copy()

    def __len__(self) -> int:
        return len(self._people)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._people

    def __iter__(self) -> Iterator[Person]:
        return iter(list(self._people.values()))

    def people(self) -> list[Person]:
        return list(self._people.values())

    def person_by_id(self, person_id: str | None) -> Person | None:
        if person_id is None:
            return None
        return self._people.get(person_id)

    def children_of(self, person_id: str) -> list[Person]:
        return [p for p in self._people.values() if p.parent_id == person_id]

    def spouse_of(self, person_id: str) -> Person | None:
        person = self._people.get(person_id)
        if person is None:
            return None
        return self.person_by_id(person.spouse_id)

    def parent_ids(self) -> set[str]:
        """Ids of everyone recorded as someone's parent."""
        return {p.parent_id for p in self._people.values() if p.parent_id}

    def is_root(self, person_id: str) -> bool:
        person = self._people.get(person_id)
        return person is not None and not person.parent_id

    def root_ids(self) -> list[str]:
        return [p.id for p in self._people.values() if not p.parent_id]

    def parent_graph(self) -> nx.DiGraph:
        """Directed graph with a parent -> child edge for every recorded parent link."""
        G = nx.DiGraph()
        G.add_nodes_from(self._people)
        for person in self._people.values():
            if person.parent_id:
                G.add_edge(person.parent_id, person.id)
        return G

    def commit(
        self, new_person: Person | None = None, updates: dict[str, dict[str, Any]] | None = None
    ) -> None:
        """
        Apply one atomic write: insert `new_person` and rewrite link fields on
        existing records. Everything is checked before anything is applied, so
        a rejected commit leaves the store untouched.
        """
        updates = updates or {}
        if new_person is not None and new_person.id in self._people:
            raise DuplicateIdError(new_person.id)

        known = set(self._people)
        if new_person is not None:
            known.add(new_person.id)

        for person_id, changes in updates.items():
            if person_id not in self._people:
                raise ValidationError(f"Unknown person id: {person_id!r}", field="id")
            bad_fields = set(changes) - LINK_FIELDS
            if bad_fields:
                raise ValidationError(
                    f"Only link fields can be updated in place, got {sorted(bad_fields)}"
                )
            for value in changes.values():
                if value is not None and value not in known:
                    raise ValidationError(f"Link to unknown person id: {value!r}")

        if new_person is not None:
            self._people[new_person.id] = new_person
        for person_id, changes in updates.items():
            for name, value in changes.items():
                setattr(self._people[person_id], name, value)

        self.revision += 1
        logger.debug(
            "Commit r%d: added=%s updated=%s",
            self.revision,
            new_person.id if new_person else None,
            sorted(updates),
        )

    def snapshot(self) -> list[dict[str, Any]]:
        """Serializable copy of every record, in store order."""
        return [p.to_dict() for p in self._people.values()]
