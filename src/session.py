"""Family tree core: the read path (layout) and write path (add person) in one place."""

import logging
from typing import Any, Callable, Iterable

from collapse import prune, toggle
from errors import StructureError
from hierarchy import project
from layout import DEFAULT_CONFIG, Layout, LayoutConfig, layout
from models import Person, RelationType, User
from mutations import add_person
from permissions import authorize, can_mutate
from store import RelationStore

logger = logging.getLogger("legacytree.session")

PersistHook = Callable[[list[Person]], None]


class FamilyTreeSession:
    """
    Holds the relation store plus the per-viewer state (user, expansion set,
    selection) and recomputes the layout whenever either changes.

    Persistence is fire-and-forget: `persist` receives a snapshot after each
    change and any exception it raises is logged, never propagated.
    """

    def __init__(
        self,
        people: Iterable[Person] = (),
        user: User | None = None,
        persist: PersistHook | None = None,
        expanded: Iterable[str] = (),
        config: LayoutConfig = DEFAULT_CONFIG,
    ):
        self.store = RelationStore(people)
        self.user = user
        self.persist = persist
        self.expanded: frozenset[str] = frozenset(expanded)
        self.selected_id: str | None = None
        self.config = config
        self._cache_key: tuple | None = None
        self._cache: Layout | None = None

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return len(self.store) == 0

    def person_by_id(self, person_id: str | None) -> Person | None:
        """A detached copy of the record; edits to it never reach the store."""
        found = self.store.person_by_id(person_id)
        return None if found is None else found.copy()

    def select(self, person_id: str | None):
        self.selected_id = person_id if person_id in self.store else None

    @property
    def selected(self) -> Person | None:
        return self.person_by_id(self.selected_id)

    def toggle(self, node_id: str, cascade: bool = False):
        tree = project(self.store.people()) if cascade else None
        self.expanded = toggle(self.expanded, node_id, tree=tree, cascade=cascade)

    def render(self) -> Layout | None:
        """Layout for the current data and expansion state, or None for an empty tree."""
        key = (self.store.revision, len(self.store), self.expanded, self.config)
        if key == self._cache_key:
            return self._cache

        try:
            tree = project(self.store.people())
        except StructureError:
            logger.error("Family data cannot be drawn as a tree", exc_info=True)
            raise

        result = None if tree is None else layout(prune(tree, self.expanded), self.config)
        self._cache_key, self._cache = key, result
        return result

    def snapshot(self) -> list[dict[str, Any]]:
        return self.store.snapshot()

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def can_add(self, target_id: str | None = None) -> bool:
        if self.user is None:
            return False
        return can_mutate(self.user.role, self.user.assigned_branch_id, target_id, self.store)

    def add_person(
        self,
        fields: dict[str, Any],
        relation_type: RelationType | str | None = None,
        target_id: str | None = None,
        siblings: Iterable[str] | None = None,
    ) -> Person:
        authorize(self.user, target_id, self.store)
        person = add_person(self.store, fields, relation_type, target_id, siblings=siblings)
        if target_id is not None:
            # keep the new relative on screen
            self.expanded = self.expanded | {target_id, person.id}
        self._save()
        return person.copy()

    def _save(self):
        if self.persist is None:
            return
        try:
            self.persist([p.copy() for p in self.store.people()])
        except Exception:
            logger.exception("Saving family tree failed; in-memory data is unchanged")
