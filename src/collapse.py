"""Expand/collapse state and pruning of the built tree before layout."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from hierarchy import VIRTUAL_ROOT_ID, RootedTree, TreeNode
from models import Person

logger = logging.getLogger("legacytree.collapse")


def toggle(
    expanded: Iterable[str],
    node_id: str,
    tree: RootedTree | None = None,
    cascade: bool = False,
) -> frozenset[str]:
    """
    Return a new expansion set with `node_id` flipped.

    Collapsing is shallow by default: descendants keep their own flags, so
    re-expanding restores the previous view. With `cascade=True` (requires
    `tree`) collapsing also clears every descendant's flag.
    The virtual root cannot be toggled.
    """
    expanded = frozenset(expanded)
    if node_id == VIRTUAL_ROOT_ID:
        return expanded

    if node_id not in expanded:
        return expanded | {node_id}

    removed = {node_id}
    if cascade:
        if tree is None:
            raise ValueError("cascade collapse needs the tree to find descendants")
        removed |= tree.descendant_ids(node_id)
    return expanded - removed


def expand_all(tree: RootedTree | None) -> frozenset[str]:
    if tree is None:
        return frozenset()
    return frozenset(tree.nodes)


@dataclass(eq=False)
class PrunedNode:
    node: TreeNode
    spouse: Person | None = None
    expanded: bool = False
    children: list["PrunedNode"] = field(default_factory=list)
    latent_children: list["PrunedNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def is_virtual(self) -> bool:
        return self.node.is_virtual

    @property
    def person(self) -> Person | None:
        return self.node.person

    @property
    def has_children(self) -> bool:
        """Whether a toggle control makes sense for this node."""
        return bool(self.children or self.latent_children or self.spouse)

    @property
    def visible_spouse(self) -> Person | None:
        return self.spouse if self.expanded else None


@dataclass
class PrunedTree:
    root: PrunedNode
    index: dict[str, PrunedNode]

    @property
    def expanded_ids(self) -> frozenset[str]:
        return frozenset(
            node_id for node_id, n in self.index.items() if n.expanded and not n.is_virtual
        )

    def walk(self) -> Iterator[PrunedNode]:
        """Pre-order over visible nodes, virtual root included."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def visible_nodes(self) -> list[PrunedNode]:
        return [n for n in self.walk() if not n.is_virtual]

    def collapse(self, node_id: str) -> None:
        node = self.index[node_id]
        if node.is_virtual or not node.expanded:
            return
        node.latent_children = node.children + node.latent_children
        node.children = []
        node.expanded = False

    def expand(self, node_id: str) -> None:
        node = self.index[node_id]
        if node.expanded:
            return
        node.children = node.latent_children
        node.latent_children = []
        node.expanded = True

    def shape(self) -> tuple:
        """Nested (id, expanded, children) tuples of the visible tree."""

        def _shape(n: PrunedNode) -> tuple:
            return (n.id, n.expanded, tuple(_shape(c) for c in n.children))

        return _shape(self.root)


def prune(tree: RootedTree, expanded_ids: Iterable[str]) -> PrunedTree:
    """
    Hide the children of every node that is not expanded.

    Hidden children are kept on `latent_children`, already pruned against the
    same expansion set, so PrunedTree.expand can reveal them without going
    back to the relation store. The virtual root is always expanded.
    """
    expanded_ids = frozenset(expanded_ids)
    index: dict[str, PrunedNode] = {}
    for node in tree.root.walk():
        index[node.id] = PrunedNode(
            node=node,
            spouse=tree.spouse_of(node.id),
            expanded=node.is_virtual or node.id in expanded_ids,
        )

    for node in tree.root.walk():
        pruned = index[node.id]
        kids = [index[child.id] for child in node.children]
        if pruned.expanded:
            pruned.children = kids
        else:
            pruned.latent_children = kids

    logger.debug("Pruned tree with %d expanded nodes", len(expanded_ids))
    return PrunedTree(root=index[tree.root.id], index=index)
