"""Project classified lineage nodes into a single rooted tree."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union

import networkx as nx

from errors import CycleError, DanglingReferenceError, DuplicateIdError
from lineage import Classification, classify
from models import Person

logger = logging.getLogger("legacytree.hierarchy")

VIRTUAL_ROOT_ID = "__virtual_root__"


@dataclass(frozen=True)
class VirtualRoot:
    """Layout-only anchor that unifies several disconnected lineages."""

    id: str = VIRTUAL_ROOT_ID


Payload = Union[Person, VirtualRoot]


@dataclass(eq=False)
class TreeNode:
    payload: Payload
    children: list["TreeNode"] = field(default_factory=list)
    depth: int = 0

    @property
    def id(self) -> str:
        return self.payload.id

    @property
    def is_virtual(self) -> bool:
        return isinstance(self.payload, VirtualRoot)

    @property
    def person(self) -> Person | None:
        return None if self.is_virtual else self.payload

    def walk(self) -> Iterator["TreeNode"]:
        """Pre-order traversal, children in stored order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class RootedTree:
    root: TreeNode
    nodes: dict[str, TreeNode]
    people: dict[str, Person]
    spouses: dict[str, Person]

    @property
    def has_virtual_root(self) -> bool:
        return self.root.is_virtual

    def spouse_of(self, node_id: str) -> Person | None:
        """Attached spouse for a lineage node, resolved by id lookup."""
        return self.spouses.get(node_id)

    def descendant_ids(self, node_id: str) -> set[str]:
        node = self.nodes.get(node_id)
        if node is None:
            return set()
        return {n.id for n in node.walk() if n is not node}


def _stratify(lineage: list[Person]) -> nx.DiGraph:
    """Parent -> child graph over lineage ids, failing fast on malformed links."""
    G = nx.DiGraph()
    for person in lineage:
        if person.id in G:
            raise DuplicateIdError(person.id)
        G.add_node(person.id)

    for person in lineage:
        if not person.parent_id:
            continue
        if person.parent_id not in G:
            raise DanglingReferenceError(person.id, person.parent_id)
        G.add_edge(person.parent_id, person.id)

    try:
        cycle = nx.find_cycle(G, orientation="original")
    except nx.NetworkXNoCycle:
        return G
    raise CycleError([edge[0] for edge in cycle])


def build(lineage: Iterable[Person], satellites: Iterable[Person] = ()) -> RootedTree | None:
    """
    Build a rooted tree from lineage-bearing people.

    Each person's parent_id is the edge to its unique parent. With more than
    one parentless person a VirtualRoot is synthesized above them; this link
    only exists inside the returned tree and is never written back.

    Returns None for an empty lineage. Raises DuplicateIdError,
    DanglingReferenceError or CycleError for malformed input instead of
    returning a partial tree.
    """
    lineage = list(lineage)
    if not lineage:
        return None

    _stratify(lineage)

    nodes = {p.id: TreeNode(payload=p) for p in lineage}
    roots: list[TreeNode] = []
    for person in lineage:
        node = nodes[person.id]
        if person.parent_id:
            nodes[person.parent_id].children.append(node)
        else:
            roots.append(node)

    if len(roots) == 1:
        root = roots[0]
    else:
        root = TreeNode(payload=VirtualRoot(), children=roots)
        logger.debug("Joined %d disconnected lineages under a virtual root", len(roots))

    for node in root.walk():
        for child in node.children:
            child.depth = node.depth + 1

    satellites = list(satellites)
    spouses = {s.spouse_id: s for s in reversed(satellites) if s.spouse_id in nodes}
    people = {p.id: p for p in lineage}
    people.update((s.id, s) for s in satellites)

    return RootedTree(root=root, nodes=nodes, people=people, spouses=spouses)


def project(people: Iterable[Person]) -> RootedTree | None:
    """Classify then build: the full graph-to-tree projection."""
    classification: Classification = classify(people)
    return build(classification.lineage, classification.spouses)
