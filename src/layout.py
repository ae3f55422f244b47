"""
Positions for the pruned tree.

Lineage nodes are placed with the Buchheim/Walker tidy tree algorithm on a
fixed node-size grid. Attached spouses of expanded nodes sit next to their
anchor inside the same slot, joined by a short marriage connector.
"""

import logging
from dataclasses import dataclass, field

from collapse import PrunedNode, PrunedTree

logger = logging.getLogger("legacytree.layout")


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = 400.0  # horizontal distance between neighbouring slots
    level_height: float = 220.0  # vertical distance between generations
    spouse_offset: float = 92.0  # anchor and spouse sit this far either side of the slot
    card_width: float = 160.0
    card_height: float = 80.0
    marriage_half_width: float = 15.0


DEFAULT_CONFIG = LayoutConfig()


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    kind: str  # "lineage" or "marriage"
    points: tuple[tuple[float, float], tuple[float, float]]


@dataclass(frozen=True)
class NodeInfo:
    id: str
    kind: str  # "lineage" or "spouse"
    slot: tuple[float, float]
    expanded: bool = False
    has_children: bool = False
    anchor_id: str | None = None


@dataclass
class Layout:
    positions: dict[str, tuple[float, float]] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)
    nodes: dict[str, NodeInfo] = field(default_factory=dict)
    config: LayoutConfig = DEFAULT_CONFIG

    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) around every card."""
        if not self.positions:
            return (0.0, 0.0, 0.0, 0.0)
        half_w = self.config.card_width / 2
        half_h = self.config.card_height / 2
        xs = [x for x, _ in self.positions.values()]
        ys = [y for _, y in self.positions.values()]
        return (min(xs) - half_w, min(ys) - half_h, max(xs) + half_w, max(ys) + half_h)


# ============================================================================
# Tidy tree (Buchheim, Junger & Leipert refinement of Walker's algorithm)
# ============================================================================


class _Slot:
    __slots__ = (
        "source", "parent", "children", "number", "prelim", "mod",
        "shift", "change", "thread", "ancestor", "default_ancestor", "x", "depth",
    )

    def __init__(self, source: PrunedNode, parent: "_Slot | None", number: int, depth: int):
        self.source = source
        self.parent = parent
        self.number = number
        self.depth = depth
        self.children: list[_Slot] = []
        self.prelim = 0.0
        self.mod = 0.0
        self.shift = 0.0
        self.change = 0.0
        self.thread: _Slot | None = None
        self.ancestor: _Slot = self
        self.default_ancestor: _Slot | None = None
        self.x = 0.0


def _make_slots(root: PrunedNode) -> _Slot:
    top = _Slot(root, None, 0, 0)
    stack = [top]
    while stack:
        slot = stack.pop()
        slot.children = [
            _Slot(child, slot, i, slot.depth + 1) for i, child in enumerate(slot.source.children)
        ]
        if slot.children:
            slot.default_ancestor = slot.children[0]
        stack.extend(slot.children)
    return top


def _postorder(top: _Slot) -> list[_Slot]:
    """Children left to right, each subtree finished before its right sibling starts."""
    order = []
    stack = [top]
    while stack:
        v = stack.pop()
        order.append(v)
        stack.extend(v.children)
    order.reverse()
    return order


def _left_brother(v: _Slot) -> _Slot | None:
    if v.parent is None or v.number == 0:
        return None
    return v.parent.children[v.number - 1]


def _next_left(v: _Slot) -> _Slot | None:
    return v.children[0] if v.children else v.thread


def _next_right(v: _Slot) -> _Slot | None:
    return v.children[-1] if v.children else v.thread


def _move_subtree(wl: _Slot, wr: _Slot, shift: float):
    subtrees = wr.number - wl.number
    wr.change -= shift / subtrees
    wr.shift += shift
    wl.change += shift / subtrees
    wr.prelim += shift
    wr.mod += shift


def _execute_shifts(v: _Slot):
    shift = change = 0.0
    for w in reversed(v.children):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


def _ancestor(vil: _Slot, v: _Slot, default_ancestor: _Slot) -> _Slot:
    if vil.ancestor.parent is v.parent:
        return vil.ancestor
    return default_ancestor


def _apportion(v: _Slot, default_ancestor: _Slot, distance: float) -> _Slot:
    w = _left_brother(v)
    if w is None:
        return default_ancestor

    vir = vor = v
    vil = w
    vol = v.parent.children[0]
    sir = vir.mod
    sor = vor.mod
    sil = vil.mod
    sol = vol.mod
    while _next_right(vil) is not None and _next_left(vir) is not None:
        vil = _next_right(vil)
        vir = _next_left(vir)
        vol = _next_left(vol)
        vor = _next_right(vor)
        vor.ancestor = v
        shift = (vil.prelim + sil) - (vir.prelim + sir) + distance
        if shift > 0:
            _move_subtree(_ancestor(vil, v, default_ancestor), v, shift)
            sir += shift
            sor += shift
        sil += vil.mod
        sir += vir.mod
        sol += vol.mod
        sor += vor.mod

    if _next_right(vil) is not None and _next_right(vor) is None:
        vor.thread = _next_right(vil)
        vor.mod += sil - sor
    if _next_left(vir) is not None and _next_left(vol) is None:
        vol.thread = _next_left(vir)
        vol.mod += sir - sol
        default_ancestor = v
    return default_ancestor


def _first_walk(top: _Slot, distance: float):
    # A node is placed once all its children are, then apportioned
    # against the siblings already placed to its left.
    for v in _postorder(top):
        w = _left_brother(v)
        if not v.children:
            v.prelim = w.prelim + distance if w else 0.0
        else:
            _execute_shifts(v)
            midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
            if w:
                v.prelim = w.prelim + distance
                v.mod = v.prelim - midpoint
            else:
                v.prelim = midpoint

        if v.parent is not None:
            v.parent.default_ancestor = _apportion(v, v.parent.default_ancestor, distance)


def _second_walk(top: _Slot) -> list[_Slot]:
    placed = []
    stack = [(top, -top.prelim)]
    while stack:
        v, m = stack.pop()
        v.x = v.prelim + m
        placed.append(v)
        stack.extend((w, m + v.mod) for w in reversed(v.children))
    return placed


def tidy_positions(root: PrunedNode, distance: float = 1.0) -> dict[str, tuple[float, int]]:
    """Map every visible node id to (x, depth), with the root at x = 0."""
    top = _make_slots(root)
    _first_walk(top, distance)
    return {s.source.id: (s.x, s.depth) for s in _second_walk(top)}


# ============================================================================
# Layout
# ============================================================================


def layout(pruned: PrunedTree, config: LayoutConfig = DEFAULT_CONFIG) -> Layout:
    """
    Assign card positions and edges for every visible node.

    Output is a pure function of the pruned tree shape and expansion flags.
    The virtual root is never emitted, and neither are edges touching it.
    """
    result = Layout(config=config)
    grid = tidy_positions(pruned.root)
    top_depth = 1 if pruned.root.is_virtual else 0

    slots: dict[str, tuple[float, float]] = {}
    for node_id, (x, depth) in grid.items():
        slots[node_id] = (x * config.node_width, (depth - top_depth) * config.level_height)

    for node in pruned.walk():
        if node.is_virtual:
            continue

        sx, sy = slots[node.id]
        spouse = node.visible_spouse
        result.nodes[node.id] = NodeInfo(
            id=node.id,
            kind="lineage",
            slot=(sx, sy),
            expanded=node.expanded,
            has_children=node.has_children,
        )

        if spouse is None:
            result.positions[node.id] = (sx, sy)
        else:
            result.positions[node.id] = (sx + config.spouse_offset, sy)
            result.positions[spouse.id] = (sx - config.spouse_offset, sy)
            result.nodes[spouse.id] = NodeInfo(
                id=spouse.id, kind="spouse", slot=(sx, sy), anchor_id=node.id
            )
            result.edges.append(
                Edge(
                    source=node.id,
                    target=spouse.id,
                    kind="marriage",
                    points=(
                        (sx + config.marriage_half_width, sy),
                        (sx - config.marriage_half_width, sy),
                    ),
                )
            )

        for child in node.children:
            result.edges.append(
                Edge(source=node.id, target=child.id, kind="lineage", points=((sx, sy), slots[child.id]))
            )

    logger.debug("Laid out %d cards and %d edges", len(result.positions), len(result.edges))
    return result
