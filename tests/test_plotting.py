"""Tests for the Graphviz drawing collaborator."""

from collapse import expand_all, prune
from hierarchy import project
from layout import layout
from models import Person
from plotting import build_dot, card_label


class TestBuildDot:
    """Tests for build_dot(); no Graphviz binary needed."""

    def test_one_node_per_card(self, harrisons):
        tree = project(harrisons)
        result = layout(prune(tree, expand_all(tree)))
        dot = build_dot(result, {p.id: p for p in harrisons})
        assert len(dot.get_nodes()) == len(result.positions)
        assert len(dot.get_edges()) == len(result.edges)

    def test_positions_are_pinned(self, harrisons):
        tree = project(harrisons)
        result = layout(prune(tree, {"root-1", "child-1"}))
        source = build_dot(result, {p.id: p for p in harrisons}).to_string()
        assert "pos=" in source
        assert "dir=none" in source

    def test_card_label(self):
        person = Person(id="a", name="George Harrison Sr.", birth_date="1920-05-12",
                        death_date="1995-11-20")
        assert card_label(person) == "George Harr...\n1920 - 1995"
        assert card_label(Person(id="b", name="Sarah", birth_date="1970-11-05")) == "Sarah\n1970"
