"""Drawing collaborator: turns a computed Layout into a Graphviz picture."""

import logging
from pathlib import Path
from typing import Mapping

import pydot

from layout import Layout
from models import Gender, Person

logger = logging.getLogger("legacytree.plotting")

# Graphviz works in points (72 per inch); layout units are treated as pixels
POINTS_PER_UNIT = 0.75

FILL_COLORS = {
    Gender.MALE: "lightblue",
    Gender.FEMALE: "lightpink",
    Gender.OTHER: "lightgray",
}


def card_label(person: Person) -> str:
    """Name plus life span, e.g. 'Ada Lovelace\\n1815 - 1852'."""
    name = person.name if len(person.name) <= 14 else person.name[:11] + "..."
    years = person.birth_date[:4]
    if person.death_date:
        years += f" - {person.death_date[:4]}"
    return f"{name}\n{years}"


def build_dot(layout: Layout, people: Mapping[str, Person]) -> pydot.Dot:
    """
    Build a pydot graph with every card pinned to its layout position.

    Positions are fixed with `pos="x,y!"` (y flipped, Graphviz grows upward),
    so the graph must be rendered with `neato -n2` rather than `dot`.
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "line")
    P.set("outputorder", "edgesfirst")

    config = layout.config
    width = str(config.card_width / 96)  # inches
    height = str(config.card_height / 96)

    for node_id, (x, y) in layout.positions.items():
        person = people[node_id]
        info = layout.nodes[node_id]
        style = "rounded,filled"
        if info.kind == "lineage" and info.has_children and not info.expanded:
            style += ",bold"
        P.add_node(
            pydot.Node(
                node_id,
                label=card_label(person),
                shape="box",
                style=style,
                fillcolor=FILL_COLORS.get(person.gender, "lightgray"),
                fontsize="10",
                width=width,
                height=height,
                fixedsize="true",
                pos=f"{x * POINTS_PER_UNIT:.1f},{-y * POINTS_PER_UNIT:.1f}!",
            )
        )

    for edge in layout.edges:
        if edge.kind == "marriage":
            P.add_edge(pydot.Edge(edge.source, edge.target, dir="none", color="darkgray", style="dashed"))
        else:
            P.add_edge(pydot.Edge(edge.source, edge.target, color="darkgray"))

    return P


def plot_layout(layout: Layout, people: Mapping[str, Person], output_path: Path | None = None):
    """
    Render the laid-out tree.

    Args:
        layout: Output of layout.layout()
        people: Person records by id, used for labels and colours
        output_path: Path to save the image (PNG, SVG or PDF). If None, displays interactively.
    """
    P = build_dot(layout, people)

    if output_path:
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf"):
            ext = "png"

        P.write(str(output_path), format=ext, prog=["neato", "-n2"])
        logger.info("Tree saved to %s", output_path)
    else:
        # Save to temporary file and display
        import tempfile

        import matplotlib.image as mpimg
        import matplotlib.pyplot as plt

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            P.write(f.name, format="png", prog=["neato", "-n2"])
            img = mpimg.imread(f.name)
            plt.figure(figsize=(20, 16))
            plt.imshow(img)
            plt.axis("off")
            plt.tight_layout()
            plt.show()
