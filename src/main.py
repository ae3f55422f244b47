"""
1) Load the saved family tree from SQLite (or import a GEDCOM file, or seed the sample family).
2) Validate the family data for cycles, broken links, impossible ages and date ordering.
3) Project the flat person list into a tree and lay it out with every node expanded.
4) Plot the laid-out tree.
"""

import logging

from collapse import expand_all
from config import load_settings
from database import SnapshotWriter, create_database, load_snapshot, save_snapshot
from hierarchy import project
from parsing import read_people
from plotting import plot_layout
from sample_data import sample_people
from session import FamilyTreeSession
from store import RelationStore
from validation import validate_store


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    print(f"Opening database: {settings.db_path}")
    conn = create_database(settings.db_path)

    people = load_snapshot(conn, settings.storage_key)
    if people is None:
        if settings.gedcom_path:
            print(f"Importing GEDCOM file: {settings.gedcom_path}")
            people = read_people(settings.gedcom_path)
        else:
            print("No saved tree found, seeding the sample family")
            people = sample_people()
        save_snapshot(conn, people, settings.storage_key)
    print(f"  Loaded {len(people)} people")

    print("Validating family data...")
    warnings = validate_store(RelationStore(people))
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    session = FamilyTreeSession(
        people,
        persist=SnapshotWriter(conn, settings.storage_key),
        expanded=expand_all(project(people)),
    )
    tree_layout = session.render()
    if tree_layout is None:
        print("The family tree is empty, nothing to plot")
    else:
        print(f"Plotting {len(tree_layout.positions)} cards to: {settings.plot_path}")
        plot_layout(tree_layout, {p.id: p for p in session.store}, settings.plot_path)

    conn.close()
    print("Done!")


if __name__ == "__main__":
    main()
