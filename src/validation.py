"""Data-quality checks for the relation store."""

from datetime import date

import networkx as nx

from store import RelationStore


def _parse(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def validate_store(store: RelationStore) -> list[str]:
    """
    Validate the family data for:
    - Cycles in parent-child relationships
    - References to people that do not exist
    - Spouse links that are not mirrored
    - Impossible ages (child born before parent, parent under 12)
    - Death before birth

    Returns a list of warning messages; never raises.
    """
    warnings: list[str] = []

    parent_graph = store.parent_graph()
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for person in store:
        if person.parent_id and person.parent_id not in store:
            warnings.append(f"Missing parent: {person.name} points to unknown {person.parent_id}")

        if person.spouse_id:
            spouse = store.person_by_id(person.spouse_id)
            if spouse is None:
                warnings.append(f"Missing spouse: {person.name} points to unknown {person.spouse_id}")
            elif spouse.spouse_id != person.id:
                warnings.append(
                    f"One-sided marriage: {person.name} lists {spouse.name} as spouse but not vice versa"
                )

        parent = store.person_by_id(person.parent_id)
        child_birth = _parse(person.birth_date)
        parent_birth = _parse(parent.birth_date) if parent else None
        if parent and parent_birth and child_birth:
            if child_birth < parent_birth:
                warnings.append(f"Impossible: {person.name} born before parent {parent.name}")
            elif child_birth.year - parent_birth.year < 12:
                warnings.append(
                    f"Suspicious: {parent.name} was less than 12 years old when {person.name} was born"
                )

        death = _parse(person.death_date)
        if child_birth and death and death < child_birth:
            warnings.append(f"Impossible: {person.name} died before being born")

    return warnings
