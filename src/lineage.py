"""Split people into structural lineage nodes and attached spouses."""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from models import Person

logger = logging.getLogger("legacytree.lineage")


@dataclass
class Classification:
    lineage: list[Person] = field(default_factory=list)
    spouses: list[Person] = field(default_factory=list)

    def spouse_for(self, anchor_id: str) -> Person | None:
        """The satellite spouse attached to a lineage node, if any."""
        for spouse in self.spouses:
            if spouse.spouse_id == anchor_id:
                return spouse
        return None


def is_lineage_bearing(person: Person, parent_ids: set[str]) -> bool:
    """True when the person has a parent or is someone's parent."""
    return bool(person.parent_id) or person.id in parent_ids


def classify(people: Iterable[Person]) -> Classification:
    """
    Partition people into `lineage` (tree nodes) and `spouses` (satellites).

    A person is lineage-bearing if they have a parent, are a parent, or have
    no spouse. Otherwise they are judged against their partner: a partner
    with a parent or children takes the structural slot. When neither member
    of a childless, parentless couple is lineage-bearing, the lower id wins,
    so each such couple contributes exactly one anchor.

    Input order is preserved within both output lists.
    """
    people = list(people)
    by_id = {p.id: p for p in people}
    parent_ids = {p.parent_id for p in people if p.parent_id}

    result = Classification()
    for person in people:
        if is_lineage_bearing(person, parent_ids) or not person.spouse_id:
            result.lineage.append(person)
            continue

        partner = by_id.get(person.spouse_id)
        if partner is None or partner.id == person.id:
            # Dangling or self-referencing spouse link: keep the node visible
            result.lineage.append(person)
        elif is_lineage_bearing(partner, parent_ids):
            result.spouses.append(person)
        elif person.id < partner.id:
            result.lineage.append(person)
        else:
            result.spouses.append(person)

    logger.debug(
        "Classified %d lineage nodes and %d spouses", len(result.lineage), len(result.spouses)
    )
    return result
