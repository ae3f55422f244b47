"""Add-person edits that keep the relation store's link invariants."""

import logging
import uuid
from datetime import date
from typing import Any, Callable, Iterable

from errors import ValidationError
from lineage import classify
from models import DEFAULT_IMAGE, Gender, Person, RelationType
from store import RelationStore

logger = logging.getLogger("legacytree.mutations")


def new_person_id() -> str:
    return f"p-{uuid.uuid4().hex}"


def _parse_iso(value: str, field: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD), got {value!r}", field=field)


def validate_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Check required fields and fill defaults. Returns a cleaned copy."""
    name = (fields.get("name") or "").strip()
    if not name:
        raise ValidationError("name is required", field="name")

    birth_date = (fields.get("birth_date") or "").strip()
    if not birth_date:
        raise ValidationError("birth_date is required", field="birth_date")
    born = _parse_iso(birth_date, "birth_date")

    death_date = (fields.get("death_date") or "").strip() or None
    if death_date and _parse_iso(death_date, "death_date") < born:
        raise ValidationError("death_date is before birth_date", field="death_date")

    try:
        gender = Gender(fields.get("gender") or Gender.OTHER)
    except ValueError:
        raise ValidationError(f"Unknown gender: {fields.get('gender')!r}", field="gender")

    return {
        "name": name,
        "gender": gender,
        "birth_date": birth_date,
        "death_date": death_date,
        "bio": fields.get("bio") or "",
        "main_image": fields.get("main_image") or DEFAULT_IMAGE,
        "gallery": list(fields.get("gallery") or []),
    }


def _backfill_candidates(store: RelationStore, target: Person) -> list[str]:
    """Rootless lineage members that a newly added common ancestor adopts."""
    # once the target has a parent its spouse is excluded as well
    skip = {target.id, target.spouse_id}
    candidates = []
    for person in classify(store.people()).lineage:
        if person.id in skip or person.parent_id:
            continue
        spouse = store.spouse_of(person.id)
        if spouse is not None and spouse.parent_id:
            continue
        candidates.append(person.id)
    return candidates


def add_person(
    store: RelationStore,
    fields: dict[str, Any],
    relation_type: RelationType | str | None = None,
    target_id: str | None = None,
    siblings: Iterable[str] | None = None,
    id_factory: Callable[[], str] = new_person_id,
) -> Person:
    """
    Create a person related to `target_id` and commit it in one write.

    CHILD:   the new person's parent is the target.
    SPOUSE:  the pair is linked in both directions.
    PARENT:  the new person becomes the target's parent. Other rootless
             lineage members are adopted as siblings, or only `siblings`
             when given.
    SIBLING: the new person shares the target's parent, if any.

    Without a target the person is added as a new root. Permission checks
    happen before this call; unknown targets still fail here.
    """
    cleaned = validate_fields(fields)

    new_id = id_factory()
    while new_id in store:
        new_id = id_factory()
    person = Person(id=new_id, **cleaned)
    updates: dict[str, dict[str, Any]] = {}

    if target_id is None:
        store.commit(person)
        logger.info("Added root %s (%s)", person.id, person.name)
        return person

    target = store.person_by_id(target_id)
    if target is None:
        raise ValidationError(f"Unknown target person: {target_id!r}", field="target_id")

    try:
        relation = RelationType(relation_type)
    except ValueError:
        raise ValidationError(f"Unknown relation type: {relation_type!r}", field="relation_type")

    if relation == RelationType.CHILD:
        person.parent_id = target.id

    elif relation == RelationType.SPOUSE:
        if target.spouse_id:
            raise ValidationError(f"{target.name} already has a spouse", field="target_id")
        person.spouse_id = target.id
        updates[target.id] = {"spouse_id": person.id}

    elif relation == RelationType.PARENT:
        if target.parent_id:
            raise ValidationError(f"{target.name} already has a parent", field="target_id")
        adopted = [target.id]
        if siblings is None:
            adopted += _backfill_candidates(store, target)
        else:
            for sibling_id in siblings:
                sibling = store.person_by_id(sibling_id)
                if sibling is None:
                    raise ValidationError(f"Unknown sibling: {sibling_id!r}", field="siblings")
                if sibling.parent_id:
                    raise ValidationError(f"{sibling.name} already has a parent", field="siblings")
                if sibling.id == target.spouse_id:
                    raise ValidationError(f"{sibling.name} is married to {target.name}", field="siblings")
                if sibling.id not in adopted:
                    adopted.append(sibling.id)
        for adopted_id in adopted:
            updates[adopted_id] = {"parent_id": person.id}

    elif relation == RelationType.SIBLING:
        person.parent_id = target.parent_id

    store.commit(person, updates)
    logger.info("Added %s (%s) as %s of %s", person.id, person.name, relation.value, target.id)
    return person
