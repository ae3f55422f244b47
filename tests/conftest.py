"""Shared fixtures for the family tree tests."""

import pytest

from models import Person
from sample_data import sample_people
from store import RelationStore


def person(person_id, parent_id=None, spouse_id=None, **fields):
    """Compact Person factory for hand-built fixtures."""
    fields.setdefault("name", person_id.title())
    fields.setdefault("birth_date", "1950-01-01")
    return Person(id=person_id, parent_id=parent_id, spouse_id=spouse_id, **fields)


@pytest.fixture
def harrisons():
    """The sample Harrison family as a list of Person records."""
    return sample_people()


@pytest.fixture
def harrison_store(harrisons):
    return RelationStore(harrisons)


@pytest.fixture
def small_store():
    """A root with one child: r -> c."""
    return RelationStore([person("r"), person("c", parent_id="r")])
