"""Tests for add_person()."""

import pytest

from conftest import person
from errors import ValidationError
from models import Gender, RelationType
from mutations import add_person, validate_fields
from store import RelationStore

NEW = {"name": "X", "birth_date": "2000-01-01"}


def ids(*values):
    """id_factory returning the given ids in order."""
    it = iter(values)
    return lambda: next(it)


class TestAddPerson:
    """Tests for each relation type."""

    def test_child(self, small_store):
        child = add_person(small_store, NEW, "CHILD", "r")
        assert child.parent_id == "r"
        assert len(small_store) == 3
        assert small_store.person_by_id(child.id) is child

    def test_spouse_links_both_ways(self, small_store):
        spouse = add_person(small_store, NEW, RelationType.SPOUSE, "c")
        assert small_store.person_by_id("c").spouse_id == spouse.id
        assert small_store.person_by_id(spouse.id).spouse_id == "c"

    def test_second_spouse_rejected(self, small_store):
        add_person(small_store, NEW, RelationType.SPOUSE, "c")
        with pytest.raises(ValidationError):
            add_person(small_store, NEW, RelationType.SPOUSE, "c")
        assert len(small_store) == 3

    def test_sibling_shares_parent(self, small_store):
        sibling = add_person(small_store, NEW, RelationType.SIBLING, "c")
        assert sibling.parent_id == "r"

    def test_sibling_of_root_is_another_root(self, small_store):
        sibling = add_person(small_store, NEW, RelationType.SIBLING, "r")
        assert sibling.parent_id is None

    def test_no_target_adds_root(self, small_store):
        root = add_person(small_store, NEW)
        assert root.parent_id is None and root.spouse_id is None
        assert small_store.root_ids() == ["r", root.id]

    def test_parent_backfills_rootless_lineage(self):
        store = RelationStore([person("a"), person("b"), person("a1", parent_id="a")])
        parent = add_person(store, NEW, RelationType.PARENT, "a")
        assert store.person_by_id("a").parent_id == parent.id
        assert store.person_by_id("b").parent_id == parent.id
        assert store.person_by_id("a1").parent_id == "a"
        assert store.root_ids() == [parent.id]

    def test_parent_backfill_skips_spouses(self):
        store = RelationStore([
            person("a", spouse_id="s"),
            person("x", parent_id="a", spouse_id="d"),
            person("d", spouse_id="x"),
            person("d1", parent_id="d"),
            person("s", spouse_id="a"),
        ])
        parent = add_person(store, NEW, RelationType.PARENT, "a")
        assert store.person_by_id("d").parent_id is None
        assert store.person_by_id("s").parent_id is None
        assert store.person_by_id("a").parent_id == parent.id

    def test_parent_of_married_in_spouse_leaves_partner_alone(self):
        store = RelationStore([
            person("a", spouse_id="s"),
            person("b"),
            person("s", spouse_id="a"),
        ])
        parent = add_person(store, NEW, RelationType.PARENT, "s")
        assert store.person_by_id("s").parent_id == parent.id
        assert store.person_by_id("a").parent_id is None
        assert store.person_by_id("b").parent_id == parent.id
        assert store.person_by_id("a").spouse_id == "s"

    def test_explicit_sibling_cannot_be_target_spouse(self):
        store = RelationStore([person("a", spouse_id="s"), person("s", spouse_id="a")])
        with pytest.raises(ValidationError):
            add_person(store, NEW, RelationType.PARENT, "s", siblings=["a"])
        assert len(store) == 2
        assert store.person_by_id("a").parent_id is None

    def test_parent_with_explicit_siblings(self):
        store = RelationStore([person("a"), person("b"), person("c")])
        parent = add_person(store, NEW, RelationType.PARENT, "a", siblings=["c"])
        assert store.person_by_id("c").parent_id == parent.id
        assert store.person_by_id("b").parent_id is None

    def test_parent_with_no_siblings(self):
        store = RelationStore([person("a"), person("b")])
        add_person(store, NEW, RelationType.PARENT, "a", siblings=[])
        assert store.person_by_id("b").parent_id is None

    def test_parent_rejected_when_target_has_parent(self, small_store):
        with pytest.raises(ValidationError):
            add_person(small_store, NEW, RelationType.PARENT, "c")
        assert len(small_store) == 2

    def test_explicit_sibling_must_be_rootless(self):
        store = RelationStore([person("a"), person("r"), person("c", parent_id="r")])
        with pytest.raises(ValidationError):
            add_person(store, NEW, RelationType.PARENT, "a", siblings=["c"])
        assert store.person_by_id("a").parent_id is None

    def test_unknown_target(self, small_store):
        with pytest.raises(ValidationError) as exc_info:
            add_person(small_store, NEW, RelationType.CHILD, "ghost")
        assert exc_info.value.field == "target_id"

    def test_unknown_relation(self, small_store):
        with pytest.raises(ValidationError):
            add_person(small_store, NEW, "COUSIN", "r")

    def test_colliding_generated_id_is_regenerated(self, small_store):
        child = add_person(small_store, NEW, "CHILD", "r", id_factory=ids("r", "c", "fresh"))
        assert child.id == "fresh"

    def test_generated_ids_are_unique(self, small_store):
        new_ids = {add_person(small_store, NEW, "CHILD", "r").id for _ in range(5)}
        assert len(new_ids) == 5
        assert all(i.startswith("p-") for i in new_ids)

    def test_defaults_applied(self, small_store):
        child = add_person(small_store, NEW, "CHILD", "r")
        assert child.gender == Gender.OTHER
        assert child.gallery == []
        assert child.death_date is None
        assert child.main_image.startswith("https://")


class TestValidateFields:
    """Tests for required-field checks."""

    @pytest.mark.parametrize(
        "fields, field",
        [
            ({"birth_date": "2000-01-01"}, "name"),
            ({"name": "   ", "birth_date": "2000-01-01"}, "name"),
            ({"name": "X"}, "birth_date"),
            ({"name": "X", "birth_date": "01/02/2000"}, "birth_date"),
            ({"name": "X", "birth_date": "2000-01-01", "death_date": "1999-01-01"}, "death_date"),
            ({"name": "X", "birth_date": "2000-01-01", "gender": "Robot"}, "gender"),
        ],
    )
    def test_rejected(self, fields, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_fields(fields)
        assert exc_info.value.field == field

    def test_cleaned(self):
        cleaned = validate_fields({"name": " Ada ", "birth_date": "1815-12-10", "gender": "Female"})
        assert cleaned["name"] == "Ada"
        assert cleaned["gender"] is Gender.FEMALE

    def test_validation_error_leaves_store_alone(self, small_store):
        with pytest.raises(ValidationError):
            add_person(small_store, {"name": "X"}, "CHILD", "r")
        assert len(small_store) == 2
        assert small_store.revision == 0
