"""Tests for data-quality warnings."""

from conftest import person
from store import RelationStore
from validation import validate_store


class TestValidateStore:
    """Tests for validate_store()."""

    def test_sample_family_is_clean(self, harrison_store):
        assert validate_store(harrison_store) == []

    def test_cycle(self):
        warnings = validate_store(RelationStore([person("a", parent_id="b"), person("b", parent_id="a")]))
        assert any("Cycle detected" in w for w in warnings)

    def test_one_sided_marriage(self):
        warnings = validate_store(RelationStore([person("a", spouse_id="b"), person("b")]))
        assert any("One-sided marriage" in w for w in warnings)

    def test_missing_references(self):
        warnings = validate_store(RelationStore([person("a", parent_id="x", spouse_id="y")]))
        assert any("Missing parent" in w for w in warnings)
        assert any("Missing spouse" in w for w in warnings)

    def test_child_born_before_parent(self):
        store = RelationStore([
            person("p", birth_date="1950-01-01"),
            person("c", parent_id="p", birth_date="1940-01-01"),
        ])
        assert any("born before parent" in w for w in validate_store(store))

    def test_young_parent(self):
        store = RelationStore([
            person("p", birth_date="1950-01-01"),
            person("c", parent_id="p", birth_date="1955-06-01"),
        ])
        assert any("less than 12 years" in w for w in validate_store(store))

    def test_death_before_birth(self):
        store = RelationStore([person("a", birth_date="1950-01-01", death_date="1949-01-01")])
        assert any("died before being born" in w for w in validate_store(store))

    def test_missing_dates_are_skipped(self):
        store = RelationStore([person("p", birth_date=""), person("c", parent_id="p")])
        assert validate_store(store) == []
