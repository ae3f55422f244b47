"""Tests for GEDCOM import."""

import pytest

from models import Gender
from parsing import gedcom_id, parse_date_string, read_people

SAMPLE_GED = """0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 15 MAR 1850
1 FAMS @F1@
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
1 BIRT
2 DATE 1852
1 FAMS @F1@
0 @I3@ INDI
1 NAME Tom /Smith/
1 SEX M
1 FAMC @F1@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
0 TRLR
"""


class TestDates:
    """Tests for parse_date_string()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("25 NOV 1954", "1954-11-25"),
            ("NOV 1954", "1954-11-01"),
            ("1698", "1698-01-01"),
            ("ABT 1905", "1905-01-01"),
            ("BEFORE 1900", "1900-01-01"),
            ("(April 17, 1850)", "1850-04-17"),
            ("1746-00-00", "1746-01-01"),
            ("sometime", None),
            (None, None),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_date_string(raw) == expected


class TestReadPeople:
    """Tests for read_people() on a small GEDCOM file."""

    @pytest.fixture
    def people(self, tmp_path):
        path = tmp_path / "family.ged"
        path.write_text(SAMPLE_GED, encoding="utf-8")
        return {p.id: p for p in read_people(path)}

    def test_individuals(self, people):
        assert set(people) == {"I1", "I2", "I3"}
        assert people["I1"].name == "John Smith"
        assert people["I1"].gender == Gender.MALE
        assert people["I2"].gender == Gender.FEMALE

    def test_single_parent_is_father(self, people):
        assert people["I3"].parent_id == "I1"

    def test_spouses_are_symmetric(self, people):
        assert people["I1"].spouse_id == "I2"
        assert people["I2"].spouse_id == "I1"

    def test_missing_birth_date_is_blank(self, people):
        assert people["I3"].birth_date == ""
        assert people["I2"].birth_date == "1852-01-01"

    def test_gedcom_id(self):
        assert gedcom_id("@I12@") == "I12"
