"""GEDCOM import: turn INDI/FAM records into single-parent Person records."""

import logging
from pathlib import Path
import re

from ged4py import GedcomReader

from models import Gender, Person

logger = logging.getLogger("legacytree.parsing")


MONTHS = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

SEX_TO_GENDER = {"M": Gender.MALE, "F": Gender.FEMALE}

QUALIFIERS = re.compile(
    r"^(ABOUT|ABT\.?|BEFORE|BEF\.?|AFTER|AFT\.?|EST\.?|CAL\.?|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)


def gedcom_id(xref_id: str) -> str:
    """'@I12@' -> 'I12'."""
    return xref_id.strip("@")


def _month(token: str) -> int | None:
    return MONTHS.get(token.upper().rstrip(".")[:3])


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalize a GEDCOM date phrase to ISO format (YYYY-MM-DD).

    Handles "25 NOV 1954", "NOV 1954", "1954", "ABT 1905", "1839-08-29"
    and "April 17, 1850". Missing month or day default to 01.
    Returns None if the date cannot be parsed.
    """
    if not date_str:
        return None

    s = QUALIFIERS.sub("", date_str.strip().strip("()").rstrip("?")).strip()
    if not s:
        return None

    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})$", s)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return f"{year:04d}-{max(month, 1):02d}-{max(day, 1):02d}"

    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match and _month(match.group(2)):
        return f"{int(match.group(3)):04d}-{_month(match.group(2)):02d}-{int(match.group(1)):02d}"

    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),\s*(\d{4})$", s)
    if match and _month(match.group(1)):
        return f"{int(match.group(3)):04d}-{_month(match.group(1)):02d}-{int(match.group(2)):02d}"

    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match and _month(match.group(1)):
        return f"{int(match.group(2)):04d}-{_month(match.group(1)):02d}-01"

    match = re.match(r"^(\d{4})$", s)
    if match:
        return f"{int(match.group(1)):04d}-01-01"

    return None


def extract_name(indi) -> str:
    """Full display name of an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        parts = [p for p in name_rec.value if p]
        return " ".join(parts) if parts else "Unknown"

    return str(name_rec.value).replace("/", "").strip() or "Unknown"


def extract_date(indi, tag: str) -> str | None:
    """ISO date of an event tag (BIRT, DEAT), if present and parseable."""
    event = indi.sub_tag(tag)
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    if date_rec is None or not date_rec.value:
        return None
    # ged4py may hand back DateValue objects; their str() is the GEDCOM phrase
    return parse_date_string(str(date_rec.value))


def extract_gender(indi) -> Gender:
    sex_rec = indi.sub_tag("SEX")
    return SEX_TO_GENDER.get(sex_rec.value if sex_rec else None, Gender.OTHER)


def read_people(filepath: Path | str) -> list[Person]:
    """
    Read a GEDCOM file into Person records.

    Only one parent is kept per person: the father when recorded, otherwise
    the mother. Each person gets at most one spouse, from the first family
    in which both partners are still unpaired, so links stay symmetric.
    """
    people: dict[str, Person] = {}

    reader = GedcomReader(str(filepath))
    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue
        person_id = gedcom_id(rec.xref_id)
        people[person_id] = Person(
            id=person_id,
            name=extract_name(rec),
            gender=extract_gender(rec),
            birth_date=extract_date(rec, "BIRT") or "",
            death_date=extract_date(rec, "DEAT"),
        )

    for rec in reader.records0("FAM"):
        husb = rec.sub_tag("HUSB")
        wife = rec.sub_tag("WIFE")
        husb_id = gedcom_id(husb.xref_id) if husb and husb.xref_id else None
        wife_id = gedcom_id(wife.xref_id) if wife and wife.xref_id else None
        husb_id = husb_id if husb_id in people else None
        wife_id = wife_id if wife_id in people else None

        if husb_id and wife_id and not people[husb_id].spouse_id and not people[wife_id].spouse_id:
            people[husb_id].spouse_id = wife_id
            people[wife_id].spouse_id = husb_id

        parent_id = husb_id or wife_id
        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = gedcom_id(child.xref_id)
            if parent_id and child_id in people and not people[child_id].parent_id:
                people[child_id].parent_id = parent_id

    logger.info("Imported %d people from %s", len(people), filepath)
    return list(people.values())
