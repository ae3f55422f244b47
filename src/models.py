"""Data classes for family tree entities."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Role(str, Enum):
    PUBLIC = "PUBLIC"
    BRANCH_ADMIN = "BRANCH_ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class RelationType(str, Enum):
    CHILD = "CHILD"
    SPOUSE = "SPOUSE"
    PARENT = "PARENT"
    SIBLING = "SIBLING"


DEFAULT_IMAGE = "https://picsum.photos/400/400"


@dataclass
class Person:
    id: str
    name: str
    gender: Gender = Gender.OTHER
    birth_date: str = ""  # ISO format YYYY-MM-DD
    death_date: str | None = None  # None means living
    bio: str = ""
    main_image: str = DEFAULT_IMAGE
    gallery: list[str] = field(default_factory=list)
    parent_id: str | None = None
    spouse_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase snapshot format, omitting unset optionals."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "gender": self.gender.value,
            "birthDate": self.birth_date,
            "bio": self.bio,
            "mainImage": self.main_image,
            "gallery": list(self.gallery),
        }
        if self.death_date:
            data["deathDate"] = self.death_date
        if self.parent_id:
            data["parentId"] = self.parent_id
        if self.spouse_id:
            data["spouseId"] = self.spouse_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Person":
        """Build a Person from a snapshot object. Unknown keys are ignored."""
        gender = data.get("gender") or Gender.OTHER.value
        try:
            gender = Gender(gender)
        except ValueError:
            gender = Gender.OTHER

        return cls(
            id=str(data["id"]),
            name=data.get("name") or "Unknown",
            gender=gender,
            birth_date=data.get("birthDate") or "",
            death_date=data.get("deathDate") or None,
            bio=data.get("bio") or "",
            main_image=data.get("mainImage") or DEFAULT_IMAGE,
            gallery=list(data.get("gallery") or []),
            parent_id=data.get("parentId") or None,
            spouse_id=data.get("spouseId") or None,
        )

    def copy(self, **changes: Any) -> "Person":
        return replace(self, gallery=list(self.gallery), **changes)


@dataclass
class User:
    id: str
    email: str
    name: str
    role: Role
    assigned_branch_id: str | None = None
