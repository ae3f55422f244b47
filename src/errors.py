"""Exception types raised by the family tree core."""


class FamilyTreeError(Exception):
    """Base class for all family tree errors."""


class ValidationError(FamilyTreeError, ValueError):
    """A requested add is missing a required field or references bad data."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PermissionDenied(FamilyTreeError, PermissionError):
    """The caller's role does not allow a mutation at the target."""

    def __init__(self, message: str, target_id: str | None = None):
        super().__init__(message)
        self.target_id = target_id


class StructureError(FamilyTreeError, ValueError):
    """The relation data cannot be projected into a tree."""


class CycleError(StructureError):
    def __init__(self, cycle: list[str]):
        super().__init__(f"Cycle detected in parent-child relationships: {cycle}")
        self.cycle = cycle


class DanglingReferenceError(StructureError):
    def __init__(self, person_id: str, missing_id: str):
        super().__init__(f"Person {person_id!r} references unknown parent {missing_id!r}")
        self.person_id = person_id
        self.missing_id = missing_id


class DuplicateIdError(StructureError):
    def __init__(self, person_id: str):
        super().__init__(f"Duplicate person id: {person_id!r}")
        self.person_id = person_id
