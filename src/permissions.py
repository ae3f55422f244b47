"""Role-based authorization for structural edits."""

import logging

import networkx as nx

from errors import PermissionDenied
from models import Role, User
from store import RelationStore

logger = logging.getLogger("legacytree.permissions")


def can_edit_tree(role: Role | None) -> bool:
    return role in (Role.BRANCH_ADMIN, Role.SUPER_ADMIN)


def can_add_root(role: Role | None) -> bool:
    return role == Role.SUPER_ADMIN


def is_in_branch(store: RelationStore, branch_id: str, target_id: str) -> bool:
    """True if `target_id` is `branch_id` or one of its descendants via parent links."""
    if branch_id not in store or target_id not in store:
        return False
    return nx.has_path(store.parent_graph(), branch_id, target_id)


def can_mutate(
    role: Role | None,
    assigned_branch_id: str | None,
    target_id: str | None,
    store: RelationStore,
) -> bool:
    """
    Decide whether an add anchored at `target_id` is allowed.

    Public users never edit and super admins always may. A branch admin may
    only act on their assigned person or its descendants; adding a new
    disconnected root (no target) is reserved for super admins.
    """
    if role == Role.SUPER_ADMIN:
        return True
    if role != Role.BRANCH_ADMIN:
        return False
    if not target_id or not assigned_branch_id:
        return False
    return is_in_branch(store, assigned_branch_id, target_id)


def authorize(user: User | None, target_id: str | None, store: RelationStore) -> None:
    """Raise PermissionDenied unless `user` may add a relative at `target_id`."""
    role = user.role if user else None
    branch = user.assigned_branch_id if user else None
    if not can_mutate(role, branch, target_id, store):
        logger.info("Denied %s edit at %s", role.value if role else "anonymous", target_id)
        raise PermissionDenied("You don't have permission to add people here.", target_id=target_id)
