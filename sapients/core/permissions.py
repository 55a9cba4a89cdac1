"""RBAC permission tables and decision helpers.

View and edit access are two independent, explicit tables keyed by role.
Neither is computed from role levels; seniority only feeds `has_role`.

Every function accepts either enum members or their string values. Unknown
roles or modules resolve to "no access".
"""

import hmac
from types import MappingProxyType
from typing import Optional, Tuple, Union

from sapients.core.config import settings
from sapients.core.exceptions import ConfigurationError
from sapients.models.module import Module
from sapients.models.role import Role, ROLE_LEVELS, ROLE_LABELS


RoleLike = Union[Role, str]
ModuleLike = Union[Module, str]

_ALL_MODULES = frozenset(Module)

MODULE_VIEW_ACCESS = MappingProxyType({
    Role.ADMIN: _ALL_MODULES,
    Role.EXECUTIVE_PRODUCER: _ALL_MODULES,
    Role.CREATIVE_DIRECTOR: _ALL_MODULES,
    Role.CONCEPT_ARTIST: frozenset({
        Module.DASHBOARD, Module.ONBOARDING, Module.ENTITIES, Module.CONCEPT_ART,
    }),
    Role.ARTIST: frozenset({
        Module.DASHBOARD, Module.ONBOARDING, Module.ENTITIES, Module.CONCEPT_ART,
    }),
    Role.WRITER: frozenset({
        Module.DASHBOARD, Module.ONBOARDING, Module.ENTITIES, Module.LORE,
    }),
    Role.VIEWER: frozenset({
        Module.DASHBOARD, Module.ONBOARDING, Module.ENTITIES,
    }),
})

MODULE_EDIT_ACCESS = MappingProxyType({
    Role.ADMIN: _ALL_MODULES,
    Role.EXECUTIVE_PRODUCER: _ALL_MODULES,
    Role.CREATIVE_DIRECTOR: _ALL_MODULES,
    Role.CONCEPT_ARTIST: frozenset({Module.CONCEPT_ART}),
    Role.ARTIST: frozenset({Module.CONCEPT_ART}),
    Role.WRITER: frozenset({Module.LORE}),
    Role.VIEWER: frozenset(),
})


def _as_role(role: RoleLike) -> Optional[Role]:
    try:
        return Role(role)
    except ValueError:
        return None


def _as_module(module: ModuleLike) -> Optional[Module]:
    try:
        return Module(module)
    except ValueError:
        return None


def _lookup(table, role: RoleLike, module: ModuleLike) -> bool:
    r, m = _as_role(role), _as_module(module)
    if r is None or m is None:
        return False
    return m in table.get(r, frozenset())


def validate_matrices(levels=ROLE_LEVELS, view=MODULE_VIEW_ACCESS, edit=MODULE_EDIT_ACCESS) -> None:
    """Fail fast if a role is missing from any table or edit exceeds view.

    Raises:
        ConfigurationError: on the first inconsistency found.
    """
    for role in Role:
        for name, table in (("levels", levels), ("view", view), ("edit", edit)):
            if role not in table:
                raise ConfigurationError(f"Role {role.value} missing from {name} table")
        extra = edit[role] - view[role]
        if extra:
            names = ", ".join(sorted(m.value for m in extra))
            raise ConfigurationError(
                f"Role {role.value} can edit modules it cannot view: {names}"
            )


# ---- Role checks ----

def role_level(role: RoleLike) -> int:
    return ROLE_LEVELS[Role(role)]


def has_role(user_role: RoleLike, required_role: RoleLike) -> bool:
    """True when `user_role` is at least as senior as `required_role`."""
    user, required = _as_role(user_role), _as_role(required_role)
    if user is None or required is None:
        return False
    return ROLE_LEVELS[user] >= ROLE_LEVELS[required]


def is_admin(role: RoleLike) -> bool:
    return _as_role(role) is Role.ADMIN


def format_role(role: RoleLike) -> str:
    r = _as_role(role)
    return ROLE_LABELS[r] if r is not None else str(role)


# ---- Module access ----

def can_view(role: RoleLike, module: ModuleLike) -> bool:
    """Can this role see the module (navigation, pages, read APIs)?"""
    return _lookup(MODULE_VIEW_ACCESS, role, module)


def can_edit(role: RoleLike, module: ModuleLike) -> bool:
    """Can this role create or modify items in the module?"""
    return _lookup(MODULE_EDIT_ACCESS, role, module)


def visible_modules(role: RoleLike) -> Tuple[Module, ...]:
    r = _as_role(role)
    granted = MODULE_VIEW_ACCESS.get(r, frozenset()) if r else frozenset()
    return tuple(m for m in Module if m in granted)


def editable_modules(role: RoleLike) -> Tuple[Module, ...]:
    r = _as_role(role)
    granted = MODULE_EDIT_ACCESS.get(r, frozenset()) if r else frozenset()
    return tuple(m for m in Module if m in granted)


def can_comment(role: RoleLike, module: ModuleLike) -> bool:
    """Anyone who can view a module can comment on its items."""
    return can_view(role, module)


def can_upload(role: RoleLike) -> bool:
    return can_edit(role, Module.CONCEPT_ART) or has_role(role, Role.CREATIVE_DIRECTOR)


def can_manage_thoughts(role: RoleLike) -> bool:
    return can_edit(role, Module.THOUGHTS)


def can_approve_thoughts(role: RoleLike) -> bool:
    return _as_role(role) in (Role.ADMIN, Role.EXECUTIVE_PRODUCER)


# ---- Delete access: admin only, confirmed with the shared secret ----

def can_delete(role: RoleLike) -> bool:
    """Delete is one global capability; the module never matters."""
    return is_admin(role)


def verify_delete_password(candidate: Optional[str]) -> bool:
    secret = settings.DELETE_PASSWORD
    if not candidate or not secret:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


def can_delete_with_password(role: RoleLike, candidate: Optional[str]) -> bool:
    return can_delete(role) and verify_delete_password(candidate)


validate_matrices()
