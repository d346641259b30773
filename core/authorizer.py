# core/authorizer.py

from typing import Iterable, Optional, Tuple


Capability = Tuple[str, str]


class Authorizer:
    """
    One view of what a principal may do.

    Holds the principal's role names and the flattened (resource, action)
    capabilities of those roles. The server gate checks role names and, when
    ENFORCE_CAPABILITIES is on, capabilities; the dashboard client uses the
    same object to decide which routes to render.
    """

    ADMIN_ROLE = "admin"

    def __init__(
        self,
        roles: Iterable[str] = (),
        capabilities: Iterable[Capability] = (),
        is_active: bool = True,
    ):
        self.roles = frozenset(roles)
        self.capabilities = frozenset(capabilities)
        self.is_active = is_active

    @classmethod
    def from_grants(cls, roles: Iterable[dict], permissions: Iterable[dict], is_active: bool = True):
        """Build from resolver output (role dicts + permission dicts)."""
        return cls(
            roles=[r["name"] for r in roles if r.get("name")],
            capabilities=[(p["resource"], p["action"]) for p in permissions],
            is_active=is_active,
        )

    @classmethod
    def from_profile(cls, profile: Optional[dict]):
        """Build from a `/auth/profile` payload."""
        if not profile:
            return cls(is_active=False)
        return cls.from_grants(
            profile.get("roles") or [],
            profile.get("permissions") or [],
            is_active=profile.get("is_active", True),
        )

    def has_role(self, name: str) -> bool:
        return name in self.roles

    def has_any_role(self, names: Iterable[str]) -> bool:
        return any(self.has_role(n) for n in names)

    def has_capability(self, resource: str, action: str) -> bool:
        return (resource, action) in self.capabilities

    @property
    def is_admin(self) -> bool:
        return self.has_role(self.ADMIN_ROLE)

    def __repr__(self):
        return f"Authorizer(roles={sorted(self.roles)}, capabilities={len(self.capabilities)}, active={self.is_active})"
