from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# MEMBER STATUS
# -----------------------------------------------------
class MemberStatus(BaseStrEnum):
    """Enrollment state of a member."""

    active = "active"
    inactive = "inactive"
    pending = "pending"


# -----------------------------------------------------
# ACCOUNT STATUS
# -----------------------------------------------------
class AccountStatus(BaseStrEnum):
    """Lifecycle state of a member's account."""

    open = "open"
    closed = "closed"
    suspended = "suspended"
