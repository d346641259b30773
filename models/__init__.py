# -------------------------
# Enums
# -------------------------
from .enums import (
    MemberStatus,
    AccountStatus,
)

# -------------------------
# Membership Models
# -------------------------
from .member import MemberCreate, MemberUpdate
from .bank_account import BankAccountCreate, BankAccountUpdate
from .account_type import AccountTypeCreate, AccountTypeUpdate
from .account import AccountCreate, AccountUpdate

# -------------------------
# Access Control Models
# -------------------------
from .user import UserCreate, UserUpdate
from .role import RoleCreate, RoleUpdate
from .permission import PermissionCreate, PermissionUpdate

# -------------------------
# Auth Models
# -------------------------
from .auth import PasswordValidationRequest, PasswordUpdateRequest
