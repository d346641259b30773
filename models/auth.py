# models/auth.py

from pydantic import BaseModel


class PasswordValidationRequest(BaseModel):
    password: str


class PasswordUpdateRequest(BaseModel):
    new_password: str
    clear_needs_password_reset: bool = False
