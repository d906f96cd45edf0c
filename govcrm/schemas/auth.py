"""Auth and user API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, field_validator

from govcrm.schemas.common import CamelModel, RowModel
from govcrm.utils.slug import tenant_key_for

Role = Literal["admin", "manager", "user"]


class RegisterRequest(CamelModel):
    """POST /api/auth/register request."""

    company_name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    @field_validator("company_name")
    @classmethod
    def company_name_has_key(cls, v: str) -> str:
        # The tenant key keeps only ASCII letters and digits
        if not tenant_key_for(v):
            raise ValueError("must contain ASCII letters or digits")
        return v.strip()


class RegisterResponse(CamelModel):
    message: str = "Registration successful"
    tenant_key: str
    tenant_id: int


class LoginRequest(CamelModel):
    """POST /api/auth/login request."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)
    tenant_key: str = Field(min_length=1, max_length=100)


class UserSummary(CamelModel):
    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    tenant_key: str


class LoginResponse(CamelModel):
    token: str
    user: UserSummary


class InviteUserRequest(CamelModel):
    """POST /api/users - admin creates a user in their tenant."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: Role = "user"


class UserRead(RowModel):
    id: int
    tenant_id: int
    email: str
    first_name: str | None
    last_name: str | None
    role: str
    is_active: bool
    last_login: datetime | None
    created_at: datetime
