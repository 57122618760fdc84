"""Authentication Pydantic schemas for API validation."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ...config import settings

# bcrypt only looks at the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


class UserBase(BaseModel):
    """Fields shared by registration and responses."""

    email: EmailStr = Field(..., description="Email address, stored lowercased")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are case-insensitive identities."""
        return v.strip().lower()

    @field_validator("name", mode="after")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


class UserCreate(UserBase):
    """Registration request body."""

    password: str = Field(..., description="Plaintext password, never stored")

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < settings.password_min_length:
            raise ValueError(
                f"Password must be at least {settings.password_min_length} characters"
            )
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserLogin(BaseModel):
    """Login request body.

    The email is not syntax-checked here: a malformed email simply fails
    to match any user and gets the same InvalidCredentials response.
    """

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public user fields. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    created_at: str


class MessageResponse(BaseModel):
    """Plain acknowledgement response."""

    message: str
