"""Todo schemas for request validation and responses."""

from pydantic import BaseModel, Field, field_validator


class TodoBase(BaseModel):
    """Editable todo fields."""

    title: str = Field(..., min_length=1, max_length=200, description="Short title")
    description: str | None = Field(default=None, max_length=2000, description="Optional details")
    completed: bool = Field(default=False, description="Completion state")

    @field_validator("title", mode="after")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v


class TodoCreate(TodoBase):
    """Schema for creating a todo. The owner always comes from the session."""


class TodoUpdate(BaseModel):
    """Schema for partial updates. All fields optional."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    completed: bool | None = None

    @field_validator("title", mode="after")
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v


class TodoResponse(TodoBase):
    """Todo as returned by the API."""

    id: str
    owner_id: str
    created_at: str
    updated_at: str
