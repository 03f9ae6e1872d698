"""Pydantic models describing installer answers and API payloads."""
from pydantic import BaseModel, Field, field_validator


class DatabaseCredentials(BaseModel):
    """Answers to the database prompts."""

    host: str = ""
    port: int | None = Field(default=None, ge=1, le=65535)
    database: str = Field(min_length=1)
    username: str = ""
    password: str = ""
    prefix: str = Field(default="", pattern=r"^[A-Za-z0-9_]*$", max_length=16)

    @field_validator("port", mode="before")
    @classmethod
    def empty_port_is_default(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SiteDetails(BaseModel):
    """Answers to the site prompts."""

    name: str = Field(min_length=1, max_length=128)
    url: str = Field(pattern=r"^https?://\S+$")


class AdminAccount(BaseModel):
    """Answers to the administrator prompts."""

    name: str = Field(min_length=1, max_length=128)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$", max_length=96)
    username: str = Field(pattern=r"^[A-Za-z0-9_.-]+$", min_length=2, max_length=32)
    password: str = Field(min_length=6)


class SystemStatus(BaseModel):
    """Schema for the installation status API response."""

    installed: bool
    version: str | None = None
    default_location_id: int | None = None
