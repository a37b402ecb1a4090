"""Backend API client configuration models."""

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """Configuration for the remote master-data API."""

    base_url: str = Field(
        default="http://localhost:3000/api/be",
        description="Base URL of the backend API",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    token: str | None = Field(
        default=None,
        description="Bearer token attached to every request",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be joined with a leading slash."""
        return v.rstrip("/")
