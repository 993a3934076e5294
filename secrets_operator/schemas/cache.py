"""Client cache triage schemas."""

from pydantic import BaseModel, Field


class CacheKeysResponse(BaseModel):
    """Response for GET /cache/keys."""

    count: int = Field(..., description="Number of cached clients")
    keys: list[str] = Field(default_factory=list, description="Cached client keys")
    clones: int = Field(default=0, description="How many of the keys are namespace clones")
