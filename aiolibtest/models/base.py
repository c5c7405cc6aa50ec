"""Base model configuration for validated configuration objects."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model: immutable, rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
