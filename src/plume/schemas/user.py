"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Public view of a user embedded in posts and comments."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
